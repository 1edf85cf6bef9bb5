"""
Fluent builder for push-down filters.

Example::

    push_down = (
        PushDownFilterBuilder()
        .start_and()
            .equals("status", "active")
            .greater_than("age", 18)
        .end()
        .build()
    )
    # → AND(status = "active", age > 18)

    push_down = (
        PushDownFilterBuilder(MongoSearchArgumentBuilder())
        .start_or()
            .in_("role", "admin", "superuser")
            .start_not()
                .is_null("manager")
            .end()
        .end()
        .build()
    )
    # → OR(role in (admin, superuser), NOT(manager is null))
    # push_down.search_argument is the matching MongoDB filter document

Every call records one :class:`Instruction`.  The instruction is applied
to the evaluation tree straight away, so misuse fails at the call that
causes it; ``build()`` replays the recorded program into the
pruning-descriptor builder.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .assembler import TreeAssembler
from .config import BetweenPolicy, PushDownSettings
from .exceptions import ConstructionError
from .fields import as_fields
from .filter import PushDownFilter
from .instructions import Instruction, Opcode, replay
from .operators import PredicateKind
from .operators_memory import build_default_registry
from .operators_memory.set import BetweenOperator
from .search_argument import RecordingSearchArgumentBuilder

if TYPE_CHECKING:
    from .evaluator import LeafOperatorRegistry
    from .fields import Field, Fields, RowSchema
    from .search_argument import SearchArgumentBuilder

logger = logging.getLogger("predicate_pushdown.builder")


class PushDownFilterBuilder:
    """
    Stack-driven builder for a filter and its pruning descriptor.

    ``start_and()`` / ``start_or()`` / ``start_not()`` open a composite
    that receives the following calls until the matching ``end()``.
    Leaf calls take a field reference: a name (resolved through
    *schema* when given), a :class:`Field`, or a :class:`Fields` holding
    exactly one field.

    *settings* configure the default operator registry.  A *registry*
    passed in decides evaluation itself, including the ``between`` policy.

    A builder builds once; after a failed call it must be discarded.
    """

    def __init__(
        self,
        search_argument_builder: SearchArgumentBuilder | None = None,
        *,
        schema: RowSchema | None = None,
        settings: PushDownSettings | None = None,
        registry: LeafOperatorRegistry | None = None,
    ) -> None:
        self._settings = settings if settings is not None else PushDownSettings()
        # Predicates keep a frozen copy so later registry changes cannot
        # alter a built filter.
        self._registry = (
            registry if registry is not None else build_default_registry(self._settings)
        ).frozen()
        self._schema = schema
        self._search_argument_builder = (
            search_argument_builder
            if search_argument_builder is not None
            else RecordingSearchArgumentBuilder()
        )
        self._assembler = TreeAssembler(self._registry)
        self._program: list[Instruction] = []
        self._built = False

    @property
    def depth(self) -> int:
        """Number of open composites, including the root."""
        return self._assembler.depth

    @property
    def instructions(self) -> tuple[Instruction, ...]:
        return tuple(self._program)

    # -- grouping ------------------------------------------------------------

    def start_and(self) -> PushDownFilterBuilder:
        """Open an AND composite.  Close with ``end()``."""
        return self._emit(Instruction(Opcode.START_AND))

    def start_or(self) -> PushDownFilterBuilder:
        """Open an OR composite.  Close with ``end()``."""
        return self._emit(Instruction(Opcode.START_OR))

    def start_not(self) -> PushDownFilterBuilder:
        """Open a NOT composite (single child).  Close with ``end()``."""
        return self._emit(Instruction(Opcode.START_NOT))

    def end(self) -> PushDownFilterBuilder:
        """Validate and close the innermost open composite."""
        return self._emit(Instruction(Opcode.END))

    # -- leaves --------------------------------------------------------------

    def equals(self, fields: str | Field | Fields, literal: Any) -> PushDownFilterBuilder:
        return self._leaf(Opcode.EQUALS, fields, literal)

    def null_safe_equals(
        self, fields: str | Field | Fields, literal: Any
    ) -> PushDownFilterBuilder:
        return self._leaf(Opcode.NULL_SAFE_EQUALS, fields, literal)

    def less_than(self, fields: str | Field | Fields, literal: Any) -> PushDownFilterBuilder:
        return self._leaf(Opcode.LESS_THAN, fields, literal)

    def less_than_equals(
        self, fields: str | Field | Fields, literal: Any
    ) -> PushDownFilterBuilder:
        return self._leaf(Opcode.LESS_THAN_EQUALS, fields, literal)

    def greater_than(
        self, fields: str | Field | Fields, literal: Any
    ) -> PushDownFilterBuilder:
        return self._leaf(Opcode.GREATER_THAN, fields, literal)

    def greater_than_equals(
        self, fields: str | Field | Fields, literal: Any
    ) -> PushDownFilterBuilder:
        return self._leaf(Opcode.GREATER_THAN_EQUALS, fields, literal)

    def between(
        self, fields: str | Field | Fields, lower: Any, upper: Any
    ) -> PushDownFilterBuilder:
        return self._leaf(Opcode.BETWEEN, fields, lower, upper)

    def in_(self, fields: str | Field | Fields, *literals: Any) -> PushDownFilterBuilder:
        return self._leaf(Opcode.IN, fields, *literals)

    def is_null(self, fields: str | Field | Fields) -> PushDownFilterBuilder:
        return self._leaf(Opcode.IS_NULL, fields)

    # -- build ---------------------------------------------------------------

    def build(self) -> PushDownFilter:
        """
        Finalise the filter and its pruning descriptor.

        Raises:
            ConstructionError: If composites are still open or the builder
                was already built.
            ValidationError: If no predicate was added.
        """
        self._check_not_built()
        root = self._assembler.build()
        self._built = True

        program = tuple(self._program)
        replay(program, self._search_argument_builder)
        search_argument = self._search_argument_builder.build()

        between = self._registry.get(PredicateKind.BETWEEN)
        if (
            isinstance(between, BetweenOperator)
            and between.policy is BetweenPolicy.LEGACY_EITHER_BOUND
            and any(i.op is Opcode.BETWEEN for i in program)
        ):
            logger.warning(
                "between() under %s matches rows the pruning descriptor's "
                "range would skip",
                between.policy.value,
            )
        logger.debug("Built push-down filter from %d instruction(s)", len(program))
        return PushDownFilter(root, search_argument, program)

    # -- internals -----------------------------------------------------------

    def _leaf(
        self, op: Opcode, fields: str | Field | Fields, *literals: Any
    ) -> PushDownFilterBuilder:
        self._check_not_built()
        field = as_fields(fields, self._schema).single()
        return self._emit(Instruction(op, field, literals))

    def _emit(self, instruction: Instruction) -> PushDownFilterBuilder:
        self._check_not_built()
        instruction.apply_to(self._assembler)
        self._program.append(instruction)
        logger.debug("Emitted %s at depth %d", instruction, self._assembler.depth)
        return self

    def _check_not_built(self) -> None:
        if self._built:
            raise ConstructionError("Builder already built; start a new builder")
