"""TreeAssembler — builds the immutable evaluation tree from instructions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .exceptions import ConstructionError
from .operators import PredicateKind
from .predicates import CompositePredicate, FieldPredicate, OpenComposite

if TYPE_CHECKING:
    from .evaluator import LeafOperatorRegistry
    from .fields import Field

logger = logging.getLogger("predicate_pushdown.assembler")


class TreeAssembler:
    """
    Instruction sink that owns the stack of open composites.

    The stack starts with the IDENTITY root.  Opening a composite appends
    it to the current top before pushing it, so every node is reachable
    from the root as soon as it exists.  All nesting and arity rules are
    enforced here, at the call that breaks them.
    """

    def __init__(self, registry: LeafOperatorRegistry) -> None:
        self._registry = registry
        self._root = OpenComposite(PredicateKind.IDENTITY)
        self._stack: list[OpenComposite] = [self._root]

    @property
    def depth(self) -> int:
        """Number of open composites, including the root."""
        return len(self._stack)

    # -- grouping ------------------------------------------------------------

    def start_and(self) -> None:
        self._open(PredicateKind.AND)

    def start_or(self) -> None:
        self._open(PredicateKind.OR)

    def start_not(self) -> None:
        self._open(PredicateKind.NOT)

    def end(self) -> None:
        if len(self._stack) == 1:
            raise ConstructionError(
                "end() called without a matching start", path=self._root.path
            )
        top = self._stack[-1]
        top.close()
        self._stack.pop()
        logger.debug("Closed '%s' at %s", top.kind.value, top.path)

    # -- leaves --------------------------------------------------------------

    def equals(self, field: Field, literal: Any) -> None:
        self._leaf(PredicateKind.EQ, field, (literal,))

    def null_safe_equals(self, field: Field, literal: Any) -> None:
        self._leaf(PredicateKind.NULL_SAFE_EQ, field, (literal,))

    def less_than(self, field: Field, literal: Any) -> None:
        self._leaf(PredicateKind.LT, field, (literal,))

    def less_than_equals(self, field: Field, literal: Any) -> None:
        self._leaf(PredicateKind.LE, field, (literal,))

    def greater_than(self, field: Field, literal: Any) -> None:
        self._leaf(PredicateKind.GT, field, (literal,))

    def greater_than_equals(self, field: Field, literal: Any) -> None:
        self._leaf(PredicateKind.GE, field, (literal,))

    def between(self, field: Field, lower: Any, upper: Any) -> None:
        self._leaf(PredicateKind.BETWEEN, field, (lower, upper))

    def in_(self, field: Field, *literals: Any) -> None:
        self._leaf(PredicateKind.IN, field, literals)

    def is_null(self, field: Field) -> None:
        self._leaf(PredicateKind.IS_NULL, field, ())

    # -- build ---------------------------------------------------------------

    def build(self) -> CompositePredicate:
        """
        Close the root and return the finished tree.

        Raises:
            ConstructionError: If composites other than the root are still open.
            ValidationError: If the root does not hold exactly one predicate.
        """
        if len(self._stack) != 1:
            raise ConstructionError(
                f"{len(self._stack) - 1} composite(s) still open; "
                f"call end() before build()",
                path=self._stack[-1].path,
            )
        return self._root.close()

    # -- internals -----------------------------------------------------------

    def _open(self, kind: PredicateKind) -> None:
        parent = self._stack[-1]
        child = OpenComposite(kind, parent.child_path(kind))
        parent.add(child)
        self._stack.append(child)

    def _leaf(self, kind: PredicateKind, field: Field, literals: tuple[Any, ...]) -> None:
        self._stack[-1].add(FieldPredicate(kind, field, literals, self._registry))
