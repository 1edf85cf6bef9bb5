"""
Construction instructions.

Every builder call is recorded as one immutable :class:`Instruction`.
The same ordered program drives the evaluation-tree assembler and the
pruning-descriptor builder, so the two cannot receive different calls.

An instruction's opcode value is the name of the method it invokes on
a :class:`~predicate_pushdown.search_argument.SearchArgumentBuilder`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from .exceptions import ConstructionError

if TYPE_CHECKING:
    from .fields import Field
    from .search_argument import SearchArgumentBuilder


class Opcode(str, Enum):
    START_AND = "start_and"
    START_OR = "start_or"
    START_NOT = "start_not"
    END = "end"
    EQUALS = "equals"
    NULL_SAFE_EQUALS = "null_safe_equals"
    LESS_THAN = "less_than"
    LESS_THAN_EQUALS = "less_than_equals"
    GREATER_THAN = "greater_than"
    GREATER_THAN_EQUALS = "greater_than_equals"
    BETWEEN = "between"
    IN = "in_"
    IS_NULL = "is_null"


# Number of literals each leaf opcode takes; IN takes any number.
_LITERAL_COUNT: dict[Opcode, int] = {
    Opcode.EQUALS: 1,
    Opcode.NULL_SAFE_EQUALS: 1,
    Opcode.LESS_THAN: 1,
    Opcode.LESS_THAN_EQUALS: 1,
    Opcode.GREATER_THAN: 1,
    Opcode.GREATER_THAN_EQUALS: 1,
    Opcode.BETWEEN: 2,
    Opcode.IS_NULL: 0,
}

_STRUCTURAL = frozenset({Opcode.START_AND, Opcode.START_OR, Opcode.START_NOT, Opcode.END})

# Opcodes whose literals must not be null; they would never match.
_NON_NULL_LITERALS = frozenset(
    {
        Opcode.EQUALS,
        Opcode.LESS_THAN,
        Opcode.LESS_THAN_EQUALS,
        Opcode.GREATER_THAN,
        Opcode.GREATER_THAN_EQUALS,
        Opcode.BETWEEN,
    }
)


@dataclass(frozen=True)
class Instruction:
    op: Opcode
    field: Field | None = None
    literals: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if self.op in _STRUCTURAL:
            if self.field is not None or self.literals:
                raise ConstructionError(f"{self.op.value}() takes no arguments")
            return
        if self.field is None:
            raise ConstructionError(f"{self.op.value}() requires a field")
        expected = _LITERAL_COUNT.get(self.op)
        if expected is not None and len(self.literals) != expected:
            raise ConstructionError(
                f"{self.op.value}() takes {expected} literal(s), "
                f"got {len(self.literals)}",
                path=self.field.name,
            )
        if self.op in _NON_NULL_LITERALS and any(v is None for v in self.literals):
            raise ConstructionError(
                f"{self.op.value}() with a null literal never matches; "
                f"use null_safe_equals() or is_null()",
                path=self.field.name,
            )

    def apply_to(self, sink: SearchArgumentBuilder) -> Any:
        """Invoke the matching operation on *sink*."""
        method = getattr(sink, self.op.value)
        if self.field is None:
            return method()
        return method(self.field, *self.literals)

    def __str__(self) -> str:
        args = [] if self.field is None else [self.field.name]
        args.extend(repr(v) for v in self.literals)
        return f"{self.op.value}({', '.join(args)})"


def replay(program: Iterable[Instruction], sink: SearchArgumentBuilder) -> None:
    """Apply every instruction of *program* to *sink*, in order."""
    for instruction in program:
        instruction.apply_to(sink)
