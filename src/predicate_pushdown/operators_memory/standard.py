"""Standard comparison operators: =, <=>, <, <=, >, >=."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..evaluator import LeafOperator
from ..operators import PredicateKind

if TYPE_CHECKING:
    from ..fields import Comparator


class EqualOperator(LeafOperator):
    @property
    def name(self) -> PredicateKind:
        return PredicateKind.EQ

    def evaluate(
        self, field_value: Any, literals: tuple[Any, ...], comparator: Comparator
    ) -> bool:
        return bool(field_value == literals[0])


class NullSafeEqualOperator(LeafOperator):
    """Equality where two nulls are equal and one null never is."""

    null_tolerant = True

    @property
    def name(self) -> PredicateKind:
        return PredicateKind.NULL_SAFE_EQ

    def evaluate(
        self, field_value: Any, literals: tuple[Any, ...], comparator: Comparator
    ) -> bool:
        literal = literals[0]
        if field_value is None or literal is None:
            return field_value is None and literal is None
        return bool(field_value == literal)


class LessThanOperator(LeafOperator):
    @property
    def name(self) -> PredicateKind:
        return PredicateKind.LT

    def evaluate(
        self, field_value: Any, literals: tuple[Any, ...], comparator: Comparator
    ) -> bool:
        return comparator(field_value, literals[0]) < 0


class LessEqualOperator(LeafOperator):
    @property
    def name(self) -> PredicateKind:
        return PredicateKind.LE

    def evaluate(
        self, field_value: Any, literals: tuple[Any, ...], comparator: Comparator
    ) -> bool:
        return comparator(field_value, literals[0]) <= 0


class GreaterThanOperator(LeafOperator):
    @property
    def name(self) -> PredicateKind:
        return PredicateKind.GT

    def evaluate(
        self, field_value: Any, literals: tuple[Any, ...], comparator: Comparator
    ) -> bool:
        return comparator(field_value, literals[0]) > 0


class GreaterEqualOperator(LeafOperator):
    @property
    def name(self) -> PredicateKind:
        return PredicateKind.GE

    def evaluate(
        self, field_value: Any, literals: tuple[Any, ...], comparator: Comparator
    ) -> bool:
        return comparator(field_value, literals[0]) >= 0
