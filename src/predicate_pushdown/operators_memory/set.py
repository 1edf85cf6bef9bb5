"""Set and range operators: in, between."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..config import BetweenPolicy
from ..evaluator import LeafOperator
from ..operators import PredicateKind

if TYPE_CHECKING:
    from ..fields import Comparator


class InOperator(LeafOperator):
    """Membership by equality; a null value matches only a null member."""

    null_tolerant = True

    @property
    def name(self) -> PredicateKind:
        return PredicateKind.IN

    def evaluate(
        self, field_value: Any, literals: tuple[Any, ...], comparator: Comparator
    ) -> bool:
        if field_value is None:
            return any(candidate is None for candidate in literals)
        return any(field_value == candidate for candidate in literals)


class BetweenOperator(LeafOperator):
    """
    Range check against ``(lower, upper)``.

    ``BetweenPolicy.INCLUSIVE`` matches ``lower <= value <= upper``.
    ``BetweenPolicy.LEGACY_EITHER_BOUND`` matches when the value is above
    the lower bound *or* below the upper bound, which accepts every value
    whenever ``lower < upper``.
    """

    def __init__(self, policy: BetweenPolicy = BetweenPolicy.INCLUSIVE) -> None:
        self.policy = policy

    @property
    def name(self) -> PredicateKind:
        return PredicateKind.BETWEEN

    def evaluate(
        self, field_value: Any, literals: tuple[Any, ...], comparator: Comparator
    ) -> bool:
        lower, upper = literals
        if self.policy is BetweenPolicy.LEGACY_EITHER_BOUND:
            return comparator(field_value, lower) > 0 or comparator(field_value, upper) < 0
        return comparator(field_value, lower) >= 0 and comparator(field_value, upper) <= 0
