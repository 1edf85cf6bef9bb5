"""Null check operator: is_null."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..evaluator import LeafOperator
from ..operators import PredicateKind

if TYPE_CHECKING:
    from ..fields import Comparator


class IsNullOperator(LeafOperator):
    null_tolerant = True

    @property
    def name(self) -> PredicateKind:
        return PredicateKind.IS_NULL

    def evaluate(
        self, field_value: Any, _literals: tuple[Any, ...], _comparator: Comparator
    ) -> bool:
        return field_value is None
