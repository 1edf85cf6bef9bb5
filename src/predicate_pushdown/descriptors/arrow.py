"""
pyarrow dataset expressions as pruning descriptors.

The built expression can be passed as ``filter=`` to a
``pyarrow.dataset`` scan, which uses Parquet row-group statistics to
skip row-groups before rows are read.

Arrow comparisons against a null yield null, and ``~null`` is null, so
a plain translation would drop null rows that the evaluator keeps under
NOT.  Every comparison that does not accept nulls is therefore guarded
with ``is_valid()``: a null value makes it false, as in the evaluator's
default null policy.

Requires the ``arrow`` extra.
"""

from __future__ import annotations

import operator
from functools import reduce
from typing import TYPE_CHECKING, Any

import pyarrow.compute as pc

from ..exceptions import DescriptorError
from ..operators import PredicateKind
from ..search_argument import ExpressionBuilder

if TYPE_CHECKING:
    from ..fields import Field


class ArrowSearchArgumentBuilder(ExpressionBuilder[pc.Expression]):
    """Builds a ``pyarrow.compute.Expression``."""

    def _leaf(
        self, kind: PredicateKind, field: Field, literals: tuple[Any, ...]
    ) -> pc.Expression:
        ref = pc.field(field.name)
        if kind is PredicateKind.IS_NULL:
            return ref.is_null()
        if kind is PredicateKind.NULL_SAFE_EQ and literals[0] is None:
            return ref.is_null()
        if kind is PredicateKind.IN:
            members = [v for v in literals if v is not None]
            if not members:
                return ref.is_null() if literals else pc.scalar(False)
            if len(members) < len(literals):
                return ref.isin(members) | ref.is_null()
            return ref.isin(members) & ref.is_valid()
        return self._compare(kind, ref, literals) & ref.is_valid()

    def _compare(
        self, kind: PredicateKind, ref: pc.Expression, literals: tuple[Any, ...]
    ) -> pc.Expression:
        if kind in (PredicateKind.EQ, PredicateKind.NULL_SAFE_EQ):
            return ref == literals[0]
        if kind is PredicateKind.LT:
            return ref < literals[0]
        if kind is PredicateKind.LE:
            return ref <= literals[0]
        if kind is PredicateKind.GT:
            return ref > literals[0]
        if kind is PredicateKind.GE:
            return ref >= literals[0]
        if kind is PredicateKind.BETWEEN:
            lo, hi = literals
            return (ref >= lo) & (ref <= hi)
        raise DescriptorError(f"No arrow expression for '{kind.value}'")

    def _combine(
        self, kind: PredicateKind, children: list[pc.Expression]
    ) -> pc.Expression:
        if kind is PredicateKind.AND:
            return reduce(operator.and_, children)
        if kind is PredicateKind.OR:
            return reduce(operator.or_, children)
        if kind is PredicateKind.NOT:
            return ~children[0]
        raise DescriptorError(f"No arrow expression for '{kind.value}' groups")
