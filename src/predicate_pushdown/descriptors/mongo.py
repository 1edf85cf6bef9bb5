"""MongoDB filter documents as pruning descriptors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import DescriptorError
from ..operators import PredicateKind
from ..search_argument import ExpressionBuilder

if TYPE_CHECKING:
    from ..fields import Field

_MONGO_OP_MAP: dict[PredicateKind, str] = {
    PredicateKind.EQ: "$eq",
    PredicateKind.GT: "$gt",
    PredicateKind.GE: "$gte",
    PredicateKind.LT: "$lt",
    PredicateKind.LE: "$lte",
}

_MONGO_GROUP_MAP: dict[PredicateKind, str] = {
    PredicateKind.AND: "$and",
    PredicateKind.OR: "$or",
    PredicateKind.NOT: "$nor",
}


def _is_null(name: str) -> dict[str, Any]:
    return {"$or": [{name: {"$exists": False}}, {name: {"$eq": None}}]}


class MongoSearchArgumentBuilder(ExpressionBuilder[dict[str, Any]]):
    """Builds a MongoDB query document for server-side filtering."""

    def _leaf(
        self, kind: PredicateKind, field: Field, literals: tuple[Any, ...]
    ) -> dict[str, Any]:
        name = field.name
        mongo_op = _MONGO_OP_MAP.get(kind)
        if mongo_op:
            return {name: {mongo_op: literals[0]}}
        if kind is PredicateKind.NULL_SAFE_EQ:
            if literals[0] is None:
                return _is_null(name)
            return {name: {"$eq": literals[0]}}
        if kind is PredicateKind.BETWEEN:
            lo, hi = literals
            return {"$and": [{name: {"$gte": lo}}, {name: {"$lte": hi}}]}
        if kind is PredicateKind.IN:
            return {name: {"$in": list(literals)}}
        if kind is PredicateKind.IS_NULL:
            return _is_null(name)
        raise DescriptorError(f"No MongoDB form for '{kind.value}'")

    def _combine(
        self, kind: PredicateKind, children: list[dict[str, Any]]
    ) -> dict[str, Any]:
        group_op = _MONGO_GROUP_MAP.get(kind)
        if group_op is None:
            raise DescriptorError(f"No MongoDB form for '{kind.value}' groups")
        return {group_op: children}
