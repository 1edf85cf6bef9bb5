from enum import Enum


class PredicateKind(str, Enum):
    """Tags for every predicate node in an evaluation tree."""

    # Field comparisons
    EQ = "="
    NULL_SAFE_EQ = "<=>"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    BETWEEN = "between"
    IN = "in"

    # Null checks
    IS_NULL = "is_null"

    # Composites
    AND = "and"
    OR = "or"
    NOT = "not"
    IDENTITY = "identity"


LEAF_KINDS: frozenset[PredicateKind] = frozenset(
    {
        PredicateKind.EQ,
        PredicateKind.NULL_SAFE_EQ,
        PredicateKind.LT,
        PredicateKind.LE,
        PredicateKind.GT,
        PredicateKind.GE,
        PredicateKind.BETWEEN,
        PredicateKind.IN,
        PredicateKind.IS_NULL,
    }
)
LIST_KINDS: frozenset[PredicateKind] = frozenset({PredicateKind.AND, PredicateKind.OR})
SINGLETON_KINDS: frozenset[PredicateKind] = frozenset(
    {PredicateKind.NOT, PredicateKind.IDENTITY}
)

# Minimum number of children each composite needs once it is closed.
MIN_CHILDREN: dict[PredicateKind, int] = {
    PredicateKind.AND: 2,
    PredicateKind.OR: 2,
    PredicateKind.NOT: 1,
    PredicateKind.IDENTITY: 1,
}
