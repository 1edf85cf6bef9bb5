"""
In-memory operator implementations.

Provides concrete LeafOperator subclasses for each leaf PredicateKind
and a factory function to create registries.

Usage::

    from predicate_pushdown.operators_memory import build_default_registry

    registry = build_default_registry()
    result = registry.evaluate(PredicateKind.EQ, actual, (expected,), natural_order)
"""

from __future__ import annotations

from ..config import PushDownSettings
from ..evaluator import LeafOperatorRegistry
from .null import IsNullOperator
from .set import BetweenOperator, InOperator
from .standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NullSafeEqualOperator,
)


def build_default_registry(
    settings: PushDownSettings | None = None,
) -> LeafOperatorRegistry:
    """
    Create a registry with all built-in operators.

    The null policy and the between policy are taken from *settings*
    (defaults when omitted).

    Example:
        >>> registry = build_default_registry()
        >>> registry.evaluate(PredicateKind.EQ, 5, (5,), natural_order)
        True
    """
    settings = settings if settings is not None else PushDownSettings()
    registry = LeafOperatorRegistry(null_policy=settings.null_policy)
    registry.register_all(
        # Standard comparison
        EqualOperator(),
        NullSafeEqualOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        # Set / range
        InOperator(),
        BetweenOperator(settings.between_policy),
        # Null
        IsNullOperator(),
    )
    return registry


__all__ = [
    "build_default_registry",
    "LeafOperatorRegistry",
]
