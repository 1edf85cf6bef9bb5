"""Tests for in-memory leaf operators and the operator registry."""

from __future__ import annotations

import pytest

from predicate_pushdown import (
    BetweenPolicy,
    ConstructionError,
    EvaluationError,
    LeafOperatorRegistry,
    NullPolicy,
    OperatorNotFoundError,
    PredicateKind,
    PushDownSettings,
    natural_order,
)
from predicate_pushdown.operators_memory import build_default_registry
from predicate_pushdown.operators_memory.null import IsNullOperator
from predicate_pushdown.operators_memory.set import BetweenOperator, InOperator
from predicate_pushdown.operators_memory.standard import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    LessEqualOperator,
    LessThanOperator,
    NullSafeEqualOperator,
)


def reverse_order(left, right) -> int:
    return natural_order(right, left)


# ══════════════════════════════════════════════════════════════════════
# Standard comparison operators tests
# ══════════════════════════════════════════════════════════════════════


class TestStandardOperators:
    """Test standard comparison operators (EQ, NULL_SAFE_EQ, LT, LE, GT, GE)."""

    def test_equal_operator(self) -> None:
        op = EqualOperator()
        assert op.evaluate(42, (42,), natural_order) is True
        assert op.evaluate("test", ("test",), natural_order) is True
        assert op.evaluate(42, (43,), natural_order) is False
        assert op.evaluate("test", ("TEST",), natural_order) is False

    def test_null_safe_equal_operator(self) -> None:
        """Two nulls are equal; exactly one null never is."""
        op = NullSafeEqualOperator()
        assert op.null_tolerant is True
        assert op.evaluate(None, (None,), natural_order) is True
        assert op.evaluate(None, (5,), natural_order) is False
        assert op.evaluate(5, (None,), natural_order) is False
        assert op.evaluate(5, (5,), natural_order) is True
        assert op.evaluate(5, (6,), natural_order) is False

    def test_less_than_operator(self) -> None:
        op = LessThanOperator()
        assert op.evaluate(50, (100,), natural_order) is True
        assert op.evaluate(100, (50,), natural_order) is False
        assert op.evaluate(50, (50,), natural_order) is False

    def test_less_equal_operator(self) -> None:
        op = LessEqualOperator()
        assert op.evaluate(30, (50,), natural_order) is True
        assert op.evaluate(50, (50,), natural_order) is True
        assert op.evaluate(100, (50,), natural_order) is False

    def test_greater_than_operator(self) -> None:
        op = GreaterThanOperator()
        assert op.evaluate(100, (50,), natural_order) is True
        assert op.evaluate(50, (100,), natural_order) is False
        assert op.evaluate(50, (50,), natural_order) is False

    def test_greater_equal_operator(self) -> None:
        op = GreaterEqualOperator()
        assert op.evaluate(100, (50,), natural_order) is True
        assert op.evaluate(50, (50,), natural_order) is True
        assert op.evaluate(30, (50,), natural_order) is False

    def test_ordering_uses_field_comparator(self) -> None:
        """Ordering comes from the comparator, not from the values."""
        assert LessThanOperator().evaluate(100, (50,), reverse_order) is True
        assert GreaterThanOperator().evaluate(100, (50,), reverse_order) is False

    def test_operator_names(self) -> None:
        assert EqualOperator().name == PredicateKind.EQ
        assert NullSafeEqualOperator().name == PredicateKind.NULL_SAFE_EQ
        assert LessThanOperator().name == PredicateKind.LT
        assert LessEqualOperator().name == PredicateKind.LE
        assert GreaterThanOperator().name == PredicateKind.GT
        assert GreaterEqualOperator().name == PredicateKind.GE


# ══════════════════════════════════════════════════════════════════════
# Set / range / null operators tests
# ══════════════════════════════════════════════════════════════════════


class TestInOperator:
    def test_membership_by_equality(self) -> None:
        op = InOperator()
        assert op.evaluate(2, (1, 2, 3), natural_order) is True
        assert op.evaluate(4, (1, 2, 3), natural_order) is False

    def test_empty_set_never_matches(self) -> None:
        assert InOperator().evaluate(1, (), natural_order) is False

    def test_null_matches_only_null_member(self) -> None:
        op = InOperator()
        assert op.null_tolerant is True
        assert op.evaluate(None, (1, 2), natural_order) is False
        assert op.evaluate(None, (1, None), natural_order) is True


class TestBetweenOperator:
    def test_inclusive_policy(self) -> None:
        op = BetweenOperator(BetweenPolicy.INCLUSIVE)
        assert op.evaluate(15, (10, 20), natural_order) is True
        assert op.evaluate(10, (10, 20), natural_order) is True
        assert op.evaluate(20, (10, 20), natural_order) is True
        assert op.evaluate(9, (10, 20), natural_order) is False
        assert op.evaluate(25, (10, 20), natural_order) is False

    def test_legacy_either_bound_policy(self) -> None:
        """Above the lower bound or below the upper bound."""
        op = BetweenOperator(BetweenPolicy.LEGACY_EITHER_BOUND)
        assert op.evaluate(15, (10, 20), natural_order) is True
        assert op.evaluate(10, (10, 20), natural_order) is True
        assert op.evaluate(25, (10, 20), natural_order) is True
        assert op.evaluate(5, (10, 20), natural_order) is True
        # only an inverted range can reject anything
        assert op.evaluate(15, (20, 10), natural_order) is False

    def test_default_policy_is_inclusive(self) -> None:
        assert BetweenOperator().policy is BetweenPolicy.INCLUSIVE


class TestIsNullOperator:
    def test_is_null(self) -> None:
        op = IsNullOperator()
        assert op.evaluate(None, (), natural_order) is True
        assert op.evaluate(0, (), natural_order) is False
        assert op.evaluate("", (), natural_order) is False


# ══════════════════════════════════════════════════════════════════════
# Registry tests
# ══════════════════════════════════════════════════════════════════════


class TestRegistry:
    def test_default_registry_supports_every_leaf(self) -> None:
        registry = build_default_registry()
        assert registry.supported_operators == {
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

    def test_registry_takes_policies_from_settings(self) -> None:
        registry = build_default_registry(
            PushDownSettings(
                between_policy=BetweenPolicy.LEGACY_EITHER_BOUND,
                null_policy=NullPolicy.RAISE,
            )
        )
        assert registry.null_policy is NullPolicy.RAISE
        assert registry.evaluate(PredicateKind.BETWEEN, 25, (10, 20), natural_order)

    def test_null_no_match_policy(self) -> None:
        registry = build_default_registry()
        for kind, literals in [
            (PredicateKind.EQ, (None,)),
            (PredicateKind.LT, (5,)),
            (PredicateKind.LE, (5,)),
            (PredicateKind.GT, (5,)),
            (PredicateKind.GE, (5,)),
            (PredicateKind.BETWEEN, (1, 9)),
        ]:
            assert registry.evaluate(kind, None, literals, natural_order) is False

    def test_null_raise_policy(self) -> None:
        registry = build_default_registry(PushDownSettings(null_policy=NullPolicy.RAISE))
        with pytest.raises(EvaluationError) as exc_info:
            registry.evaluate(PredicateKind.LT, None, (5,), natural_order, field_name="age")
        assert exc_info.value.field == "age"
        assert exc_info.value.kind == "<"

    def test_null_tolerant_operators_ignore_raise_policy(self) -> None:
        registry = build_default_registry(PushDownSettings(null_policy=NullPolicy.RAISE))
        assert registry.evaluate(PredicateKind.IS_NULL, None, (), natural_order) is True
        assert registry.evaluate(PredicateKind.NULL_SAFE_EQ, None, (None,), natural_order)
        assert registry.evaluate(PredicateKind.IN, None, (1,), natural_order) is False

    def test_unregistered_operator(self) -> None:
        registry = LeafOperatorRegistry()
        registry.register(EqualOperator())
        assert registry.has(PredicateKind.EQ)
        registry.unregister(PredicateKind.EQ)
        assert registry.get(PredicateKind.EQ) is None
        with pytest.raises(OperatorNotFoundError):
            registry.evaluate(PredicateKind.EQ, 1, (1,), natural_order)

    def test_frozen_copy_is_read_only(self) -> None:
        registry = build_default_registry()
        frozen = registry.frozen()
        assert frozen.is_frozen and not registry.is_frozen
        with pytest.raises(ConstructionError, match="frozen"):
            frozen.register(EqualOperator())
        with pytest.raises(ConstructionError, match="frozen"):
            frozen.unregister(PredicateKind.EQ)

    def test_frozen_copy_is_detached(self) -> None:
        registry = build_default_registry(PushDownSettings(null_policy=NullPolicy.RAISE))
        frozen = registry.frozen()
        registry.unregister(PredicateKind.EQ)
        assert frozen.has(PredicateKind.EQ)
        assert frozen.null_policy is NullPolicy.RAISE
        assert frozen.evaluate(PredicateKind.EQ, 5, (5,), natural_order) is True
