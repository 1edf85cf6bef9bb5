"""
In-memory leaf evaluation strategy.

Provides the LeafOperator protocol and a registry that maps each leaf
PredicateKind → evaluation strategy, applying the configured null policy
before a strategy sees a null value.

New operators are added by subclassing LeafOperator and registering
via ``register()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .config import NullPolicy
from .exceptions import ConstructionError, EvaluationError, OperatorNotFoundError

if TYPE_CHECKING:
    from .fields import Comparator
    from .operators import PredicateKind


class LeafOperator(ABC):
    """
    Strategy interface for evaluating one kind of field predicate.

    Each operator is an isolated class with a single ``evaluate`` method.
    Operators that handle null field values themselves set
    ``null_tolerant``; all others never see a null.
    """

    null_tolerant: bool = False

    @property
    @abstractmethod
    def name(self) -> PredicateKind:
        """The predicate kind this strategy handles."""
        ...

    @abstractmethod
    def evaluate(
        self,
        field_value: Any,
        literals: tuple[Any, ...],
        comparator: Comparator,
    ) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: The value read from the row.
            literals: The literal(s) the predicate was built with.
            comparator: The field's three-way comparator.

        Returns:
            True if the row's value satisfies the predicate.
        """
        ...


class LeafOperatorRegistry:
    """
    Registry of LeafOperator instances keyed by PredicateKind.

    Usage::

        registry = LeafOperatorRegistry(null_policy=NullPolicy.NO_MATCH)
        registry.register(EqualOperator())

        result = registry.evaluate(PredicateKind.EQ, actual, (expected,), natural_order)
    """

    def __init__(self, null_policy: NullPolicy = NullPolicy.NO_MATCH) -> None:
        self._operators: dict[PredicateKind, LeafOperator] = {}
        self._null_policy = null_policy
        self._frozen = False

    @property
    def null_policy(self) -> NullPolicy:
        return self._null_policy

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def frozen(self) -> LeafOperatorRegistry:
        """
        Return a read-only copy of this registry.

        The copy keeps the current operators and null policy; later
        changes to this registry do not reach it.
        """
        copy = LeafOperatorRegistry(self._null_policy)
        copy._operators = dict(self._operators)
        copy._frozen = True
        return copy

    # -- registration --------------------------------------------------------

    def register(self, operator: LeafOperator) -> None:
        """Register an operator strategy instance."""
        self._check_mutable()
        self._operators[operator.name] = operator

    def register_all(self, *operators: LeafOperator) -> None:
        """Register multiple operator strategy instances at once."""
        for op in operators:
            self.register(op)

    def unregister(self, name: PredicateKind) -> None:
        """Remove an operator from the registry."""
        self._check_mutable()
        self._operators.pop(name, None)

    # -- look-up -------------------------------------------------------------

    def get(self, name: PredicateKind) -> LeafOperator | None:
        """Return the registered operator or ``None``."""
        return self._operators.get(name)

    def has(self, name: PredicateKind) -> bool:
        return name in self._operators

    def require(self, name: PredicateKind) -> LeafOperator:
        """Return the registered operator or raise :class:`OperatorNotFoundError`."""
        op = self.get(name)
        if op is None:
            raise OperatorNotFoundError(
                getattr(name, "value", str(name)),
                [k.value for k in self._operators],
            )
        return op

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ConstructionError("Operator registry is frozen; build a new registry")

    @property
    def supported_operators(self) -> set[PredicateKind]:
        return set(self._operators.keys())

    # -- evaluation shortcut -------------------------------------------------

    def evaluate(
        self,
        name: PredicateKind,
        field_value: Any,
        literals: tuple[Any, ...],
        comparator: Comparator,
        *,
        field_name: str = "<unknown>",
    ) -> bool:
        """
        Look up the operator and evaluate.

        Raises:
            OperatorNotFoundError: If the operator is not registered.
            EvaluationError: If the value is null, the operator does not
                accept nulls and the null policy is ``RAISE``.
        """
        op = self.require(name)
        if field_value is None and not op.null_tolerant:
            if self._null_policy is NullPolicy.RAISE:
                raise EvaluationError(field_name, name.value)
            return False
        return op.evaluate(field_value, literals, comparator)
