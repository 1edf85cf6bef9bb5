"""
Pruning descriptors ("search arguments").

A storage layer that can skip blocks or row-groups needs the filter in
its own form.  :class:`SearchArgumentBuilder` is the operation set such
a builder exposes; the push-down builder drives one in the same order
it builds its evaluation tree.

:class:`ExpressionBuilder` implements the stack handling shared by the
concrete descriptor builders; subclasses only say how to express a leaf
and how to combine children.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, runtime_checkable

from .exceptions import DescriptorError
from .operators import PredicateKind

if TYPE_CHECKING:
    from .fields import Field

logger = logging.getLogger("predicate_pushdown.descriptors")

E = TypeVar("E")


@runtime_checkable
class SearchArgumentBuilder(Protocol):
    """Operation set of an external pruning-descriptor builder."""

    def start_and(self) -> Any: ...

    def start_or(self) -> Any: ...

    def start_not(self) -> Any: ...

    def end(self) -> Any: ...

    def equals(self, field: Field, literal: Any) -> Any: ...

    def null_safe_equals(self, field: Field, literal: Any) -> Any: ...

    def less_than(self, field: Field, literal: Any) -> Any: ...

    def less_than_equals(self, field: Field, literal: Any) -> Any: ...

    def greater_than(self, field: Field, literal: Any) -> Any: ...

    def greater_than_equals(self, field: Field, literal: Any) -> Any: ...

    def between(self, field: Field, lower: Any, upper: Any) -> Any: ...

    def in_(self, field: Field, *literals: Any) -> Any: ...

    def is_null(self, field: Field) -> Any: ...

    def build(self) -> Any:
        """Finalise and return the opaque descriptor."""
        ...


class ExpressionBuilder(ABC, Generic[E]):
    """
    Stack-based base for descriptor builders producing expressions of type ``E``.

    Every call is appended to ``calls`` as ``(method, args)``.
    """

    def __init__(self) -> None:
        self._stack: list[tuple[PredicateKind, list[E]]] = [(PredicateKind.IDENTITY, [])]
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    # -- grouping ------------------------------------------------------------

    def start_and(self) -> ExpressionBuilder[E]:
        return self._open("start_and", PredicateKind.AND)

    def start_or(self) -> ExpressionBuilder[E]:
        return self._open("start_or", PredicateKind.OR)

    def start_not(self) -> ExpressionBuilder[E]:
        return self._open("start_not", PredicateKind.NOT)

    def end(self) -> ExpressionBuilder[E]:
        if len(self._stack) == 1:
            raise DescriptorError("end() called without a matching start")
        self._trace("end", ())
        kind, children = self._stack.pop()
        if not children:
            raise DescriptorError(f"'{kind.value}' group is empty")
        self._stack[-1][1].append(self._combine(kind, children))
        return self

    # -- leaves --------------------------------------------------------------

    def equals(self, field: Field, literal: Any) -> ExpressionBuilder[E]:
        return self._add("equals", PredicateKind.EQ, field, (literal,))

    def null_safe_equals(self, field: Field, literal: Any) -> ExpressionBuilder[E]:
        return self._add("null_safe_equals", PredicateKind.NULL_SAFE_EQ, field, (literal,))

    def less_than(self, field: Field, literal: Any) -> ExpressionBuilder[E]:
        return self._add("less_than", PredicateKind.LT, field, (literal,))

    def less_than_equals(self, field: Field, literal: Any) -> ExpressionBuilder[E]:
        return self._add("less_than_equals", PredicateKind.LE, field, (literal,))

    def greater_than(self, field: Field, literal: Any) -> ExpressionBuilder[E]:
        return self._add("greater_than", PredicateKind.GT, field, (literal,))

    def greater_than_equals(self, field: Field, literal: Any) -> ExpressionBuilder[E]:
        return self._add("greater_than_equals", PredicateKind.GE, field, (literal,))

    def between(self, field: Field, lower: Any, upper: Any) -> ExpressionBuilder[E]:
        return self._add("between", PredicateKind.BETWEEN, field, (lower, upper))

    def in_(self, field: Field, *literals: Any) -> ExpressionBuilder[E]:
        return self._add("in_", PredicateKind.IN, field, literals)

    def is_null(self, field: Field) -> ExpressionBuilder[E]:
        return self._add("is_null", PredicateKind.IS_NULL, field, ())

    # -- build ---------------------------------------------------------------

    def build(self) -> Any:
        """
        Finalise the descriptor.

        Raises:
            DescriptorError: If groups are still open or the builder does
                not hold exactly one root expression.
        """
        if len(self._stack) != 1:
            raise DescriptorError(
                f"{len(self._stack) - 1} group(s) still open; call end() before build()"
            )
        roots = self._stack[0][1]
        if len(roots) != 1:
            raise DescriptorError(f"Expected one root expression, got {len(roots)}")
        logger.debug(
            "%s built from %d call(s)", self.__class__.__name__, len(self.calls)
        )
        return self._finish(roots[0])

    # -- hooks ---------------------------------------------------------------

    @abstractmethod
    def _leaf(self, kind: PredicateKind, field: Field, literals: tuple[Any, ...]) -> E:
        """Express one field comparison."""
        ...

    @abstractmethod
    def _combine(self, kind: PredicateKind, children: list[E]) -> E:
        """Combine the children of a closed AND / OR / NOT group."""
        ...

    def _finish(self, expression: E) -> Any:
        return expression

    # -- internals -----------------------------------------------------------

    def _open(self, method: str, kind: PredicateKind) -> ExpressionBuilder[E]:
        self._trace(method, ())
        self._stack.append((kind, []))
        return self

    def _add(
        self,
        method: str,
        kind: PredicateKind,
        field: Field,
        literals: tuple[Any, ...],
    ) -> ExpressionBuilder[E]:
        self._trace(method, (field.name, *literals))
        self._stack[-1][1].append(self._leaf(kind, field, literals))
        return self

    def _trace(self, method: str, args: tuple[Any, ...]) -> None:
        self.calls.append((method, args))


@dataclass(frozen=True)
class SearchArgument:
    """
    Storage-neutral pruning descriptor.

    Attributes:
        expression: The filter as ``{"op", "attr", "val"}`` leaves and
            ``{"op", "conditions"}`` groups.
        calls: The ordered ``(method, args)`` calls it was built from.
    """

    expression: dict[str, Any]
    calls: tuple[tuple[str, tuple[Any, ...]], ...]

    def to_dict(self) -> dict[str, Any]:
        return self.expression


class RecordingSearchArgumentBuilder(ExpressionBuilder[dict[str, Any]]):
    """Default descriptor builder producing a :class:`SearchArgument`."""

    def _leaf(
        self, kind: PredicateKind, field: Field, literals: tuple[Any, ...]
    ) -> dict[str, Any]:
        node: dict[str, Any] = {"op": kind.value, "attr": field.name}
        if kind in (PredicateKind.IN, PredicateKind.BETWEEN):
            node["val"] = list(literals)
        elif literals:
            node["val"] = literals[0]
        return node

    def _combine(
        self, kind: PredicateKind, children: list[dict[str, Any]]
    ) -> dict[str, Any]:
        return {"op": kind.value, "conditions": children}

    def _finish(self, expression: dict[str, Any]) -> SearchArgument:
        return SearchArgument(expression=expression, calls=tuple(self.calls))
