"""
Predicate tree nodes.

A predicate is one of two tagged variants:

- :class:`FieldPredicate` — a comparison on exactly one field,
  evaluated by the operator registered for its ``kind``.
- :class:`CompositePredicate` — AND / OR over two or more children,
  or NOT / IDENTITY over exactly one.

Both are immutable.  While a composite is still receiving children it
is represented by an :class:`OpenComposite`; closing it validates the
arity invariant and hands back the frozen :class:`CompositePredicate`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from .exceptions import ConstructionError, ValidationError
from .operators import (
    LEAF_KINDS,
    LIST_KINDS,
    MIN_CHILDREN,
    SINGLETON_KINDS,
    PredicateKind,
)
from .rows import resolve_field

if TYPE_CHECKING:
    from .evaluator import LeafOperatorRegistry
    from .fields import Field


def check_arity(kind: PredicateKind, count: int, path: str | None = None) -> None:
    """Raise :class:`ValidationError` if *count* children is invalid for *kind*."""
    if kind in LIST_KINDS and count < MIN_CHILDREN[kind]:
        raise ValidationError(
            f"'{kind.value}' must contain at least {MIN_CHILDREN[kind]} "
            f"predicates, got {count}",
            path=path,
        )
    if kind in SINGLETON_KINDS and count != MIN_CHILDREN[kind]:
        raise ValidationError(
            f"'{kind.value}' must contain exactly one predicate, got {count}",
            path=path,
        )


@dataclass(frozen=True)
class FieldPredicate:
    """Comparison of one field's value against the predicate's literals."""

    kind: PredicateKind
    field: Field
    literals: tuple[Any, ...]
    registry: LeafOperatorRegistry = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.kind not in LEAF_KINDS:
            raise ConstructionError(
                f"'{self.kind.value}' is not a field predicate", path=self.field.name
            )

    def apply(self, row: Any) -> bool:
        return self.registry.evaluate(
            self.kind,
            resolve_field(row, self.field.name),
            self.literals,
            self.field.comparator,
            field_name=self.field.name,
        )

    def verify(self) -> None:
        """Field predicates are checked when constructed; nothing to do."""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"op": self.kind.value, "attr": self.field.name}
        if self.kind in (PredicateKind.IN, PredicateKind.BETWEEN):
            data["val"] = list(self.literals)
        elif self.literals:
            data["val"] = self.literals[0]
        return data


@dataclass(frozen=True)
class CompositePredicate:
    """Logical combination of child predicates."""

    kind: PredicateKind
    children: tuple[Predicate, ...]
    path: str = field(default="<root>", compare=False)

    def apply(self, row: Any) -> bool:
        if self.kind is PredicateKind.AND:
            for child in self.children:
                if not child.apply(row):
                    return False
            return True
        if self.kind is PredicateKind.OR:
            for child in self.children:
                if child.apply(row):
                    return True
            return False
        if self.kind is PredicateKind.NOT:
            return not self.children[0].apply(row)
        if self.kind is PredicateKind.IDENTITY:
            return self.children[0].apply(row)
        raise ConstructionError(
            f"'{self.kind.value}' is not a composite predicate", path=self.path
        )

    def verify(self) -> None:
        check_arity(self.kind, len(self.children), self.path)
        for child in self.children:
            child.verify()

    def to_dict(self) -> dict[str, Any]:
        # IDENTITY is transparent
        if self.kind is PredicateKind.IDENTITY and len(self.children) == 1:
            return self.children[0].to_dict()
        return {
            "op": self.kind.value,
            "conditions": [child.to_dict() for child in self.children],
        }


Predicate = Union[FieldPredicate, CompositePredicate]


class NodeState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class OpenComposite:
    """
    A composite that is still on the construction stack.

    Children may only be added while the node is ``OPEN``.  ``close()``
    validates the node, returns the immutable :class:`CompositePredicate`
    and moves this node to ``CLOSED``; after that it can no longer be
    mutated or closed again.
    """

    def __init__(self, kind: PredicateKind, path: str = "<root>") -> None:
        if kind not in LIST_KINDS and kind not in SINGLETON_KINDS:
            raise ConstructionError(f"'{kind.value}' is not a composite", path=path)
        self.kind = kind
        self.path = path
        self.state = NodeState.OPEN
        self._children: list[Predicate | OpenComposite] = []
        self._closed: CompositePredicate | None = None

    @property
    def size(self) -> int:
        return len(self._children)

    @property
    def closed(self) -> CompositePredicate:
        """The frozen node produced by ``close()``."""
        if self._closed is None:
            raise ConstructionError(f"'{self.kind.value}' is still open", path=self.path)
        return self._closed

    def child_path(self, kind: PredicateKind) -> str:
        """Path the next child of *kind* will have."""
        return f"{self.path}.{kind.value}[{self.size}]"

    def add(self, child: Predicate | OpenComposite) -> None:
        if self.state is NodeState.CLOSED:
            raise ConstructionError(
                f"'{self.kind.value}' is closed and cannot take more predicates",
                path=self.path,
            )
        if self.kind in SINGLETON_KINDS and self._children:
            raise ConstructionError(
                f"Predicate already set on '{self.kind.value}'", path=self.path
            )
        self._children.append(child)

    def close(self) -> CompositePredicate:
        if self.state is NodeState.CLOSED:
            raise ConstructionError(
                f"'{self.kind.value}' is already closed", path=self.path
            )
        node = CompositePredicate(
            kind=self.kind,
            children=tuple(
                c.closed if isinstance(c, OpenComposite) else c for c in self._children
            ),
            path=self.path,
        )
        node.verify()
        self.state = NodeState.CLOSED
        self._closed = node
        self._children = []
        return node
