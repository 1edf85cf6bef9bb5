"""
Field declarations.

A :class:`Field` carries the name used to read a value from a row and the
comparator that orders values of that field.  Comparators belong to the
field's declaration (usually a :class:`RowSchema`), never to a predicate.

Example::

    schema = RowSchema(
        Field(name="id"),
        Field(name="title", comparator=casefold_order),
        name="books",
    )
    schema.fields("title")      # → Fields(title)
    schema.row(1, "Dune")       # → Row bound to the schema
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from .exceptions import ConstructionError, FieldNotFoundError
from .rows import Row

Comparator = Callable[[Any, Any], int]


def natural_order(left: Any, right: Any) -> int:
    """Three-way comparison using the values' own ordering."""
    return (left > right) - (left < right)


class Field(BaseModel):
    """A single named field and its value comparator."""

    model_config = ConfigDict(frozen=True)

    name: str
    comparator: Comparator = natural_order

    def compare(self, left: Any, right: Any) -> int:
        return self.comparator(left, right)

    def __str__(self) -> str:
        return self.name


class Fields(BaseModel):
    """An ordered reference to one or more fields."""

    model_config = ConfigDict(frozen=True)

    members: tuple[Field, ...]

    @classmethod
    def of(cls, *refs: str | Field) -> Fields:
        return cls(
            members=tuple(ref if isinstance(ref, Field) else Field(name=ref) for ref in refs)
        )

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.members)

    @property
    def size(self) -> int:
        return len(self.members)

    def single(self) -> Field:
        """Return the only field referenced, or fail if there is not exactly one."""
        if self.size != 1:
            raise ConstructionError(
                f"Can only specify one field, got {self.size}: {list(self.names)}",
                path=",".join(self.names) or None,
            )
        return self.members[0]


class RowSchema:
    """
    Declared fields of the rows a filter will see.

    Resolves field names to :class:`Field` declarations so that every
    predicate on a field orders values with the same comparator.
    """

    def __init__(self, *fields: Field, name: str = "row") -> None:
        self.name = name
        self._fields: dict[str, Field] = {}
        for f in fields:
            if f.name in self._fields:
                raise ConstructionError(
                    f"Field '{f.name}' declared twice on '{name}'", path=f.name
                )
            self._fields[f.name] = f

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def field(self, name: str) -> Field:
        try:
            return self._fields[name]
        except KeyError:
            raise FieldNotFoundError(name, self.name, list(self._fields)) from None

    def fields(self, *names: str) -> Fields:
        return Fields(members=tuple(self.field(n) for n in names))

    def index_of(self, name: str) -> int:
        self.field(name)
        return self.names.index(name)

    def row(self, *values: Any) -> Row:
        """Bind positional values to this schema."""
        return Row(self, values)


def as_fields(ref: str | Field | Fields, schema: RowSchema | None = None) -> Fields:
    """
    Normalise a field reference.

    Strings are looked up in *schema* when one is given, otherwise they
    become a field with natural ordering.
    """
    if isinstance(ref, Fields):
        return ref
    if isinstance(ref, Field):
        return Fields(members=(ref,))
    if schema is not None:
        return schema.fields(ref)
    return Fields.of(ref)
