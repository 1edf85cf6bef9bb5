"""
Row access.

The streaming engine owns the row abstraction; predicates only need to
read one value per field name.  Anything implementing :class:`RowAccessor`
works, as do plain mappings and attribute objects.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .exceptions import ConstructionError

if TYPE_CHECKING:
    from .fields import RowSchema


@runtime_checkable
class RowAccessor(Protocol):
    """Read access to one row of a stream."""

    def get_field(self, name: str) -> Any:
        """Return the value of *name*, or ``None`` when it is absent."""
        ...


class Row:
    """Positional values bound to a :class:`RowSchema`."""

    __slots__ = ("_schema", "_values")

    def __init__(self, schema: RowSchema, values: Sequence[Any]) -> None:
        if len(values) != len(schema):
            raise ConstructionError(
                f"Schema '{schema.name}' declares {len(schema)} field(s), "
                f"got {len(values)} value(s)"
            )
        self._schema = schema
        self._values = tuple(values)

    @property
    def schema(self) -> RowSchema:
        return self._schema

    def get_field(self, name: str) -> Any:
        """Raises :class:`FieldNotFoundError` for names the schema does not declare."""
        return self._values[self._schema.index_of(name)]

    def to_dict(self) -> dict[str, Any]:
        return dict(zip(self._schema.names, self._values))

    def __repr__(self) -> str:
        return f"Row({self.to_dict()!r})"


def resolve_field(row: Any, name: str) -> Any:
    """
    Read the value of field *name* from *row*.

    Supports :class:`RowAccessor` rows, mappings and attribute objects.
    A dot-separated name (``address.city``) walks nested values when the
    row does not hold the dotted name itself.
    """
    if isinstance(row, RowAccessor):
        return row.get_field(name)
    if isinstance(row, Mapping) and name in row:
        return row[name]

    obj = row
    for part in name.split("."):
        if obj is None:
            return None
        obj = obj.get(part) if isinstance(obj, Mapping) else getattr(obj, part, None)
    return obj
