"""
PushDownFilter — the finished filter handed to the streaming engine.

Carries the evaluation tree used per row and the pruning descriptor
handed to the storage layer, both derived from the same program.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from .instructions import replay

if TYPE_CHECKING:
    from .instructions import Instruction
    from .predicates import CompositePredicate
    from .search_argument import SearchArgumentBuilder


class PushDownFilter:
    """
    Immutable row filter with its matching pruning descriptor.

    A row is kept iff the root predicate evaluates true.  Instances hold
    no mutable state and may be shared between worker threads.
    """

    __slots__ = ("_root", "_search_argument", "_program")

    def __init__(
        self,
        root: CompositePredicate,
        search_argument: Any,
        program: tuple[Instruction, ...] = (),
    ) -> None:
        self._root = root
        self._search_argument = search_argument
        self._program = program

    @property
    def predicate(self) -> CompositePredicate:
        """The IDENTITY root of the evaluation tree."""
        return self._root

    @property
    def search_argument(self) -> Any:
        """The pruning descriptor for the storage layer."""
        return self._search_argument

    @property
    def program(self) -> tuple[Instruction, ...]:
        return self._program

    def should_keep(self, row: Any) -> bool:
        return self._root.apply(row)

    def is_remove(self, row: Any) -> bool:
        return not self._root.apply(row)

    __call__ = should_keep

    def filter(self, rows: Iterable[Any]) -> Iterator[Any]:
        """Lazily yield the rows that are kept."""
        for row in rows:
            if self._root.apply(row):
                yield row

    def replay(self, builder: SearchArgumentBuilder) -> Any:
        """Drive another descriptor builder with this filter's program and build it."""
        replay(self._program, builder)
        return builder.build()

    def to_dict(self) -> dict[str, Any]:
        return self._root.to_dict()

    def __repr__(self) -> str:
        return f"PushDownFilter({self.to_dict()!r})"
