"""IRowFilter — protocol for the streaming engine's per-row filter hook."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IRowFilter(Protocol):
    """Decide, row by row, whether the streaming engine drops a row.

    Invoked once per row; must not raise for well-formed rows and must
    not have side effects.
    """

    def is_remove(self, row: Any) -> bool:
        """Return ``True`` if *row* should be discarded."""
        ...
