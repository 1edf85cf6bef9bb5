"""
Storage-specific pruning-descriptor builders.

``ArrowSearchArgumentBuilder`` lives in :mod:`.arrow` and needs the
``arrow`` extra; import it from there.
"""

from __future__ import annotations

from .mongo import MongoSearchArgumentBuilder

__all__ = [
    "MongoSearchArgumentBuilder",
]
