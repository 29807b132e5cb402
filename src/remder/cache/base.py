"""Diagram cache interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from remder.types import CacheEntry


@runtime_checkable
class DiagramCache(Protocol):
    """Lookup/store of rendered diagrams by content hash."""

    def lookup(self, key: int) -> CacheEntry | None:
        """Return the entry for ``key`` or None on a miss.

        May raise CacheReadError when the entry exists but can't be read.
        """
        ...

    def store(self, key: int, entry: CacheEntry) -> None: ...
