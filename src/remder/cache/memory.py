"""In-memory diagram cache."""

from __future__ import annotations

from remder.types import CacheEntry


class MemoryDiagramCache:
    """Dict-backed cache; lives as long as the process."""

    def __init__(self) -> None:
        self._store: dict[int, CacheEntry] = {}

    def lookup(self, key: int) -> CacheEntry | None:
        return self._store.get(key)

    def store(self, key: int, entry: CacheEntry) -> None:
        self._store[key] = entry

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)
