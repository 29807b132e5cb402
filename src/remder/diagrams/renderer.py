"""Cache-through diagram renderer."""

from __future__ import annotations

import logging
import threading

from remder.cache.base import DiagramCache
from remder.cache.stats import CacheStats
from remder.engines.base import DiagramEngine
from remder.errors.exceptions import CacheReadError, EngineError
from remder.types import CacheEntry, DiagramBlock

logger = logging.getLogger(__name__)


class DiagramRenderer:
    """Renders diagram blocks with an engine, reusing cached results.

    Safe to call from several worker threads. Two concurrent renders of the
    same source may both call the engine; the last write wins.
    """

    def __init__(self, engine: DiagramEngine, cache: DiagramCache) -> None:
        self._engine = engine
        self._cache = cache
        self._stats = CacheStats()
        self._lock = threading.Lock()

    @property
    def engine(self) -> DiagramEngine:
        return self._engine

    @property
    def cache(self) -> DiagramCache:
        return self._cache

    @property
    def stats(self) -> CacheStats:
        with self._lock:
            return self._stats.model_copy()

    def render(self, block: DiagramBlock) -> CacheEntry:
        """Return (image, description) for a block, rendering on a cache miss.

        Raises EngineError if the engine fails.
        """
        key = block.cache_key
        entry = self._lookup(key)
        if entry is not None:
            return entry

        logger.debug("Rendering %s diagram %s", block.dialect.value, key)
        entry = self._generate(block)
        self._cache.store(key, entry)
        self._count(stores=1)
        return entry

    def _lookup(self, key: int) -> CacheEntry | None:
        try:
            entry = self._cache.lookup(key)
        except CacheReadError as e:
            logger.warning("Ignoring broken cache entry %s: %s", key, e)
            self._count(misses=1, read_errors=1)
            return None

        if entry is None:
            self._count(misses=1)
        else:
            self._count(hits=1)
        return entry

    def _generate(self, block: DiagramBlock) -> CacheEntry:
        try:
            image, description = self._engine.generate(block.wrapped_source())
        except EngineError:
            raise
        except Exception as e:
            raise EngineError(f"Diagram engine failed: {e}", original=e) from e

        if not image:
            raise EngineError("Diagram engine returned no image data")
        return CacheEntry(image=image, description=description)

    def _count(self, **increments: int) -> None:
        with self._lock:
            for name, amount in increments.items():
                setattr(self._stats, name, getattr(self._stats, name) + amount)
