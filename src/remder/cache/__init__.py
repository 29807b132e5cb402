"""Diagram cache — content-hash keyed image + description store."""

from remder.cache.base import DiagramCache
from remder.cache.disk import DiskDiagramCache
from remder.cache.keys import content_hash, page_file_name
from remder.cache.memory import MemoryDiagramCache
from remder.cache.stats import CacheStats

__all__ = [
    "DiagramCache",
    "DiskDiagramCache",
    "MemoryDiagramCache",
    "CacheStats",
    "content_hash",
    "page_file_name",
]
