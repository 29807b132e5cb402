"""Disk cache — one image file and one description file per diagram."""

from __future__ import annotations

import logging
from pathlib import Path

from remder.errors.exceptions import CacheReadError
from remder.types import CacheEntry

logger = logging.getLogger(__name__)

_IMAGE_SUFFIX = ".png"
_DESCRIPTION_SUFFIX = ".desc"


class DiskDiagramCache:
    """File-backed diagram cache under a single base directory.

    Entries are never evicted and are written without locks. Writing the
    same key twice simply overwrites identical content.
    """

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def image_path(self, key: int) -> Path:
        return self._base_dir / f"{key}{_IMAGE_SUFFIX}"

    def description_path(self, key: int) -> Path:
        return self._base_dir / f"{key}{_DESCRIPTION_SUFFIX}"

    def lookup(self, key: int) -> CacheEntry | None:
        image_path = self.image_path(key)
        try:
            image = image_path.read_bytes()
        except OSError:
            return None

        # The image decides presence; a missing description is a broken entry.
        desc_path = self.description_path(key)
        try:
            description = desc_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheReadError(
                f"Cached diagram {image_path} has no readable description",
                path=desc_path,
                original=e,
            ) from e

        logger.debug("Reusing %s", image_path)
        return CacheEntry(image=image, description=description)

    def store(self, key: int, entry: CacheEntry) -> None:
        self._base_dir.mkdir(parents=True, exist_ok=True)
        # Two independent writes: image first, then description.
        self.image_path(key).write_bytes(entry.image)
        self.description_path(key).write_text(entry.description, encoding="utf-8")
        logger.debug("Stored %s", self.image_path(key))

    @property
    def entry_count(self) -> int:
        if not self._base_dir.is_dir():
            return 0
        return sum(1 for _ in self._base_dir.glob(f"*{_IMAGE_SUFFIX}"))

    @property
    def size_bytes(self) -> int:
        if not self._base_dir.is_dir():
            return 0
        total = 0
        for pattern in (f"*{_IMAGE_SUFFIX}", f"*{_DESCRIPTION_SUFFIX}"):
            for path in self._base_dir.glob(pattern):
                total += path.stat().st_size
        return total
