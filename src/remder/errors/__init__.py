"""Error handling — exception taxonomy for diagram rendering and launching."""

from remder.errors.exceptions import (
    AllLaunchersFailedError,
    CacheReadError,
    EngineError,
    LaunchError,
    RemderError,
    RenderTimeoutError,
)

__all__ = [
    "RemderError",
    "CacheReadError",
    "EngineError",
    "RenderTimeoutError",
    "LaunchError",
    "AllLaunchersFailedError",
]
