"""Custom exception hierarchy for remder."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class RemderError(Exception):
    """Base exception for all remder errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class CacheReadError(RemderError):
    """A cached diagram artifact is missing or unreadable.

    Treated as a cache miss: the diagram is rendered again.
    """

    def __init__(
        self,
        message: str = "",
        path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.original = original


class EngineError(RemderError):
    """The diagram engine failed on the given input."""

    def __init__(
        self,
        message: str = "",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.original = original


class RenderTimeoutError(RemderError):
    """A diagram render did not finish within its budget.

    The render itself keeps running in the background.
    """

    def __init__(self, message: str = "", budget: float | None = None) -> None:
        super().__init__(message)
        self.budget = budget


class LaunchError(RemderError):
    """One browser launcher failed — collected, not surfaced on its own."""

    def __init__(
        self,
        message: str = "",
        launcher: str = "",
        exit_code: int | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.launcher = launcher
        self.exit_code = exit_code
        self.original = original


class AllLaunchersFailedError(RemderError):
    """Every launcher in the chain failed."""

    def __init__(
        self,
        message: str = "Failed to launch browser",
        failures: list[Exception] | None = None,
    ) -> None:
        super().__init__(message)
        self.failures = failures or []
