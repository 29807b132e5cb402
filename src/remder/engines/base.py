"""Diagram engine interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from remder.errors.exceptions import EngineError


@runtime_checkable
class DiagramEngine(Protocol):
    """Black-box renderer: wrapped diagram source in, (png bytes, description) out."""

    def generate(self, source: str) -> tuple[bytes, str]: ...


class UnavailableEngine:
    """Engine used when nothing is configured; every diagram falls back."""

    def __init__(self, reason: str = "No diagram engine configured") -> None:
        self.reason = reason

    def generate(self, source: str) -> tuple[bytes, str]:
        raise EngineError(self.reason)
