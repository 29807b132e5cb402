"""Diagram rendering through the cache."""

from remder.diagrams.renderer import DiagramRenderer

__all__ = ["DiagramRenderer"]
