"""Markdown → HTML rendering with inline diagram images."""

from remder.document.extension import DiagramFenceRule, diagram_plugin
from remder.document.renderer import DocumentRenderer, build_markdown

__all__ = ["DiagramFenceRule", "DocumentRenderer", "build_markdown", "diagram_plugin"]
