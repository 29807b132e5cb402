"""Document renderer — markdown body plus styled HTML page."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown_it import MarkdownIt

from remder.concurrency.gate import RenderGate
from remder.diagrams.renderer import DiagramRenderer
from remder.document.extension import diagram_plugin

logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).parent / "templates"

_jinja_env = Environment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    autoescape=select_autoescape(["html", "j2"]),
    keep_trailing_newline=True,
)


def build_markdown() -> MarkdownIt:
    """CommonMark parser/renderer with GFM tables and strikethrough."""
    return MarkdownIt("commonmark").enable("table").enable("strikethrough")


class DocumentRenderer:
    """Turns markdown text into HTML, rendering diagram fences as images."""

    def __init__(self, renderer: DiagramRenderer, gate: RenderGate) -> None:
        self._md = build_markdown().use(diagram_plugin, renderer=renderer, gate=gate)

    @property
    def markdown(self) -> MarkdownIt:
        return self._md

    def render_body(self, text: str) -> str:
        return self._md.render(text)

    def render_page(self, title: str, text: str) -> str:
        """Render a complete, styled HTML page."""
        body = self.render_body(text)
        return styled(title, body)


def styled(title: str, html_body: str) -> str:
    template = _jinja_env.get_template("page.html.j2")
    return template.render(title=title, body=html_body)
