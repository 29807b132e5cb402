"""Top-level entry points: render_html(), Remder, and the viewer/browser messages."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel

from remder.cache.base import DiagramCache
from remder.cache.disk import DiskDiagramCache
from remder.cache.keys import page_file_name
from remder.concurrency.gate import RenderGate
from remder.config.schema import RemderSettings, load_settings
from remder.diagrams.renderer import DiagramRenderer
from remder.document.renderer import DocumentRenderer
from remder.engines.base import DiagramEngine
from remder.engines.factory import create_engine
from remder.launcher.chain import launch_browser
from remder.launcher.strategies import CommandLauncher, DesktopLauncher, Launcher

logger = logging.getLogger(__name__)


# ── Messages ──


class ToViewer(BaseModel):
    """Render a markdown file for the embedded viewer."""

    markdown: Path


class ToBrowser(BaseModel):
    """Render a markdown file to the page cache and open it in a browser."""

    markdown: Path


class Presenter(Protocol):
    def present(self, html: str) -> None: ...


# ── Facade ──


class Remder:
    """Markdown renderer with cached diagram images and browser launching."""

    def __init__(
        self,
        settings: RemderSettings | None = None,
        engine: DiagramEngine | None = None,
        cache: DiagramCache | None = None,
        launchers: Sequence[Launcher] | None = None,
    ) -> None:
        self._settings = settings if settings is not None else load_settings()
        self._out_dir = self._settings.out_dir
        self._engine = engine if engine is not None else create_engine(self._settings)
        # An empty cache is falsy, so test for None explicitly
        self._cache = cache if cache is not None else DiskDiagramCache(self._out_dir)
        if launchers is None:
            launchers = (DesktopLauncher(), CommandLauncher(self._settings.open_command))
        self._launchers = tuple(launchers)

        self._diagram_renderer = DiagramRenderer(self._engine, self._cache)
        self._gate = RenderGate(
            budget=self._settings.render_timeout,
            max_workers=self._settings.max_workers,
            max_outstanding=self._settings.max_outstanding,
        )
        self._document_renderer = DocumentRenderer(self._diagram_renderer, self._gate)

    @property
    def settings(self) -> RemderSettings:
        return self._settings

    @property
    def out_dir(self) -> Path:
        return self._out_dir

    @property
    def diagram_renderer(self) -> DiagramRenderer:
        return self._diagram_renderer

    @property
    def gate(self) -> RenderGate:
        return self._gate

    def render_html(self, text: str, title: str = "") -> str:
        """Render markdown text into a styled HTML page."""
        return self._document_renderer.render_page(title, text)

    def render_for_viewer(self, markdown: str | Path) -> str:
        """Styled HTML for a markdown file, for an embedded viewer."""
        markdown = Path(markdown)
        return self.render_html(markdown.read_text(encoding="utf-8"), title=markdown.stem)

    def write_browser_page(self, markdown: str | Path) -> Path:
        """Write the styled page for a markdown file into the page cache.

        The page is named by the hash of the document text and only written
        when not already present.
        """
        markdown = Path(markdown)
        content = markdown.read_text(encoding="utf-8")
        target = self._out_dir / page_file_name(content)
        logger.debug("Rendering: %s", target)
        if not target.exists():
            self._out_dir.mkdir(parents=True, exist_ok=True)
            target.write_text(self.render_html(content, title=markdown.stem), encoding="utf-8")
        return target

    def render_for_browser(self, markdown: str | Path) -> Path:
        """Write the page for a markdown file and open it in a browser."""
        target = self.write_browser_page(markdown)
        launch_browser(target, self._launchers)
        return target

    def handle(self, message: ToViewer | ToBrowser, presenter: Presenter | None = None) -> None:
        """Dispatch a viewer/browser request."""
        if isinstance(message, ToViewer):
            html = self.render_for_viewer(message.markdown)
            if presenter is not None:
                presenter.present(html)
        elif isinstance(message, ToBrowser):
            self.render_for_browser(message.markdown)
        else:
            raise TypeError(f"Unsupported message: {type(message).__name__}")

    def close(self) -> None:
        self._gate.close()
        close_engine = getattr(self._engine, "close", None)
        if callable(close_engine):
            close_engine()

    def __enter__(self) -> Remder:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ── Module-level convenience functions ──


def render_html(text: str, title: str = "", **overrides: object) -> str:
    """Render markdown text to a styled HTML page with default settings."""
    with Remder(settings=load_settings(**overrides)) as remder:
        return remder.render_html(text, title=title)
