"""remder — markdown to HTML with cached, time-bounded diagram rendering."""

from remder.core import Remder, ToBrowser, ToViewer, render_html

__all__ = ["Remder", "ToBrowser", "ToViewer", "render_html"]
