"""End-to-end: markdown with a PlantUML fence → HTML with an inline image."""

import base64
import re

from conftest import FAKE_PNG

from remder.cache.disk import DiskDiagramCache
from remder.concurrency.gate import RenderGate
from remder.diagrams.renderer import DiagramRenderer
from remder.document.renderer import DocumentRenderer


class SequenceEngine:
    """Returns fixed bytes for anything wrapped in @startuml/@enduml."""

    def __init__(self):
        self.calls = 0

    def generate(self, source: str) -> tuple[bytes, str]:
        self.calls += 1
        if "startuml" not in source or "enduml" not in source:
            raise ValueError("missing markers")
        return FAKE_PNG, "seq"


class TestEndToEnd:
    def test_plantuml_scenario(self, tmp_path):
        engine = SequenceEngine()
        with RenderGate(budget=3.0) as gate:
            renderer = DocumentRenderer(DiagramRenderer(engine, DiskDiagramCache(tmp_path)), gate)
            html = renderer.render_page("doc", "```plantuml\nA->B\n```")

        images = re.findall(r"<img [^>]*>", html)
        assert len(images) == 1
        src = re.search(r'src="([^"]+)"', images[0]).group(1)
        title = re.search(r'title="([^"]*)"', images[0]).group(1)
        assert src == "data:image/png;base64," + base64.b64encode(FAKE_PNG).decode("ascii")
        assert title == "seq"

    def test_second_render_uses_cache(self, tmp_path):
        engine = SequenceEngine()
        with RenderGate(budget=3.0) as gate:
            renderer = DocumentRenderer(DiagramRenderer(engine, DiskDiagramCache(tmp_path)), gate)
            first = renderer.render_body("```plantuml\nA->B\n```")
            second = renderer.render_body("```plantuml\nA->B\n```")
        assert first == second
        assert engine.calls == 1
