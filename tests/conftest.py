import base64
import threading

import pytest

from remder.concurrency.gate import RenderGate

# Minimal valid PNG (1x1 white pixel)
PNG_1X1 = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4"
    "nGP4z8BQDwAEgAF/pooBPQAAAABJRU5ErkJggg=="
)

FAKE_PNG = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A, 0x01, 0x02, 0x03])


class CountingEngine:
    """Returns fixed bytes and counts calls; records every source it sees."""

    def __init__(self, image: bytes = FAKE_PNG, description: str = "seq") -> None:
        self.image = image
        self.description = description
        self.sources: list[str] = []
        self._lock = threading.Lock()

    @property
    def calls(self) -> int:
        return len(self.sources)

    def generate(self, source: str) -> tuple[bytes, str]:
        with self._lock:
            self.sources.append(source)
        return self.image, self.description


class FailingEngine:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or ValueError("syntax error on line 1")
        self.calls = 0

    def generate(self, source: str) -> tuple[bytes, str]:
        self.calls += 1
        raise self.error


class BlockingEngine(CountingEngine):
    """Blocks until ``release`` is set, then behaves like CountingEngine."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.started = threading.Event()
        self.release = threading.Event()

    def generate(self, source: str) -> tuple[bytes, str]:
        self.started.set()
        self.release.wait(timeout=10)
        return super().generate(source)


@pytest.fixture
def sample_image_bytes():
    """Minimal valid PNG for testing (1x1 white pixel)."""
    return PNG_1X1


@pytest.fixture
def counting_engine():
    return CountingEngine()


@pytest.fixture
def blocking_engine():
    engine = BlockingEngine()
    yield engine
    # Never leave a worker thread parked at interpreter exit
    engine.release.set()


@pytest.fixture
def gate():
    g = RenderGate(budget=2.0, max_workers=2, max_outstanding=4)
    yield g
    g.close()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate config lookups from the developer's environment."""
    for var in (
        "PLANTUML_JAR",
        "REMDER_PLANTUML_JAR",
        "REMDER_OUTDIR",
        "REMDER_RENDER_TIMEOUT",
        "REMDER_MAX_WORKERS",
        "REMDER_MAX_OUTSTANDING",
        "REMDER_PLANTUML_SERVER",
        "REMDER_ENGINE_TIMEOUT",
        "REMDER_JAVA",
        "REMDER_OPEN_COMMAND",
        "REMDER_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        "remder.config.hierarchy._GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml"
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path
