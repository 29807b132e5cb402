"""Tests for engine selection."""

import pytest

from remder.config.schema import RemderSettings
from remder.engines.base import DiagramEngine, UnavailableEngine
from remder.engines.factory import create_engine
from remder.engines.jar import PlantUmlJarEngine
from remder.engines.server import PlantUmlServerEngine
from remder.errors.exceptions import EngineError


class TestCreateEngine:
    def test_server_preferred(self, tmp_path):
        settings = RemderSettings(out_dir=tmp_path, plantuml_server="http://localhost:8080")
        engine = create_engine(settings)
        assert isinstance(engine, PlantUmlServerEngine)
        engine.close()

    def test_jar_when_usable(self, tmp_path, monkeypatch):
        jar = tmp_path / "plantuml.jar"
        jar.write_bytes(b"")
        monkeypatch.setattr("remder.engines.jar.shutil.which", lambda name: "/usr/bin/java")
        engine = create_engine(RemderSettings(out_dir=tmp_path, plantuml_jar=jar))
        assert isinstance(engine, PlantUmlJarEngine)
        assert engine.jar_path == jar.resolve()

    def test_jar_without_java(self, tmp_path, monkeypatch):
        jar = tmp_path / "plantuml.jar"
        jar.write_bytes(b"")
        monkeypatch.setattr("remder.engines.jar.shutil.which", lambda name: None)
        engine = create_engine(RemderSettings(out_dir=tmp_path, plantuml_jar=jar))
        assert isinstance(engine, UnavailableEngine)
        assert "Java" in engine.reason

    def test_nothing_configured(self, clean_env):
        engine = create_engine(RemderSettings(out_dir=clean_env))
        assert isinstance(engine, UnavailableEngine)


class TestUnavailableEngine:
    def test_always_raises(self):
        with pytest.raises(EngineError, match="nothing here"):
            UnavailableEngine("nothing here").generate("@startuml\n@enduml")

    def test_satisfies_protocol(self):
        assert isinstance(UnavailableEngine(), DiagramEngine)
