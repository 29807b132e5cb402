"""Diagram engines — turn wrapped diagram source into PNG bytes."""

from remder.engines.base import DiagramEngine, UnavailableEngine
from remder.engines.factory import create_engine
from remder.engines.jar import PlantUmlJarEngine
from remder.engines.server import PlantUmlServerEngine, encode_plantuml

__all__ = [
    "DiagramEngine",
    "UnavailableEngine",
    "PlantUmlJarEngine",
    "PlantUmlServerEngine",
    "create_engine",
    "encode_plantuml",
]
