"""Pick a diagram engine from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from remder.engines.base import DiagramEngine, UnavailableEngine
from remder.engines.jar import PlantUmlJarEngine, resolve_jar_path
from remder.engines.server import PlantUmlServerEngine

if TYPE_CHECKING:
    from remder.config.schema import RemderSettings

logger = logging.getLogger(__name__)


def create_engine(settings: RemderSettings) -> DiagramEngine:
    """Server if configured, else a local jar if one is found, else unavailable."""
    if settings.plantuml_server:
        logger.debug("Using PlantUML server %s", settings.plantuml_server)
        return PlantUmlServerEngine(settings.plantuml_server, timeout=settings.engine_timeout)

    jar_path = resolve_jar_path(settings.plantuml_jar)
    if jar_path is not None:
        engine = PlantUmlJarEngine(jar_path, java=settings.java, timeout=settings.engine_timeout)
        issue = engine.setup_issue()
        if issue is None:
            logger.debug("Using PlantUML jar %s", jar_path)
            return engine
        logger.info("PlantUML jar unusable: %s", issue)
        return UnavailableEngine(issue)

    logger.info("No PlantUML jar or server configured; diagrams render as code")
    return UnavailableEngine(
        "plantuml.jar not found (set PLANTUML_JAR or REMDER_PLANTUML_SERVER)"
    )
