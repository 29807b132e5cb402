"""Package-level default configuration values."""

from __future__ import annotations

import tempfile
from typing import Any

# Render gate
DEFAULT_RENDER_TIMEOUT = 3.0
DEFAULT_MAX_WORKERS = 4
DEFAULT_MAX_OUTSTANDING = 16

# Diagram engines
DEFAULT_ENGINE_TIMEOUT = 20.0
DEFAULT_JAVA = "java"

# Browser launcher
DEFAULT_OPEN_COMMAND = "xdg-open"

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def default_out_dir() -> str:
    """Process-wide temporary directory."""
    return tempfile.gettempdir()


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "out_dir": default_out_dir(),
        "render_timeout": DEFAULT_RENDER_TIMEOUT,
        "max_workers": DEFAULT_MAX_WORKERS,
        "max_outstanding": DEFAULT_MAX_OUTSTANDING,
        "plantuml_jar": None,
        "plantuml_server": None,
        "engine_timeout": DEFAULT_ENGINE_TIMEOUT,
        "java": DEFAULT_JAVA,
        "open_command": DEFAULT_OPEN_COMMAND,
        "log_level": DEFAULT_LOG_LEVEL,
    }
