"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.remder/config.yaml)
  3. Project config  (./remder.yaml, searched upward)
  4. Environment variables (REMDER_*, PLANTUML_JAR)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from remder.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".remder" / "config.yaml"
_PROJECT_CONFIG_NAME = "remder.yaml"

# Later entries win when two variables map to the same key
_ENV_MAP: dict[str, str] = {
    "PLANTUML_JAR": "plantuml_jar",
    "REMDER_PLANTUML_JAR": "plantuml_jar",
    "REMDER_OUTDIR": "out_dir",
    "REMDER_RENDER_TIMEOUT": "render_timeout",
    "REMDER_MAX_WORKERS": "max_workers",
    "REMDER_MAX_OUTSTANDING": "max_outstanding",
    "REMDER_PLANTUML_SERVER": "plantuml_server",
    "REMDER_ENGINE_TIMEOUT": "engine_timeout",
    "REMDER_JAVA": "java",
    "REMDER_OPEN_COMMAND": "open_command",
    "REMDER_LOG_LEVEL": "log_level",
}

_TYPE_MAP: dict[str, type] = {
    "render_timeout": float,
    "engine_timeout": float,
    "max_workers": int,
    "max_outstanding": int,
}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Merge defaults, config files, environment and runtime values."""
    config = get_defaults()

    for path in (_GLOBAL_CONFIG_PATH, _find_project_config()):
        if path is None:
            continue
        file_cfg = _load_yaml_config(path)
        if file_cfg:
            logger.debug("Applying config file %s", path)
            config.update(file_cfg)

    config.update(_load_env_vars())
    # CLI options left unset arrive as None
    config.update({k: v for k, v in runtime_overrides.items() if v is not None})

    return config


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return None
    if isinstance(data, dict):
        return data
    logger.warning("Config file %s is not a mapping, ignoring", path)
    return None


def _find_project_config() -> Path | None:
    """Search for remder.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if not value:
            continue
        result[config_key] = _coerce_env_value(config_key, value)
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the key's type."""
    target_type = _TYPE_MAP.get(key)
    if target_type is None:
        return value
    try:
        return target_type(value)
    except ValueError:
        logger.warning(
            "Cannot convert env var for '%s' to %s: %s", key, target_type.__name__, value
        )
        return value
