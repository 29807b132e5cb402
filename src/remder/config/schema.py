"""Validated runtime settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from remder.config.defaults import (
    DEFAULT_ENGINE_TIMEOUT,
    DEFAULT_JAVA,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_OUTSTANDING,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OPEN_COMMAND,
    DEFAULT_RENDER_TIMEOUT,
    default_out_dir,
)
from remder.config.hierarchy import load_config_hierarchy

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RemderSettings(BaseModel):
    """Settings resolved once per process (or per Remder instance)."""

    out_dir: Path = Field(default_factory=lambda: Path(default_out_dir()))
    render_timeout: float = Field(default=DEFAULT_RENDER_TIMEOUT, gt=0)
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1)
    max_outstanding: int = Field(default=DEFAULT_MAX_OUTSTANDING, ge=1)
    plantuml_jar: Path | None = None
    plantuml_server: str | None = None
    engine_timeout: float = Field(default=DEFAULT_ENGINE_TIMEOUT, gt=0)
    java: str = DEFAULT_JAVA
    open_command: str = DEFAULT_OPEN_COMMAND
    log_level: str = DEFAULT_LOG_LEVEL

    model_config = {"extra": "ignore"}

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        level = str(value).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_settings(**runtime_overrides: Any) -> RemderSettings:
    """Merge every config source and validate the result.

    Raises pydantic.ValidationError on invalid values.
    """
    return RemderSettings(**load_config_hierarchy(**runtime_overrides))
