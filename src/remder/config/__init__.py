"""Configuration — defaults, layered sources, validated settings."""

from remder.config.hierarchy import load_config_hierarchy
from remder.config.schema import RemderSettings, load_settings

__all__ = ["RemderSettings", "load_config_hierarchy", "load_settings"]
