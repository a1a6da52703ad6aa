"""Configuration — defaults, YAML/env hierarchy and validated settings."""

from svgprovider.config.hierarchy import load_config_hierarchy
from svgprovider.config.settings import Settings, load_settings

__all__ = ["Settings", "load_config_hierarchy", "load_settings"]
