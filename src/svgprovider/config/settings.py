"""Validated settings built from the merged configuration hierarchy."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from svgprovider.config.defaults import (
    DEFAULT_ASSET_DIR,
    DEFAULT_CACHE_MAX_ENTRIES,
    DEFAULT_CACHE_MAX_MB,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOGICAL_EXTENT,
    DEFAULT_PREFER_SYNC_DECODE,
    DEFAULT_TRANSPARENT_WORKAROUND,
)
from svgprovider.config.hierarchy import load_config_hierarchy
from svgprovider.errors.exceptions import InvalidConfigurationError

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseModel):
    default_extent: float = Field(default=DEFAULT_LOGICAL_EXTENT, ge=0)
    asset_dir: Path = Path(DEFAULT_ASSET_DIR)
    http_timeout: float = Field(default=DEFAULT_HTTP_TIMEOUT, gt=0)
    cache_max_entries: int = Field(default=DEFAULT_CACHE_MAX_ENTRIES, ge=1)
    cache_max_mb: float = Field(default=DEFAULT_CACHE_MAX_MB, gt=0)
    transparent_workaround: bool = DEFAULT_TRANSPARENT_WORKAROUND
    prefer_sync_decode: bool = DEFAULT_PREFER_SYNC_DECODE
    log_level: str = DEFAULT_LOG_LEVEL

    model_config = {"extra": "ignore"}

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_settings(**runtime_overrides: Any) -> Settings:
    """Resolve the configuration hierarchy and validate it.

    Raises InvalidConfigurationError naming the first offending key.
    """
    raw = load_config_hierarchy(**runtime_overrides)
    try:
        return Settings(**raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        key = ".".join(str(p) for p in first["loc"]) or None
        raise InvalidConfigurationError(
            f"Invalid configuration for '{key}': {first['msg']}", key=key
        ) from exc
