"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Key derivation fallbacks
DEFAULT_LOGICAL_EXTENT = 100.0
DEFAULT_SCALE = 1.0

# Sources
DEFAULT_ASSET_DIR = "assets"
DEFAULT_HTTP_TIMEOUT = 30.0

# Host image cache
DEFAULT_CACHE_MAX_ENTRIES = 1000
DEFAULT_CACHE_MAX_MB = 100.0

# Rendering
DEFAULT_TRANSPARENT_WORKAROUND = False
DEFAULT_PREFER_SYNC_DECODE = True

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "default_extent": DEFAULT_LOGICAL_EXTENT,
        "asset_dir": DEFAULT_ASSET_DIR,
        "http_timeout": DEFAULT_HTTP_TIMEOUT,
        "cache_max_entries": DEFAULT_CACHE_MAX_ENTRIES,
        "cache_max_mb": DEFAULT_CACHE_MAX_MB,
        "transparent_workaround": DEFAULT_TRANSPARENT_WORKAROUND,
        "prefer_sync_decode": DEFAULT_PREFER_SYNC_DECODE,
        "log_level": DEFAULT_LOG_LEVEL,
    }
