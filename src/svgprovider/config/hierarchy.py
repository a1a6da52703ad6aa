"""Layered configuration lookup.

Layers, lowest priority first:
  package defaults, ~/.svgprovider/config.yaml, the nearest svgprovider.yaml
  at or above the working directory, SVGPROVIDER_<KEY> environment
  variables, then keyword overrides.

Values are merged untyped. Environment values stay strings; Settings
converts or rejects them.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from svgprovider.config.defaults import get_defaults

logger = logging.getLogger(__name__)

ENV_PREFIX = "SVGPROVIDER_"

_GLOBAL_CONFIG_PATH = Path.home() / ".svgprovider" / "config.yaml"
_PROJECT_CONFIG_NAME = "svgprovider.yaml"


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Merge every layer into one dict. ``None`` overrides are skipped."""
    merged = get_defaults()
    known = tuple(merged)
    for layer in _file_layers():
        merged.update(layer)
    merged.update(env_layer(known))
    merged.update({k: v for k, v in runtime_overrides.items() if v is not None})
    return merged


def env_layer(keys: tuple[str, ...]) -> dict[str, str]:
    """Raw ``SVGPROVIDER_<KEY>`` values for the given config keys."""
    found = {}
    for key in keys:
        value = os.environ.get(ENV_PREFIX + key.upper())
        if value is not None:
            found[key] = value
    return found


def _file_layers() -> Iterator[dict[str, Any]]:
    candidates = [_GLOBAL_CONFIG_PATH, _find_project_config()]
    for path in candidates:
        if path is None:
            continue
        data = _load_yaml_config(path)
        if data:
            logger.debug("Loaded config from %s", path)
            yield data


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Skipping unreadable config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Skipping config %s: top level is not a mapping", path)
        return None
    return data


def _find_project_config() -> Path | None:
    here = Path.cwd()
    for directory in (here, *here.parents):
        candidate = directory / _PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None
