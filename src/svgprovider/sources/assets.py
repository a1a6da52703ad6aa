"""Asset bundles — read bundled SVG text resources by locator."""

from __future__ import annotations

import asyncio
import logging
from importlib import resources
from pathlib import Path
from typing import Protocol

from svgprovider.errors.exceptions import SourceUnavailableError

logger = logging.getLogger(__name__)


class AssetBundle(Protocol):
    async def load_string(self, locator: str) -> str: ...


class DirectoryAssetBundle:
    """Assets laid out under a root directory, addressed by relative path."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    async def load_string(self, locator: str) -> str:
        path = (self._root / locator).resolve()
        if not path.is_relative_to(self._root):
            raise SourceUnavailableError(
                f"Asset outside bundle root: {locator}",
                error_type="not_found",
                locator=locator,
            )
        if not path.is_file():
            raise SourceUnavailableError(
                f"Asset not found: {locator}", error_type="not_found", locator=locator
            )
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as exc:
            raise SourceUnavailableError(
                f"Cannot read asset {locator}: {exc}",
                error_type="io_error",
                locator=locator,
                original=exc,
            ) from exc


class PackageAssetBundle:
    """Assets shipped as package data, read through importlib.resources."""

    def __init__(self, package: str) -> None:
        self._package = package

    async def load_string(self, locator: str) -> str:
        resource = resources.files(self._package).joinpath(locator)
        try:
            return await asyncio.to_thread(resource.read_text, encoding="utf-8")
        except FileNotFoundError as exc:
            raise SourceUnavailableError(
                f"Asset not found: {self._package}/{locator}",
                error_type="not_found",
                locator=locator,
                original=exc,
            ) from exc
        except OSError as exc:
            raise SourceUnavailableError(
                f"Cannot read asset {self._package}/{locator}: {exc}",
                error_type="io_error",
                locator=locator,
                original=exc,
            ) from exc
