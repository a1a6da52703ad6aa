"""Source resolution — turns a key into SVG markup."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from svgprovider.errors.exceptions import SourceUnavailableError
from svgprovider.sources.assets import AssetBundle, DirectoryAssetBundle
from svgprovider.sources.files import LocalFileReader
from svgprovider.sources.http import HttpSvgClient
from svgprovider.types import SvgSource

if TYPE_CHECKING:
    from svgprovider.key import SvgImageKey

logger = logging.getLogger(__name__)


class SourceResolver:
    """Resolves markup for a key: custom getter first, then the key's source.

    Collaborators are created lazily, so a resolver that only sees raw
    markup never opens an HTTP client.
    """

    def __init__(
        self,
        asset_bundle: AssetBundle | None = None,
        file_reader: LocalFileReader | None = None,
        http_client: HttpSvgClient | None = None,
    ) -> None:
        self._asset_bundle = asset_bundle
        self._file_reader = file_reader
        self._http_client = http_client
        self._strategies: dict[SvgSource, Callable[[SvgImageKey], Awaitable[str]]] = {
            SvgSource.ASSET: self._from_asset,
            SvgSource.FILE: self._from_file,
            SvgSource.NETWORK: self._from_network,
            SvgSource.RAW: self._from_raw,
        }

    async def resolve(self, key: SvgImageKey) -> str:
        if key.svg_getter is not None:
            markup = await self._from_getter(key)
            if markup is not None:
                logger.debug("Custom getter supplied markup for %s", key.path)
                return markup

        return await self._strategies[key.source](key)

    async def close(self) -> None:
        if self._http_client:
            await self._http_client.close()

    @staticmethod
    async def _from_getter(key: SvgImageKey) -> str | None:
        result = key.svg_getter(key)
        if inspect.isawaitable(result):
            result = await result
        if result is None or isinstance(result, str):
            return result
        raise SourceUnavailableError(
            f"Custom getter for {key.path} returned {type(result).__name__}, expected str",
            error_type="bad_fetcher_result",
            locator=key.path,
        )

    async def _from_asset(self, key: SvgImageKey) -> str:
        if self._asset_bundle is None:
            self._asset_bundle = DirectoryAssetBundle(".")
        return await self._asset_bundle.load_string(key.path)

    async def _from_file(self, key: SvgImageKey) -> str:
        if self._file_reader is None:
            self._file_reader = LocalFileReader()
        return await self._file_reader.read_text(key.path)

    async def _from_network(self, key: SvgImageKey) -> str:
        if self._http_client is None:
            self._http_client = HttpSvgClient()
        return await self._http_client.get_text(key.path, key.headers_dict)

    @staticmethod
    async def _from_raw(key: SvgImageKey) -> str:
        return key.path
