"""Consumer-facing facade: request -> key -> memoized bitmap."""

from __future__ import annotations

import logging
from typing import Any

from svgprovider.cache.image_cache import ImageCache
from svgprovider.config.defaults import DEFAULT_LOGICAL_EXTENT
from svgprovider.config.settings import Settings, load_settings
from svgprovider.key import SvgImageKey, derive_key
from svgprovider.loader import SvgLoader
from svgprovider.types import DecodedBitmap, ImageConfiguration, SvgRequest

logger = logging.getLogger(__name__)


class SvgProvider:
    """Resolves SVG requests to bitmaps through an ImageCache.

    Usage::

        async with SvgProvider.from_settings(asset_dir="assets") as provider:
            bitmap = await provider.resolve(
                SvgRequest(path="icon.svg", size=Size(width=32, height=32)),
                ImageConfiguration(device_pixel_ratio=2.0),
            )
    """

    def __init__(
        self,
        loader: SvgLoader | None = None,
        cache: ImageCache | None = None,
        default_extent: float = DEFAULT_LOGICAL_EXTENT,
    ) -> None:
        self._loader = loader or SvgLoader()
        self._cache = cache or ImageCache()
        self._default_extent = default_extent

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: Any) -> SvgProvider:
        """Build a provider from resolved settings.

        Without ``settings`` the configuration hierarchy is loaded with ``overrides``.
        """
        if settings is None:
            settings = load_settings(**overrides)
        return cls(
            loader=SvgLoader.from_settings(settings),
            cache=ImageCache(
                max_entries=settings.cache_max_entries,
                max_size_mb=settings.cache_max_mb,
            ),
            default_extent=settings.default_extent,
        )

    @property
    def cache(self) -> ImageCache:
        return self._cache

    @property
    def loader(self) -> SvgLoader:
        return self._loader

    def obtain_key(
        self, request: SvgRequest, configuration: ImageConfiguration | None = None
    ) -> SvgImageKey:
        return derive_key(request, configuration, self._default_extent)

    async def resolve(
        self, request: SvgRequest, configuration: ImageConfiguration | None = None
    ) -> DecodedBitmap:
        key = self.obtain_key(request, configuration)
        return await self._cache.put_if_absent(key, self._loader.load)

    async def close(self) -> None:
        await self._loader.close()

    async def __aenter__(self) -> SvgProvider:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
