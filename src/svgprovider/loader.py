"""Load orchestration — markup resolution, rasterization and decode for one key."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from svgprovider.render.rasterizer import CairoRasterizer, Rasterizer, released
from svgprovider.render.tint import resolve_filter_color
from svgprovider.sources.assets import DirectoryAssetBundle
from svgprovider.sources.http import HttpSvgClient
from svgprovider.sources.resolver import SourceResolver
from svgprovider.types import DecodedBitmap

if TYPE_CHECKING:
    from svgprovider.config.settings import Settings
    from svgprovider.key import SvgImageKey

logger = logging.getLogger(__name__)


class SvgLoader:
    """Produces a decoded bitmap for a key.

    Holds no per-key state, so concurrent loads of different keys do not
    interact. No retries and no placeholder image: failures propagate.
    """

    def __init__(
        self,
        resolver: SourceResolver | None = None,
        rasterizer: Rasterizer | None = None,
        transparent_workaround: bool = False,
        prefer_sync_decode: bool = True,
    ) -> None:
        self._resolver = resolver or SourceResolver()
        self._rasterizer = rasterizer or CairoRasterizer()
        self._transparent_workaround = transparent_workaround
        self._prefer_sync_decode = prefer_sync_decode

    @classmethod
    def from_settings(cls, settings: Settings) -> SvgLoader:
        resolver = SourceResolver(
            asset_bundle=DirectoryAssetBundle(settings.asset_dir),
            http_client=HttpSvgClient(timeout=settings.http_timeout),
        )
        return cls(
            resolver=resolver,
            transparent_workaround=settings.transparent_workaround,
            prefer_sync_decode=settings.prefer_sync_decode,
        )

    async def load(self, key: SvgImageKey) -> DecodedBitmap:
        """Resolve, rasterize and decode. The bitmap's display scale is 1.0."""
        logger.debug(
            "Loading %s '%s' at %dx%d", key.source, key.path, key.pixel_width, key.pixel_height
        )
        markup = await self._resolver.resolve(key)
        tint = resolve_filter_color(key.color, self._transparent_workaround)
        scene = await self._rasterizer.parse_and_render(
            markup, (key.pixel_width, key.pixel_height), tint
        )

        with released(scene):
            if self._prefer_sync_decode and scene.supports_sync_decode:
                image = scene.to_image_sync(key.pixel_width, key.pixel_height)
            else:
                image = await scene.to_image(key.pixel_width, key.pixel_height)

        logger.debug("Decoded '%s' (%dx%d)", key.path, image.width, image.height)
        return DecodedBitmap(image=image, scale=1.0)

    async def close(self) -> None:
        await self._resolver.close()

    async def __aenter__(self) -> SvgLoader:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
