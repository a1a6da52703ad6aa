"""Rasterizer backend — CairoSVG parsing and PNG decode into Pillow images."""

from __future__ import annotations

import asyncio
import contextlib
import io
import logging
from collections.abc import Iterator
from typing import Any, Protocol

from PIL import Image

from svgprovider.errors.exceptions import MalformedMarkupError
from svgprovider.render.tint import apply_tint
from svgprovider.types import Color

logger = logging.getLogger(__name__)

_DPI = 96


class VectorScene(Protocol):
    """Parsed drawable awaiting pixel extraction. Must be released once."""

    supports_sync_decode: bool

    def to_image_sync(self, pixel_width: int, pixel_height: int) -> Image.Image: ...

    async def to_image(self, pixel_width: int, pixel_height: int) -> Image.Image: ...

    def release(self) -> None: ...


class Rasterizer(Protocol):
    async def parse_and_render(
        self, markup: str, target_size: tuple[int, int], tint: Color
    ) -> VectorScene: ...


@contextlib.contextmanager
def released(scene: VectorScene) -> Iterator[VectorScene]:
    """Yield the scene and release it on exit, whether or not decode raised."""
    try:
        yield scene
    finally:
        scene.release()


class CairoScene:
    """A parsed CairoSVG tree plus the tint to apply after rendering."""

    supports_sync_decode = True

    def __init__(self, tree: Any, target_size: tuple[int, int], tint: Color) -> None:
        self._tree = tree
        self._target_size = target_size
        self._tint = tint

    @property
    def target_size(self) -> tuple[int, int]:
        return self._target_size

    @property
    def released(self) -> bool:
        return self._tree is None

    def to_image_sync(self, pixel_width: int, pixel_height: int) -> Image.Image:
        if self._tree is None:
            raise RuntimeError("Scene already released")
        if pixel_width == 0 or pixel_height == 0:
            return Image.new("RGBA", (pixel_width, pixel_height))

        from cairosvg.surface import PNGSurface

        buf = io.BytesIO()
        try:
            surface = PNGSurface(
                self._tree,
                buf,
                _DPI,
                output_width=pixel_width,
                output_height=pixel_height,
            )
            surface.finish()
        except Exception as exc:
            raise MalformedMarkupError(
                f"Failed to render SVG: {exc}", error_type="render_failure", original=exc
            ) from exc

        buf.seek(0)
        with Image.open(buf) as png:
            image = png.convert("RGBA")
        if image.size != (pixel_width, pixel_height):
            image = image.resize((pixel_width, pixel_height))
        return apply_tint(image, self._tint)

    async def to_image(self, pixel_width: int, pixel_height: int) -> Image.Image:
        return await asyncio.to_thread(self.to_image_sync, pixel_width, pixel_height)

    def release(self) -> None:
        self._tree = None


class CairoRasterizer:
    """Parses markup with CairoSVG on a worker thread.

    cairosvg is imported on first use; it needs the native cairo library.
    """

    def __init__(self, unsafe: bool = False) -> None:
        self._unsafe = unsafe

    async def parse_and_render(
        self, markup: str, target_size: tuple[int, int], tint: Color
    ) -> CairoScene:
        tree = await asyncio.to_thread(self._parse, markup)
        logger.debug("Parsed SVG for %dx%d target", *target_size)
        return CairoScene(tree, target_size, tint)

    def _parse(self, markup: str) -> Any:
        from cairosvg.parser import Tree

        try:
            return Tree(bytestring=markup.encode("utf-8"), unsafe=self._unsafe)
        except Exception as exc:
            raise MalformedMarkupError(
                f"Malformed SVG markup: {exc}", error_type="parse_failure", original=exc
            ) from exc
