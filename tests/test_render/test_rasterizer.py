"""Tests for the CairoSVG rasterizer and scoped scene release."""

import pytest
from PIL import Image

from svgprovider.errors.exceptions import MalformedMarkupError
from svgprovider.render.rasterizer import CairoRasterizer, released
from svgprovider.types import TRANSPARENT, Color


class _CountingScene:
    def __init__(self):
        self.release_count = 0

    def release(self):
        self.release_count += 1


class TestReleased:
    def test_releases_once_on_success(self):
        scene = _CountingScene()
        with released(scene) as s:
            assert s is scene
        assert scene.release_count == 1

    def test_releases_once_on_failure(self):
        scene = _CountingScene()
        with pytest.raises(RuntimeError), released(scene):
            raise RuntimeError("decode failed")
        assert scene.release_count == 1


@pytest.mark.usefixtures("cairo_available")
class TestCairoRasterizer:
    async def test_renders_target_size(self, sample_svg):
        scene = await CairoRasterizer().parse_and_render(sample_svg, (64, 64), TRANSPARENT)
        with released(scene):
            image = scene.to_image_sync(64, 64)
        assert image.size == (64, 64)
        assert image.mode == "RGBA"
        assert image.getpixel((32, 32)) == (0, 0, 0, 255)

    async def test_applies_tint(self, sample_svg):
        red = Color(red=255, green=0, blue=0)
        scene = await CairoRasterizer().parse_and_render(sample_svg, (16, 16), red)
        with released(scene):
            image = await scene.to_image(16, 16)
        assert image.getpixel((8, 8)) == (255, 0, 0, 255)

    async def test_malformed_markup(self):
        with pytest.raises(MalformedMarkupError) as exc_info:
            await CairoRasterizer().parse_and_render("<svg", (10, 10), TRANSPARENT)
        assert exc_info.value.error_type == "parse_failure"

    async def test_zero_area_target(self, sample_svg):
        scene = await CairoRasterizer().parse_and_render(sample_svg, (0, 0), TRANSPARENT)
        with released(scene):
            image = scene.to_image_sync(0, 0)
        assert isinstance(image, Image.Image)
        assert image.size == (0, 0)

    async def test_release_is_idempotent(self, sample_svg):
        scene = await CairoRasterizer().parse_and_render(sample_svg, (8, 8), TRANSPARENT)
        assert scene.target_size == (8, 8)
        scene.release()
        scene.release()
        assert scene.released
        with pytest.raises(RuntimeError):
            scene.to_image_sync(8, 8)
