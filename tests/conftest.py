import pytest
from PIL import Image

from svgprovider.errors.exceptions import MalformedMarkupError

SAMPLE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10" viewBox="0 0 10 10">'
    '<rect width="10" height="10" fill="#000000"/></svg>'
)


class FakeScene:
    """Records decode calls and release count."""

    def __init__(self, tint, supports_sync_decode=True, fail_decode=False):
        self.tint = tint
        self.supports_sync_decode = supports_sync_decode
        self.fail_decode = fail_decode
        self.sync_calls = 0
        self.async_calls = 0
        self.release_count = 0

    def to_image_sync(self, pixel_width, pixel_height):
        self.sync_calls += 1
        return self._image(pixel_width, pixel_height)

    async def to_image(self, pixel_width, pixel_height):
        self.async_calls += 1
        return self._image(pixel_width, pixel_height)

    def release(self):
        self.release_count += 1

    def _image(self, pixel_width, pixel_height):
        if self.fail_decode:
            raise RuntimeError("decode failed")
        return Image.new("RGBA", (pixel_width, pixel_height), (0, 0, 0, 255))


class FakeRasterizer:
    """Stands in for CairoRasterizer; every parse yields a FakeScene."""

    def __init__(self):
        self.calls = []
        self.scenes = []
        self.supports_sync_decode = True
        self.fail_decode = False
        self.fail_parse = False

    async def parse_and_render(self, markup, target_size, tint):
        self.calls.append((markup, target_size, tint))
        if self.fail_parse:
            raise MalformedMarkupError("bad markup", error_type="parse_failure")
        scene = FakeScene(
            tint,
            supports_sync_decode=self.supports_sync_decode,
            fail_decode=self.fail_decode,
        )
        self.scenes.append(scene)
        return scene


@pytest.fixture
def sample_svg():
    return SAMPLE_SVG


@pytest.fixture
def fake_rasterizer():
    return FakeRasterizer()


@pytest.fixture
def asset_dir(tmp_path):
    """Asset bundle root containing icon.svg."""
    root = tmp_path / "assets"
    root.mkdir()
    (root / "icon.svg").write_text(SAMPLE_SVG)
    return root


@pytest.fixture
def cairo_available():
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        pytest.skip("native cairo library not available")
    return True
