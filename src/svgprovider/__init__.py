"""svgprovider — rasterize SVG assets into cached bitmaps keyed by display size."""

from svgprovider.cache import ImageCache
from svgprovider.errors import (
    InvalidConfigurationError,
    MalformedMarkupError,
    SourceUnavailableError,
    SvgProviderError,
)
from svgprovider.key import SvgImageKey, derive_key, obtain_key
from svgprovider.loader import SvgLoader
from svgprovider.provider import SvgProvider
from svgprovider.types import (
    Color,
    DecodedBitmap,
    ImageConfiguration,
    Size,
    SvgRequest,
    SvgSource,
)

__version__ = "0.1.0"

__all__ = [
    "Color",
    "DecodedBitmap",
    "ImageCache",
    "ImageConfiguration",
    "InvalidConfigurationError",
    "MalformedMarkupError",
    "Size",
    "SourceUnavailableError",
    "SvgImageKey",
    "SvgLoader",
    "SvgProvider",
    "SvgProviderError",
    "SvgRequest",
    "SvgSource",
    "derive_key",
    "obtain_key",
]
