"""Cache subsystem — bitmap memoization keyed by SvgImageKey."""

from svgprovider.cache.image_cache import ImageCache
from svgprovider.cache.memory import BitmapMemoryCache
from svgprovider.cache.stats import CacheStats

__all__ = ["BitmapMemoryCache", "CacheStats", "ImageCache"]
