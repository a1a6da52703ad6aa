"""Tests for the in-memory bitmap LRU."""

from PIL import Image

from svgprovider.cache.memory import BitmapMemoryCache
from svgprovider.key import SvgImageKey
from svgprovider.types import DecodedBitmap, SvgSource


def _key(path: str, side: int = 10, source: SvgSource = SvgSource.RAW) -> SvgImageKey:
    return SvgImageKey(path=path, source=source, pixel_width=side, pixel_height=side, scale=1.0)


def _bitmap(side: int = 10) -> DecodedBitmap:
    return DecodedBitmap(image=Image.new("RGBA", (side, side)))


class TestBitmapMemoryCache:
    def test_get_set(self):
        cache = BitmapMemoryCache()
        bitmap = _bitmap()
        cache.set(_key("a"), bitmap)
        assert cache.get(_key("a")) is bitmap

    def test_get_miss(self):
        assert BitmapMemoryCache().get(_key("nope")) is None

    def test_entry_limit_evicts_least_recently_used(self):
        cache = BitmapMemoryCache(max_entries=2)
        cache.set(_key("k1"), _bitmap())
        cache.set(_key("k2"), _bitmap())
        cache.get(_key("k1"))
        cache.set(_key("k3"), _bitmap())
        assert _key("k1") in cache
        assert _key("k2") not in cache
        assert _key("k3") in cache

    def test_size_limit_evicts_oldest(self):
        # 10x10 RGBA = 400 bytes; 0.001 MB ≈ 1048 bytes fits two
        cache = BitmapMemoryCache(max_size_mb=0.001)
        cache.set(_key("k1"), _bitmap())
        cache.set(_key("k2"), _bitmap())
        cache.set(_key("k3"), _bitmap())
        assert len(cache) == 2
        assert cache.get(_key("k1")) is None

    def test_replacing_entry_keeps_size_consistent(self):
        cache = BitmapMemoryCache()
        cache.set(_key("a"), _bitmap(10))
        cache.set(_key("a"), _bitmap(20))
        assert len(cache) == 1
        assert cache.size_mb == 20 * 20 * 4 / (1024 * 1024)

    def test_evict(self):
        cache = BitmapMemoryCache()
        cache.set(_key("a"), _bitmap())
        assert cache.evict(_key("a")) is True
        assert cache.evict(_key("a")) is False
        assert cache.size_mb == 0

    def test_invalidate_by_path(self):
        cache = BitmapMemoryCache()
        cache.set(_key("a", 10), _bitmap())
        cache.set(_key("a", 20), _bitmap())
        cache.set(_key("b"), _bitmap())
        assert cache.invalidate(path="a") == 2
        assert len(cache) == 1

    def test_invalidate_by_source(self):
        cache = BitmapMemoryCache()
        cache.set(_key("a", source=SvgSource.FILE), _bitmap())
        cache.set(_key("b", source=SvgSource.ASSET), _bitmap())
        assert cache.invalidate(source=SvgSource.FILE) == 1
        assert _key("b", source=SvgSource.ASSET) in cache

    def test_clear(self):
        cache = BitmapMemoryCache()
        cache.set(_key("a"), _bitmap())
        cache.clear()
        assert len(cache) == 0
        assert cache.size_mb == 0
