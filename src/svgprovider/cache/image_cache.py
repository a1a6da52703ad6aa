"""Image cache — memoizes bitmaps by key and coalesces in-flight loads."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from svgprovider.cache.memory import BitmapMemoryCache
from svgprovider.cache.stats import CacheStats
from svgprovider.config.defaults import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_MAX_MB
from svgprovider.key import SvgImageKey
from svgprovider.types import DecodedBitmap, SvgSource

logger = logging.getLogger(__name__)

LoadFn = Callable[[SvgImageKey], Awaitable[DecodedBitmap]]


class ImageCache:
    """Host-side bitmap cache.

    At most one load runs per distinct key; every concurrent caller for that
    key awaits the same task. Failed loads are not stored. A cancelled caller
    does not cancel the shared load.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        max_size_mb: float = DEFAULT_CACHE_MAX_MB,
    ) -> None:
        self._memory = BitmapMemoryCache(max_entries=max_entries, max_size_mb=max_size_mb)
        self._pending: dict[SvgImageKey, asyncio.Task[DecodedBitmap]] = {}
        self._stats = CacheStats()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def get(self, key: SvgImageKey) -> DecodedBitmap | None:
        return self._memory.get(key)

    async def put_if_absent(self, key: SvgImageKey, load: LoadFn) -> DecodedBitmap:
        """Return the stored bitmap for key, loading it at most once."""
        bitmap = self._memory.get(key)
        if bitmap is not None:
            self._stats.hits += 1
            return bitmap

        task = self._pending.get(key)
        if task is None:
            self._stats.misses += 1
            task = asyncio.ensure_future(self._load_and_store(key, load))
            self._pending[key] = task
        else:
            self._stats.coalesced += 1

        return await asyncio.shield(task)

    async def _load_and_store(self, key: SvgImageKey, load: LoadFn) -> DecodedBitmap:
        try:
            bitmap = await load(key)
        except Exception as exc:
            self._stats.failures += 1
            logger.warning("Load failed for %s '%s': %s", key.source, key.path, exc)
            raise
        finally:
            self._pending.pop(key, None)
        self._memory.set(key, bitmap)
        return bitmap

    def evict(self, key: SvgImageKey) -> bool:
        return self._memory.evict(key)

    def invalidate(self, path: str | None = None, source: SvgSource | None = None) -> int:
        return self._memory.invalidate(path=path, source=source)

    def clear(self) -> None:
        """Drop stored bitmaps and reset statistics. In-flight loads are kept."""
        self._memory.clear()
        self._stats = CacheStats()

    def stats(self) -> CacheStats:
        return CacheStats(
            entries=len(self._memory),
            size_mb=self._memory.size_mb,
            hits=self._stats.hits,
            misses=self._stats.misses,
            coalesced=self._stats.coalesced,
            failures=self._stats.failures,
        )
