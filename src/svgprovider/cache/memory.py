"""In-memory LRU store of decoded bitmaps."""

from __future__ import annotations

from collections import OrderedDict

from svgprovider.config.defaults import DEFAULT_CACHE_MAX_ENTRIES, DEFAULT_CACHE_MAX_MB
from svgprovider.key import SvgImageKey
from svgprovider.types import DecodedBitmap, SvgSource


class BitmapMemoryCache:
    """LRU cache bounded by entry count and total decoded size."""

    def __init__(
        self,
        max_entries: int = DEFAULT_CACHE_MAX_ENTRIES,
        max_size_mb: float = DEFAULT_CACHE_MAX_MB,
    ) -> None:
        self._store: OrderedDict[SvgImageKey, DecodedBitmap] = OrderedDict()
        self._max_entries = max_entries
        self._max_size_bytes = int(max_size_mb * 1024 * 1024)
        self._current_size_bytes = 0

    def get(self, key: SvgImageKey) -> DecodedBitmap | None:
        bitmap = self._store.get(key)
        if bitmap is None:
            return None
        # Move to end (most recently used)
        self._store.move_to_end(key)
        return bitmap

    def set(self, key: SvgImageKey, bitmap: DecodedBitmap) -> None:
        if key in self._store:
            self._remove(key)
        # Evict until there's room
        while self._store and (
            len(self._store) >= self._max_entries
            or self._current_size_bytes + bitmap.size_bytes > self._max_size_bytes
        ):
            self._evict_oldest()
        self._store[key] = bitmap
        self._current_size_bytes += bitmap.size_bytes

    def evict(self, key: SvgImageKey) -> bool:
        if key not in self._store:
            return False
        self._remove(key)
        return True

    def clear(self) -> None:
        self._store.clear()
        self._current_size_bytes = 0

    def invalidate(self, path: str | None = None, source: SvgSource | None = None) -> int:
        """Remove entries matching the given filters. Returns count deleted."""
        to_remove = [key for key in self._store if _matches_filter(key, path, source)]
        for key in to_remove:
            self._remove(key)
        return len(to_remove)

    @property
    def size_mb(self) -> float:
        return self._current_size_bytes / (1024 * 1024)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)

    def _remove(self, key: SvgImageKey) -> None:
        bitmap = self._store.pop(key, None)
        if bitmap is not None:
            self._current_size_bytes -= bitmap.size_bytes

    def _evict_oldest(self) -> None:
        _, bitmap = self._store.popitem(last=False)
        self._current_size_bytes -= bitmap.size_bytes


def _matches_filter(key: SvgImageKey, path: str | None, source: SvgSource | None) -> bool:
    if path and key.path != path:
        return False
    return not (source and key.source != source)
