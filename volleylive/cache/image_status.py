"""
Bounded memory of which logo/photo URLs loaded and which failed.

Presentation code asks for a URL's status before rendering an image so a
known-broken URL is never retried. The cache is LRU-bounded so it cannot
grow for the lifetime of the process.
"""
import threading
from collections import OrderedDict
from typing import Dict, Optional

from loguru import logger

from volleylive.config.settings import settings
from volleylive.models.enums import ImageStatus


class ImageStatusCache:
    """
    LRU map of URL -> ImageStatus.

    Only settled outcomes (OK / FAIL) are stored; anything unknown reads as
    LOADING, and an empty URL reads as NONE.
    """

    def __init__(self, max_entries: Optional[int] = None):
        self.max_entries = max_entries or settings.image_cache_max_entries
        self._entries: "OrderedDict[str, ImageStatus]" = OrderedDict()
        self._lock = threading.Lock()
        self._stats = {"hits": 0, "misses": 0, "evictions": 0}

    def status(self, url: Optional[str]) -> ImageStatus:
        if not url:
            return ImageStatus.NONE
        with self._lock:
            cached = self._entries.get(url)
            if cached is None:
                self._stats["misses"] += 1
                return ImageStatus.LOADING
            self._entries.move_to_end(url)
            self._stats["hits"] += 1
            return cached

    def record(self, url: Optional[str], ok: bool) -> None:
        if not url:
            return
        with self._lock:
            self._entries[url] = ImageStatus.OK if ok else ImageStatus.FAIL
            self._entries.move_to_end(url)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                self._stats["evictions"] += 1
                logger.debug(f"Image status evicted: {evicted}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            return {**self._stats, "size": len(self._entries)}
