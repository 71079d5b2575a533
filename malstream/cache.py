"""In-memory TTL cache for scraped list pages."""

from __future__ import annotations

import logging
import time
from typing import Callable

from malstream.models import ListEntry

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str, str]


class ListCache:
    """Scraped entries keyed by ``(username, status, media)``.

    A ``ttl`` of 0 or less disables the cache: nothing is stored and every
    lookup misses.
    """

    def __init__(self, ttl: float = 0.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[CacheKey, tuple[float, list[ListEntry]]] = {}

    @property
    def enabled(self) -> bool:
        return self.ttl > 0

    def get(self, key: CacheKey) -> list[ListEntry] | None:
        if not self.enabled:
            return None
        hit = self._entries.get(key)
        if hit is None:
            return None
        stored_at, entries = hit
        if self._clock() - stored_at > self.ttl:
            del self._entries[key]
            return None
        logger.debug("Cache hit for %s", key)
        return list(entries)

    def put(self, key: CacheKey, entries: list[ListEntry]) -> None:
        if self.enabled:
            self._entries[key] = (self._clock(), list(entries))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
