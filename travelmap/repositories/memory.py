"""In-process cache backend for single-worker deployments and tests."""

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable

from travelmap.repositories.interfaces import CacheBackend


class MemoryCacheBackend(CacheBackend):
    """Bounded LRU with per-entry expiry.

    Expired entries are dropped lazily on read; the least recently used entry
    is evicted once ``max_entries`` is exceeded.
    """

    def __init__(self, max_entries: int = 1024, clock: Callable[[], float] = time.monotonic) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, bytes]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> bytes | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return value

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        self._entries[key] = (self._clock() + ttl_seconds, value)
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
