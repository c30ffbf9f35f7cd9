"""JSON memoization layer over a byte cache backend."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from travelmap.repositories.interfaces import CacheBackend

logger = structlog.get_logger(__name__)

LOCATION_SEARCH_TTL_SECONDS = 86400
FLIGHT_SEARCH_TTL_SECONDS = 900
HOTEL_SEARCH_TTL_SECONDS = 3600


class ResultCache:
    """Degrading cache: backend failures become misses or skipped writes, never errors."""

    def __init__(self, backend: CacheBackend) -> None:
        self._backend = backend

    async def get(self, key: str) -> Any | None:
        try:
            raw = await self._backend.get(key)
        except Exception as exc:
            logger.warning("result_cache_read_failed", key=key, error=str(exc))
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.warning("result_cache_corrupt_entry", key=key, error=str(exc))
            return None

    async def put(self, key: str, payload: Any, ttl_seconds: int) -> None:
        try:
            raw = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError) as exc:
            logger.warning("result_cache_unserializable", key=key, error=str(exc))
            return
        try:
            await self._backend.set(key, raw, ttl_seconds)
        except Exception as exc:
            logger.warning("result_cache_write_failed", key=key, ttl=ttl_seconds, error=str(exc))

    async def get_or_fill(
        self,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
        ttl_seconds: int,
    ) -> tuple[Any, bool]:
        """Cache-aside lookup.

        Returns ``(payload, cached)``. On a miss ``fetch`` is awaited and its
        result stored unless it is ``None``. Errors raised by ``fetch`` propagate.
        """

        cached = await self.get(key)
        if cached is not None:
            logger.debug("result_cache_hit", key=key)
            return cached, True

        payload = await fetch()
        if payload is not None:
            await self.put(key, payload, ttl_seconds)
        return payload, False
