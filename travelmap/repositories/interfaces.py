"""Storage abstractions consumed by the resolver and the result cache."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from travelmap.dto import LocationDTO


class LocationStore(Protocol):
    """Durable table of resolved locations keyed by IATA code."""

    async def get(self, code: str) -> LocationDTO | None: ...

    async def upsert(self, location: LocationDTO) -> None: ...

    async def list_stale(self, *, older_than: datetime, limit: int | None) -> list[LocationDTO]: ...


class CacheBackend(Protocol):
    """Byte-oriented key/value store with per-key expiry."""

    async def get(self, key: str) -> bytes | None: ...

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None: ...
