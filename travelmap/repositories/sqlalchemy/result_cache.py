"""Result cache entries kept in a shared database table."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from travelmap.models import ResultCacheEntry
from travelmap.repositories.interfaces import CacheBackend


class SqlAlchemyCacheBackend(CacheBackend):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> bytes | None:
        stmt = select(ResultCacheEntry.value).where(
            ResultCacheEntry.key == key,
            ResultCacheEntry.expires_at > datetime.now(UTC),
        )
        async with self._session_factory() as session:
            return await session.scalar(stmt)

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        expires_at = datetime.now(UTC) + timedelta(seconds=ttl_seconds)
        stmt = insert(ResultCacheEntry).values(key=key, value=value, expires_at=expires_at)
        stmt = stmt.on_conflict_do_update(
            index_elements=[ResultCacheEntry.key],
            set_={"value": stmt.excluded.value, "expires_at": stmt.excluded.expires_at},
        )
        async with self._session_factory() as session:
            await session.execute(stmt)
            await session.commit()

    async def purge_expired(self) -> int:
        """Delete expired rows and return how many were removed."""

        async with self._session_factory() as session:
            result = await session.execute(
                delete(ResultCacheEntry).where(ResultCacheEntry.expires_at <= datetime.now(UTC))
            )
            await session.commit()
        return int(result.rowcount or 0)
