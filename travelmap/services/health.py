from __future__ import annotations

import asyncio

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from travelmap.core.exceptions import StoreUnavailableError


class HealthService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None):
        self._session_factory = session_factory

    async def ok(self) -> dict:
        if self._session_factory is None:
            return {"ok": True}
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
            raise StoreUnavailableError("database is not reachable") from exc
        return {"ok": True}
