"""SQLAlchemy implementation of the location store."""

from __future__ import annotations

import asyncio
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import func

from travelmap.core.exceptions import StoreUnavailableError
from travelmap.dto import LocationDTO
from travelmap.models import Location
from travelmap.repositories.interfaces import LocationStore

# asyncpg raises connect failures as OSError or TimeoutError, unwrapped by SQLAlchemy
_STORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)

# Columns refreshed when a known code is resolved again
_REFRESHED_COLUMNS = ("name", "city", "country", "country_code", "latitude", "longitude", "kind")


class SqlAlchemyLocationStore(LocationStore):
    """PostgreSQL-backed store; every call runs in its own short-lived session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, code: str) -> LocationDTO | None:
        try:
            async with self._session_factory() as session:
                row = await session.scalar(select(Location).where(Location.code == code.upper()))
        except _STORE_ERRORS as exc:
            raise StoreUnavailableError(f"location lookup failed for {code}") from exc
        if row is None:
            return None
        return LocationDTO.model_validate(row)

    async def upsert(self, location: LocationDTO) -> None:
        values = {
            "code": location.code.upper(),
            "name": location.name,
            "city": location.city,
            "country": location.country,
            "country_code": location.country_code,
            "latitude": location.latitude,
            "longitude": location.longitude,
            "kind": location.kind,
        }
        stmt = insert(Location).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Location.code],
            set_={
                **{column: stmt.excluded[column] for column in _REFRESHED_COLUMNS},
                "updated_at": func.now(),
            },
        )
        try:
            async with self._session_factory() as session:
                await session.execute(stmt)
                await session.commit()
        except _STORE_ERRORS as exc:
            raise StoreUnavailableError(f"location upsert failed for {location.code}") from exc

    async def list_stale(self, *, older_than: datetime, limit: int | None) -> list[LocationDTO]:
        stmt = select(Location).where(Location.updated_at < older_than).order_by(Location.updated_at)
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            async with self._session_factory() as session:
                rows = (await session.scalars(stmt)).all()
        except _STORE_ERRORS as exc:
            raise StoreUnavailableError("stale location listing failed") from exc
        return [LocationDTO.model_validate(row) for row in rows]
