"""Delete expired rows from the shared result cache table."""

from __future__ import annotations

import asyncio

import structlog

from travelmap.core.config import get_settings
from travelmap.db import create_engine, create_session_factory
from travelmap.logging import setup_logging
from travelmap.repositories.sqlalchemy import SqlAlchemyCacheBackend

logger = structlog.get_logger(__name__)


async def purge(database_url: str) -> int:
    engine = create_engine(database_url)
    try:
        removed = await SqlAlchemyCacheBackend(create_session_factory(engine)).purge_expired()
    finally:
        await engine.dispose()
    logger.info("result_cache_purged", removed=removed)
    return removed


def main() -> int:
    setup_logging()
    asyncio.run(purge(get_settings().database_url))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
