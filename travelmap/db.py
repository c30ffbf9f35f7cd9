# travelmap/db.py
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

_ASYNC_SCHEMES = {
    "postgresql+psycopg://": "postgresql+asyncpg://",
    "postgresql+psycopg2://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
}


def to_async_url(database_url: str) -> str:
    """Rewrite sync PostgreSQL URLs so they use the asyncpg driver."""
    for prefix, replacement in _ASYNC_SCHEMES.items():
        if database_url.startswith(prefix):
            return database_url.replace(prefix, replacement, 1)
    return database_url


def create_engine(database_url: str) -> AsyncEngine:
    url = make_url(to_async_url(database_url))
    connect_args = {}

    if url.get_backend_name() == "postgresql" and url.get_driver_name() == "asyncpg":
        query = dict(url.query)
        # asyncpg takes ssl as a connect arg and rejects channel_binding
        if "sslmode" in query:
            connect_args["ssl"] = query.pop("sslmode")
        query.pop("channel_binding", None)
        url = url.set(query=query)

    return create_async_engine(url, pool_pre_ping=True, connect_args=connect_args)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
