"""Explicitly wired application services with an open/close lifecycle."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import structlog
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from travelmap.core.config import Settings
from travelmap.db import create_engine, create_session_factory
from travelmap.repositories.interfaces import CacheBackend, LocationStore
from travelmap.repositories.memory import MemoryCacheBackend
from travelmap.repositories.sqlalchemy import SqlAlchemyCacheBackend, SqlAlchemyLocationStore
from travelmap.services.flight_search import FlightSearchService
from travelmap.services.health import HealthService
from travelmap.services.hotel_search import HotelSearchService
from travelmap.services.location_resolver import LocationResolver
from travelmap.services.result_cache import ResultCache
from travelmap.services.travel_provider import AmadeusProvider, TravelProvider

logger = structlog.get_logger(__name__)


class ServiceContainer:
    """Holds one instance of every collaborator for the lifetime of the app.

    Tests construct it directly with fakes; ``open_services`` builds the real
    database, HTTP client and provider and guarantees they are released.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        store: LocationStore,
        provider: TravelProvider,
        cache_backend: CacheBackend,
        engine: AsyncEngine | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.provider = provider
        self.cache_backend = cache_backend
        self.engine = engine
        self.session_factory = session_factory
        self.http_client = http_client

        self.result_cache = ResultCache(cache_backend)
        self.resolver = LocationResolver(
            store,
            provider,
            self.result_cache,
            search_ttl_seconds=settings.location_search_ttl_seconds,
        )
        self.flights = FlightSearchService(
            provider,
            self.resolver,
            self.result_cache,
            ttl_seconds=settings.flight_search_ttl_seconds,
        )
        self.hotels = HotelSearchService(
            provider,
            self.resolver,
            self.result_cache,
            ttl_seconds=settings.hotel_search_ttl_seconds,
        )
        self.health = HealthService(session_factory)

    @classmethod
    def from_settings(cls, settings: Settings) -> ServiceContainer:
        engine = create_engine(settings.database_url)
        session_factory = create_session_factory(engine)
        http_client = httpx.AsyncClient()
        provider = AmadeusProvider(
            http_client,
            client_id=settings.amadeus_client_id,
            client_secret=settings.amadeus_client_secret,
            hostname=settings.amadeus_hostname,
            timeout=settings.provider_timeout_seconds,
        )
        if settings.result_cache_backend == "memory":
            cache_backend: CacheBackend = MemoryCacheBackend(settings.result_cache_max_entries)
        else:
            cache_backend = SqlAlchemyCacheBackend(session_factory)
        return cls(
            settings,
            store=SqlAlchemyLocationStore(session_factory),
            provider=provider,
            cache_backend=cache_backend,
            engine=engine,
            session_factory=session_factory,
            http_client=http_client,
        )

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
        if self.engine is not None:
            await self.engine.dispose()
        logger.info("services_closed")


@asynccontextmanager
async def open_services(settings: Settings) -> AsyncIterator[ServiceContainer]:
    container = ServiceContainer.from_settings(settings)
    logger.info(
        "services_opened",
        amadeus_hostname=settings.amadeus_hostname,
        result_cache_backend=settings.result_cache_backend,
    )
    try:
        yield container
    finally:
        await container.aclose()
