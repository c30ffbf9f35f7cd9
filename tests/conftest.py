"""Shared fixtures: services wired to in-memory fakes."""

from __future__ import annotations

import os

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient

from tests.fakes import JFK, LHR, PAR, FakeLocationStore, FakeTravelProvider
from travelmap.core.config import Settings
from travelmap.infra.container import ServiceContainer
from travelmap.repositories.memory import MemoryCacheBackend
from travelmap.services.location_resolver import LocationResolver
from travelmap.services.result_cache import ResultCache

load_dotenv(".env.test", override=False)
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("LOG_FORMAT", "json")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        app_env="test",
        database_url="postgresql+asyncpg://unused@localhost/unused",
        result_cache_backend="memory",
        sentry_dsn="",
        allow_origins="",
    )


@pytest.fixture
def store() -> FakeLocationStore:
    return FakeLocationStore()


@pytest.fixture
def provider() -> FakeTravelProvider:
    return FakeTravelProvider([JFK, LHR, PAR])


@pytest.fixture
def cache_backend() -> MemoryCacheBackend:
    return MemoryCacheBackend(max_entries=128)


@pytest.fixture
def result_cache(cache_backend) -> ResultCache:
    return ResultCache(cache_backend)


@pytest.fixture
def resolver(store, provider, result_cache) -> LocationResolver:
    return LocationResolver(store, provider, result_cache)


@pytest.fixture
def container(settings, store, provider, cache_backend) -> ServiceContainer:
    return ServiceContainer(settings, store=store, provider=provider, cache_backend=cache_backend)


@pytest_asyncio.fixture
async def app_client(container):
    from travelmap.main import create_app

    app = create_app(container=container)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
