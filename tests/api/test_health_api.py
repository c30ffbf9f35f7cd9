import pytest
from sqlalchemy.exc import OperationalError

from travelmap.services.health import HealthService

pytestmark = pytest.mark.api


class _BrokenSession:
    async def __aenter__(self):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("db down"))

    async def __aexit__(self, *exc):
        return False


@pytest.mark.asyncio
async def test_healthz_ok(app_client):
    res = await app_client.get("/healthz")

    assert res.status_code == 200
    assert res.json() == {"ok": True}


@pytest.mark.asyncio
async def test_health_reports_env(app_client):
    res = await app_client.get("/health")

    assert res.json() == {"status": "ok", "env": "test"}


@pytest.mark.asyncio
async def test_readyz_ok_without_database(app_client):
    res = await app_client.get("/readyz")

    assert res.status_code == 200


@pytest.mark.asyncio
async def test_readyz_503_when_database_unreachable(app_client, container):
    container.health = HealthService(lambda: _BrokenSession())

    res = await app_client.get("/readyz")

    assert res.status_code == 503
    assert res.json() == {"detail": "database is not reachable"}


@pytest.mark.asyncio
async def test_request_id_echoes_back(app_client):
    res = await app_client.get("/healthz", headers={"X-Request-ID": "test-123"})

    assert res.headers.get("X-Request-ID") == "test-123"


@pytest.mark.asyncio
async def test_request_id_generated_when_missing(app_client):
    res = await app_client.get("/healthz")

    assert len(res.headers.get("X-Request-ID", "")) > 0
