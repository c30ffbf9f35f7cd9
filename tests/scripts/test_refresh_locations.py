from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from scripts.tools import refresh_locations
from tests.fakes import amadeus_location
from travelmap.dto import LocationDTO

NOW = datetime(2026, 10, 1, tzinfo=UTC)


def _stored(code: str, *, age_days: int, latitude: float = 10.0) -> LocationDTO:
    return LocationDTO(
        code=code,
        name=f"{code} OLD",
        latitude=latitude,
        longitude=20.0,
        kind="airport",
        updated_at=NOW - timedelta(days=age_days),
    )


@pytest.mark.asyncio
async def test_refresh_updates_only_stale_rows(store, provider, resolver):
    store.rows = {
        "AAA": _stored("AAA", age_days=200, latitude=1.0),
        "BBB": _stored("BBB", age_days=120),
        "CCC": _stored("CCC", age_days=5),
    }
    provider.locations = [amadeus_location("AAA", latitude=2.0), amadeus_location("CCC")]

    summary = await refresh_locations.refresh_stale_locations(store, resolver, max_age_days=90, now=NOW)

    assert summary == {"tried": 2, "refreshed": 1, "failed": 1}
    assert store.rows["AAA"].latitude == 2.0
    assert store.rows["AAA"].updated_at != NOW - timedelta(days=200)
    assert store.rows["BBB"].name == "BBB OLD"
    assert [code for name, code in provider.calls] == ["AAA", "BBB"]


@pytest.mark.asyncio
async def test_refresh_respects_limit_oldest_first(store, provider, resolver):
    store.rows = {
        "AAA": _stored("AAA", age_days=100),
        "BBB": _stored("BBB", age_days=300),
    }
    provider.locations = [amadeus_location("AAA"), amadeus_location("BBB")]

    summary = await refresh_locations.refresh_stale_locations(
        store, resolver, max_age_days=90, limit=1, now=NOW
    )

    assert summary["tried"] == 1
    assert [code for _, code in provider.calls] == ["BBB"]


@pytest.mark.asyncio
async def test_dry_run_does_not_call_provider(store, provider, resolver):
    store.rows = {"AAA": _stored("AAA", age_days=365)}

    summary = await refresh_locations.refresh_stale_locations(
        store, resolver, max_age_days=90, dry_run=True, now=NOW
    )

    assert summary == {"tried": 1, "refreshed": 0, "failed": 0}
    assert provider.calls == []
