import pytest

from tests.fakes import FailingCacheBackend, ManualClock
from travelmap.repositories.memory import MemoryCacheBackend
from travelmap.services.result_cache import ResultCache

PAYLOAD = {
    "flights": [{"id": "1", "price": {"total": "546.70"}, "stops": 0}],
    "meta": {"count": 1},
    "map_data": {"distance_km": 5540, "bounds": {"south": -1.5, "north": 2.25}},
    "ratio": 0.1,
    "big": 12345678901234567,
    "flag": False,
    "nothing": None,
    "name": "Zürich",
}


@pytest.mark.asyncio
async def test_put_then_get_round_trips_within_ttl():
    clock = ManualClock()
    cache = ResultCache(MemoryCacheBackend(clock=clock))

    await cache.put("k", PAYLOAD, ttl_seconds=900)
    clock.advance(899)

    assert await cache.get("k") == PAYLOAD


@pytest.mark.asyncio
async def test_get_after_ttl_is_a_miss():
    clock = ManualClock()
    cache = ResultCache(MemoryCacheBackend(clock=clock))

    await cache.put("k", PAYLOAD, ttl_seconds=900)
    clock.advance(900)

    assert await cache.get("k") is None


@pytest.mark.asyncio
async def test_backend_failures_degrade_to_miss_and_skip():
    backend = FailingCacheBackend()
    cache = ResultCache(backend)

    await cache.put("k", PAYLOAD, ttl_seconds=60)
    assert await cache.get("k") is None
    assert backend.set_calls == 1
    assert backend.get_calls == 1


@pytest.mark.asyncio
async def test_corrupt_entry_is_a_miss(cache_backend):
    await cache_backend.set("k", b"\xff not json", ttl_seconds=60)

    assert await ResultCache(cache_backend).get("k") is None


@pytest.mark.asyncio
async def test_get_or_fill_calls_fetch_once(result_cache):
    calls = 0

    async def fetch():
        nonlocal calls
        calls += 1
        return {"value": calls}

    first = await result_cache.get_or_fill("k", fetch, 60)
    second = await result_cache.get_or_fill("k", fetch, 60)

    assert first == ({"value": 1}, False)
    assert second == ({"value": 1}, True)
    assert calls == 1


@pytest.mark.asyncio
async def test_get_or_fill_does_not_store_none(result_cache, cache_backend):
    async def fetch():
        return None

    assert await result_cache.get_or_fill("k", fetch, 60) == (None, False)
    assert len(cache_backend) == 0


@pytest.mark.asyncio
async def test_get_or_fill_still_fetches_when_backend_is_down():
    cache = ResultCache(FailingCacheBackend())

    async def fetch():
        return [1, 2, 3]

    assert await cache.get_or_fill("k", fetch, 60) == ([1, 2, 3], False)


@pytest.mark.asyncio
async def test_get_or_fill_propagates_fetch_errors(result_cache):
    async def fetch():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await result_cache.get_or_fill("k", fetch, 60)
