import pytest

from tests.fakes import ManualClock
from travelmap.repositories.memory import MemoryCacheBackend

pytestmark = pytest.mark.unit


@pytest.mark.asyncio
async def test_value_is_returned_within_ttl_and_expires_after():
    clock = ManualClock()
    backend = MemoryCacheBackend(clock=clock)

    await backend.set("k", b"payload", ttl_seconds=60)
    clock.advance(59)
    assert await backend.get("k") == b"payload"

    clock.advance(1)
    assert await backend.get("k") is None
    assert len(backend) == 0


@pytest.mark.asyncio
async def test_overwrite_replaces_value_and_expiry():
    clock = ManualClock()
    backend = MemoryCacheBackend(clock=clock)

    await backend.set("k", b"old", ttl_seconds=10)
    clock.advance(5)
    await backend.set("k", b"new", ttl_seconds=10)
    clock.advance(8)

    assert await backend.get("k") == b"new"


@pytest.mark.asyncio
async def test_least_recently_used_entry_is_evicted():
    backend = MemoryCacheBackend(max_entries=2)

    await backend.set("a", b"1", ttl_seconds=60)
    await backend.set("b", b"2", ttl_seconds=60)
    assert await backend.get("a") == b"1"
    await backend.set("c", b"3", ttl_seconds=60)

    assert await backend.get("b") is None
    assert await backend.get("a") == b"1"
    assert await backend.get("c") == b"3"


def test_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        MemoryCacheBackend(max_entries=0)
