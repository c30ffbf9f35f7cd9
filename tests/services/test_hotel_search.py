import pytest

from tests.fakes import PAR, FakeTravelProvider
from travelmap.core.exceptions import MissingParameterError
from travelmap.schemas.search import HotelSearchParams
from travelmap.services.hotel_search import MAX_HOTEL_IDS, NO_HOTELS_MESSAGE, HotelSearchService
from travelmap.services.location_resolver import LocationResolver


def _hotel(hotel_id: str, *, offers: int = 1, geo: bool = True) -> dict:
    hotel = {"hotelId": hotel_id, "name": f"HOTEL {hotel_id}", "rating": "4"}
    if geo:
        hotel.update(latitude=48.86, longitude=2.34)
    return {
        "type": "hotel-offers",
        "hotel": hotel,
        "available": offers > 0,
        "offers": [{"id": f"{hotel_id}-{i}", "price": {"total": "100.00"}} for i in range(offers)],
    }


def _params(**overrides) -> HotelSearchParams:
    values = {"cityCode": "par", "checkInDate": "2026-11-01", "checkOutDate": "2026-11-03"}
    values.update(overrides)
    return HotelSearchParams.model_validate(values)


def _service(provider, store, result_cache) -> HotelSearchService:
    return HotelSearchService(provider, LocationResolver(store, provider, result_cache), result_cache)


@pytest.mark.asyncio
async def test_hotels_without_offers_are_excluded(store, result_cache):
    provider = FakeTravelProvider(
        [PAR],
        hotel_ids=["H1", "H2", "H3"],
        hotel_offers=[_hotel("H1"), _hotel("H2", offers=0), _hotel("H3", geo=False)],
    )

    result = await _service(provider, store, result_cache).search(_params())

    assert [hotel["hotel_id"] for hotel in result["hotels"]] == ["H1", "H3"]
    assert [marker["hotel_id"] for marker in result["map_data"]["hotels"]] == ["H1"]
    assert result["map_data"]["city"]["code"] == "PAR"
    assert result["map_data"]["bounds"] is not None
    assert result["cached"] is False


@pytest.mark.asyncio
async def test_hotel_markers_are_not_persisted(store, result_cache):
    provider = FakeTravelProvider([PAR], hotel_ids=["H1"], hotel_offers=[_hotel("H1")])

    await _service(provider, store, result_cache).search(_params())

    assert list(store.rows) == ["PAR"]


@pytest.mark.asyncio
async def test_hotel_id_list_is_capped(store, result_cache):
    ids = [f"H{i}" for i in range(80)]
    provider = FakeTravelProvider([PAR], hotel_ids=ids)

    await _service(provider, store, result_cache).search(_params())

    (requested_ids, params), = [arg for name, arg in provider.calls if name == "search_hotel_offers"]
    assert requested_ids == ids[:MAX_HOTEL_IDS]
    assert params["roomQuantity"] == 1
    assert params["boardType"] == "ROOM_ONLY"


@pytest.mark.asyncio
async def test_city_without_hotels(store, result_cache):
    provider = FakeTravelProvider([PAR])

    result = await _service(provider, store, result_cache).search(_params())

    assert result["hotels"] == []
    assert result["message"] == NO_HOTELS_MESSAGE
    assert provider.count("search_hotel_offers") == 0


@pytest.mark.asyncio
async def test_unresolvable_city_keeps_hotels(store, result_cache):
    provider = FakeTravelProvider([], hotel_ids=["H1"], hotel_offers=[_hotel("H1")])

    result = await _service(provider, store, result_cache).search(_params(cityCode="XXX"))

    assert [hotel["hotel_id"] for hotel in result["hotels"]] == ["H1"]
    assert result["map_data"]["city"] is None
    assert len(result["map_data"]["hotels"]) == 1


@pytest.mark.asyncio
async def test_repeat_search_is_cached(store, result_cache):
    provider = FakeTravelProvider([PAR], hotel_ids=["H1"], hotel_offers=[_hotel("H1")])
    service = _service(provider, store, result_cache)

    await service.search(_params())
    result = await service.search(_params(cityCode="PAR"))

    assert result["cached"] is True
    assert provider.count("list_hotels_by_city") == 1


@pytest.mark.asyncio
async def test_missing_dates_are_rejected(store, result_cache):
    provider = FakeTravelProvider([PAR])

    with pytest.raises(MissingParameterError):
        await _service(provider, store, result_cache).search(_params(checkOutDate=None))
    assert provider.calls == []
