import pytest

from travelmap.services import cache_keys

pytestmark = pytest.mark.unit


def _flight_key(**overrides):
    params = dict(
        origin="jfk",
        destination="lhr",
        departure_date="2026-11-01",
        return_date=None,
        adults=1,
        children=0,
        infants=0,
        travel_class="economy",
        non_stop=False,
        max_price=None,
        currency="eur",
    )
    params.update(overrides)
    return cache_keys.flight_search_key(**params)


def test_location_search_key_is_case_and_whitespace_insensitive():
    assert cache_keys.location_search_key("  Paris ") == cache_keys.location_search_key("paris")
    assert cache_keys.location_search_key("Paris") == "locations:search:paris"


def test_flight_key_normalizes_codes_and_marks_one_way():
    assert _flight_key() == "flights:JFK:LHR:2026-11-01:oneway:1:0:0:ECONOMY:0:-:EUR"
    assert _flight_key() == _flight_key(origin="JFK", destination="LHR", currency="EUR")


@pytest.mark.parametrize(
    "override",
    [
        {"return_date": "2026-11-08"},
        {"adults": 2},
        {"children": 1},
        {"travel_class": "BUSINESS"},
        {"non_stop": True},
        {"max_price": 500},
        {"currency": "USD"},
    ],
)
def test_flight_key_distinguishes_every_parameter(override):
    assert _flight_key(**override) != _flight_key()


def test_hotel_key():
    key = cache_keys.hotel_search_key(
        city_code="par",
        check_in_date="2026-11-01",
        check_out_date="2026-11-03",
        adults=2,
        rooms=1,
        currency="eur",
    )
    assert key == "hotels:PAR:2026-11-01:2026-11-03:2:1:EUR"
