"""Cache key builders for consistent namespacing."""

from __future__ import annotations


def _part(value: object | None, default: str = "-") -> str:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def location_search_key(keyword: str) -> str:
    """Build cache key for keyword location search."""
    return f"locations:search:{keyword.strip().lower()}"


def flight_search_key(
    *,
    origin: str,
    destination: str,
    departure_date: str,
    return_date: str | None,
    adults: int,
    children: int,
    infants: int,
    travel_class: str,
    non_stop: bool,
    max_price: int | None,
    currency: str,
) -> str:
    """Build cache key for flight offer search results."""
    return ":".join(
        [
            "flights",
            origin.upper(),
            destination.upper(),
            departure_date,
            _part(return_date, "oneway"),
            _part(adults),
            _part(children),
            _part(infants),
            travel_class.upper(),
            _part(non_stop),
            _part(max_price),
            currency.upper(),
        ]
    )


def hotel_search_key(
    *,
    city_code: str,
    check_in_date: str,
    check_out_date: str,
    adults: int,
    rooms: int,
    currency: str,
) -> str:
    """Build cache key for hotel offer search results."""
    return (
        f"hotels:{city_code.upper()}:{check_in_date}:{check_out_date}:"
        f"{adults}:{rooms}:{currency.upper()}"
    )
