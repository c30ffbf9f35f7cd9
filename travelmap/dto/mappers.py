"""Map provider-native (Amadeus) payloads into the service's own shapes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from travelmap.dto.location import LocationCandidateDTO
from travelmap.dto.maps import CoordinatesDTO, HotelMarkerDTO


def _float_or_none(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def candidate_from_provider(raw: Mapping[str, Any]) -> LocationCandidateDTO:
    address = _mapping(raw.get("address"))
    geo = _mapping(raw.get("geoCode"))
    travelers = _mapping(_mapping(raw.get("analytics")).get("travelers"))
    sub_type = raw.get("subType")
    code = raw.get("iataCode")
    return LocationCandidateDTO(
        code=code.upper() if isinstance(code, str) and code else None,
        name=raw.get("name"),
        city=address.get("cityName"),
        country=address.get("countryName"),
        country_code=address.get("countryCode"),
        kind=sub_type.lower() if isinstance(sub_type, str) else None,
        relevance=_float_or_none(travelers.get("score")) or 0,
        latitude=_float_or_none(geo.get("latitude")),
        longitude=_float_or_none(geo.get("longitude")),
    )


def _endpoint(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "iata_code": raw.get("iataCode"),
        "terminal": raw.get("terminal"),
        "at": raw.get("at"),
    }


def _segment(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "departure": _endpoint(_mapping(raw.get("departure"))),
        "arrival": _endpoint(_mapping(raw.get("arrival"))),
        "carrier_code": raw.get("carrierCode"),
        "number": raw.get("number"),
        "aircraft": _mapping(raw.get("aircraft")).get("code"),
        "duration": raw.get("duration"),
        "number_of_stops": raw.get("numberOfStops") or 0,
    }


def flight_offer_from_provider(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Reduce a flight-offers-search item to id, price breakdown and itineraries."""

    price = _mapping(raw.get("price"))
    return {
        "id": raw.get("id"),
        "price": {
            "total": price.get("total"),
            "currency": price.get("currency"),
            "base": price.get("base"),
            "taxes": [
                {"amount": tax.get("amount"), "code": tax.get("code")}
                for tax in price.get("taxes") or []
            ],
        },
        "itineraries": [
            {
                "duration": itinerary.get("duration"),
                "segments": [_segment(segment) for segment in itinerary.get("segments") or []],
            }
            for itinerary in raw.get("itineraries") or []
        ],
        "validating_airline_codes": list(raw.get("validatingAirlineCodes") or []),
        "last_ticketing_date": raw.get("lastTicketingDate"),
    }


def _hotel_offer(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": raw.get("id"),
        "check_in_date": raw.get("checkInDate"),
        "check_out_date": raw.get("checkOutDate"),
        "room_quantity": raw.get("roomQuantity"),
        "rate_code": raw.get("rateCode"),
        "category": raw.get("category"),
        "description": raw.get("description"),
        "board_type": raw.get("boardType"),
        "room": raw.get("room"),
        "guests": raw.get("guests"),
        "price": raw.get("price"),
        "policies": raw.get("policies"),
    }


def hotel_from_provider(raw: Mapping[str, Any]) -> dict[str, Any]:
    hotel = _mapping(raw.get("hotel"))
    return {
        "hotel_id": hotel.get("hotelId"),
        "name": hotel.get("name"),
        "rating": hotel.get("rating"),
        "contact": hotel.get("contact"),
        "address": hotel.get("address"),
        "description": hotel.get("description"),
        "amenities": hotel.get("amenities"),
        "media": hotel.get("media"),
        "geo_code": hotel.get("geoCode") or (
            {"latitude": hotel["latitude"], "longitude": hotel["longitude"]}
            if "latitude" in hotel and "longitude" in hotel
            else None
        ),
        "offers": [_hotel_offer(offer) for offer in raw.get("offers") or []],
    }


def hotel_marker(hotel: Mapping[str, Any]) -> HotelMarkerDTO | None:
    """Build a map marker from the hotel's own provider geocode; None without one."""

    geo = _mapping(hotel.get("geo_code"))
    latitude = _float_or_none(geo.get("latitude"))
    longitude = _float_or_none(geo.get("longitude"))
    if latitude is None or longitude is None or not hotel.get("hotel_id"):
        return None
    rating = hotel.get("rating")
    return HotelMarkerDTO(
        hotel_id=str(hotel["hotel_id"]),
        name=hotel.get("name"),
        coordinates=CoordinatesDTO(latitude=latitude, longitude=longitude),
        address=hotel.get("address") if isinstance(hotel.get("address"), dict) else None,
        rating=str(rating) if rating is not None else None,
    )
