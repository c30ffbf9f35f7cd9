"""Flight offer search with route map enrichment."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from travelmap.core.exceptions import MissingParameterError
from travelmap.dto.mappers import flight_offer_from_provider
from travelmap.schemas.search import FlightSearchParams
from travelmap.services.cache_keys import flight_search_key
from travelmap.services.location_resolver import LocationResolver, normalize_code
from travelmap.services.maps import route_map, try_resolve
from travelmap.services.result_cache import FLIGHT_SEARCH_TTL_SECONDS, ResultCache
from travelmap.services.travel_provider import TravelProvider

logger = structlog.get_logger(__name__)

MAX_FLIGHT_OFFERS = 50


def provider_params(params: FlightSearchParams, origin: str, destination: str) -> dict[str, Any]:
    """Provider query; optional filters are only sent when set."""

    query: dict[str, Any] = {
        "originLocationCode": origin,
        "destinationLocationCode": destination,
        "departureDate": params.departure_date,
        "adults": params.adults,
        "travelClass": params.travel_class.upper(),
        "currencyCode": params.currency_code.upper(),
        "max": MAX_FLIGHT_OFFERS,
    }
    if params.return_date:
        query["returnDate"] = params.return_date
    if params.children > 0:
        query["children"] = params.children
    if params.infants > 0:
        query["infants"] = params.infants
    if params.non_stop:
        query["nonStop"] = "true"
    if params.max_price:
        query["maxPrice"] = params.max_price
    return query


class FlightSearchService:
    def __init__(
        self,
        provider: TravelProvider,
        resolver: LocationResolver,
        cache: ResultCache,
        *,
        ttl_seconds: int = FLIGHT_SEARCH_TTL_SECONDS,
    ) -> None:
        self._provider = provider
        self._resolver = resolver
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    async def search(self, params: FlightSearchParams) -> dict[str, Any]:
        missing = [
            name
            for name, value in (
                ("originLocationCode", params.origin_location_code),
                ("destinationLocationCode", params.destination_location_code),
                ("departureDate", params.departure_date),
            )
            if not value
        ]
        if missing:
            raise MissingParameterError(*missing)

        origin = normalize_code(params.origin_location_code)
        destination = normalize_code(params.destination_location_code)
        query = provider_params(params, origin, destination)
        key = flight_search_key(
            origin=origin,
            destination=destination,
            departure_date=str(params.departure_date),
            return_date=params.return_date,
            adults=params.adults,
            children=params.children,
            infants=params.infants,
            travel_class=params.travel_class,
            non_stop=params.non_stop,
            max_price=params.max_price,
            currency=params.currency_code,
        )

        async def fetch() -> dict[str, Any]:
            logger.info("flight_search_provider_call", origin=origin, destination=destination)
            offers = await self._provider.search_flight_offers(query)
            origin_location, destination_location = await asyncio.gather(
                try_resolve(self._resolver, origin),
                try_resolve(self._resolver, destination),
            )
            map_data = None
            if origin_location is not None and destination_location is not None:
                map_data = route_map(origin_location, destination_location).model_dump(mode="json")
            return {
                "flights": [flight_offer_from_provider(offer) for offer in offers["data"]],
                "meta": offers.get("meta") or {},
                "search_params": query,
                "map_data": map_data,
            }

        payload, cached = await self._cache.get_or_fill(key, fetch, self._ttl_seconds)
        return {**payload, "cached": cached}
