"""Hotel offer search with hotel marker map data."""

from __future__ import annotations

from typing import Any

import structlog

from travelmap.core.exceptions import MissingParameterError
from travelmap.dto.mappers import hotel_from_provider
from travelmap.schemas.search import HotelSearchParams
from travelmap.services.cache_keys import hotel_search_key
from travelmap.services.location_resolver import LocationResolver, normalize_code
from travelmap.services.maps import hotel_map, try_resolve
from travelmap.services.result_cache import HOTEL_SEARCH_TTL_SECONDS, ResultCache
from travelmap.services.travel_provider import TravelProvider

logger = structlog.get_logger(__name__)

MAX_HOTEL_IDS = 50
NO_HOTELS_MESSAGE = "No hotels found for this city"


class HotelSearchService:
    def __init__(
        self,
        provider: TravelProvider,
        resolver: LocationResolver,
        cache: ResultCache,
        *,
        ttl_seconds: int = HOTEL_SEARCH_TTL_SECONDS,
    ) -> None:
        self._provider = provider
        self._resolver = resolver
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    async def search(self, params: HotelSearchParams) -> dict[str, Any]:
        missing = [
            name
            for name, value in (
                ("cityCode", params.city_code),
                ("checkInDate", params.check_in_date),
                ("checkOutDate", params.check_out_date),
            )
            if not value
        ]
        if missing:
            raise MissingParameterError(*missing)

        city_code = normalize_code(params.city_code)
        search_params = {
            "city_code": city_code,
            "check_in_date": params.check_in_date,
            "check_out_date": params.check_out_date,
            "adults": params.adults,
            "rooms": params.rooms,
            "currency": params.currency.upper(),
        }
        key = hotel_search_key(
            city_code=city_code,
            check_in_date=str(params.check_in_date),
            check_out_date=str(params.check_out_date),
            adults=params.adults,
            rooms=params.rooms,
            currency=params.currency,
        )

        async def fetch() -> dict[str, Any]:
            hotel_ids = (await self._provider.list_hotels_by_city(city_code))[:MAX_HOTEL_IDS]
            if not hotel_ids:
                logger.info("hotel_search_no_hotels", city_code=city_code)
                city = await try_resolve(self._resolver, city_code)
                return {
                    "hotels": [],
                    "search_params": search_params,
                    "map_data": hotel_map(city, []).model_dump(mode="json"),
                    "message": NO_HOTELS_MESSAGE,
                }

            raw_offers = await self._provider.search_hotel_offers(
                hotel_ids,
                {
                    "checkInDate": params.check_in_date,
                    "checkOutDate": params.check_out_date,
                    "adults": params.adults,
                    "roomQuantity": params.rooms,
                    "currency": params.currency.upper(),
                    "paymentPolicy": "NONE",
                    "boardType": "ROOM_ONLY",
                },
            )
            # hotels without a single offer are not shown, on the list or the map
            hotels = [
                hotel
                for hotel in (hotel_from_provider(item) for item in raw_offers)
                if hotel["offers"]
            ]
            city = await try_resolve(self._resolver, city_code)
            logger.info(
                "hotel_search_assembled",
                city_code=city_code,
                candidates=len(hotel_ids),
                with_offers=len(hotels),
            )
            return {
                "hotels": hotels,
                "search_params": search_params,
                "map_data": hotel_map(city, hotels).model_dump(mode="json"),
            }

        payload, cached = await self._cache.get_or_fill(key, fetch, self._ttl_seconds)
        return {**payload, "cached": cached}
