"""Assemble map payloads from resolved locations and provider geocodes."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from travelmap.core.exceptions import InvalidInputError, NotFoundError, UpstreamUnavailableError
from travelmap.dto import BoundsDTO, HotelMapDTO, LocationDTO, RouteMapDTO
from travelmap.dto.mappers import hotel_marker
from travelmap.services.location_resolver import LocationResolver
from travelmap.utils.geo import LatLng, bounds_of, distance_km

logger = structlog.get_logger(__name__)

# Failures that leave a search result without its map section
MAP_ENRICHMENT_ERRORS = (InvalidInputError, NotFoundError, UpstreamUnavailableError)


def route_map(origin: LocationDTO, destination: LocationDTO) -> RouteMapDTO:
    region = bounds_of([origin.coordinates, destination.coordinates])
    return RouteMapDTO(
        origin=origin,
        destination=destination,
        distance_km=distance_km(origin.coordinates, destination.coordinates),
        bounds=BoundsDTO(**region.to_dict()),
    )


def hotel_map(city: LocationDTO | None, hotels: Iterable[Mapping[str, Any]]) -> HotelMapDTO:
    markers = [marker for marker in (hotel_marker(hotel) for hotel in hotels) if marker is not None]
    points: list[LatLng] = [
        (marker.coordinates.latitude, marker.coordinates.longitude) for marker in markers
    ]
    if city is not None:
        points.append(city.coordinates)
    bounds = BoundsDTO(**bounds_of(points).to_dict()) if points else None
    return HotelMapDTO(city=city, hotels=markers, bounds=bounds)


async def build_route_map(resolver: LocationResolver, origin: str, destination: str) -> RouteMapDTO:
    """Resolve both ends concurrently; any resolution error propagates."""

    origin_location, destination_location = await asyncio.gather(
        resolver.resolve(origin), resolver.resolve(destination)
    )
    return route_map(origin_location, destination_location)


async def try_resolve(resolver: LocationResolver, code: str) -> LocationDTO | None:
    try:
        return await resolver.resolve(code)
    except MAP_ENRICHMENT_ERRORS as exc:
        logger.info("location_unavailable", code=code, error=str(exc))
        return None
