"""/api/locations routers: keyword search, coordinates and route maps."""

from fastapi import APIRouter, Depends, Query

from travelmap.api.deps import get_location_resolver
from travelmap.dto import LocationCandidateDTO, LocationDTO, RouteMapDTO
from travelmap.schemas.common import ErrorResponse
from travelmap.services.location_resolver import LocationResolver
from travelmap.services.maps import build_route_map

router = APIRouter(prefix="/api/locations", tags=["locations"])

_ERRORS = {
    400: {"model": ErrorResponse, "description": "invalid input"},
    503: {"model": ErrorResponse, "description": "travel provider unavailable"},
}


@router.get(
    "/search",
    response_model=list[LocationCandidateDTO],
    summary="Airport and city search",
    description="Ranked by provider traveller score. Results are cached for 24 hours.",
    responses=_ERRORS,
)
async def search_locations(
    keyword: str = Query(default="", description="At least 2 characters"),
    resolver: LocationResolver = Depends(get_location_resolver),
):
    return await resolver.search(keyword)


@router.get(
    "/route-map",
    response_model=RouteMapDTO,
    summary="Route map data between two locations",
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "Not Found"}},
)
async def get_route_map(
    origin: str = Query(default="", description="Origin IATA code"),
    destination: str = Query(default="", description="Destination IATA code"),
    resolver: LocationResolver = Depends(get_location_resolver),
):
    return await build_route_map(resolver, origin, destination)


@router.get(
    "/{code}/coordinates",
    response_model=LocationDTO,
    summary="Coordinates for an IATA code",
    responses={**_ERRORS, 404: {"model": ErrorResponse, "description": "Not Found"}},
)
async def get_coordinates(
    code: str,
    resolver: LocationResolver = Depends(get_location_resolver),
):
    return await resolver.resolve(code)
