from fastapi import APIRouter, Depends

from travelmap.api.deps import get_flight_search_service
from travelmap.schemas.common import ErrorResponse
from travelmap.schemas.search import FlightSearchParams
from travelmap.services.flight_search import FlightSearchService

router = APIRouter(prefix="/api/flights", tags=["flights"])


@router.post(
    "/search",
    summary="Flight offer search with route map data",
    description="Results are cached for 15 minutes; map_data is null when a code cannot be resolved.",
    responses={
        400: {"model": ErrorResponse, "description": "missing or invalid parameter"},
        503: {"model": ErrorResponse, "description": "travel provider unavailable"},
    },
)
async def search_flights(
    params: FlightSearchParams,
    service: FlightSearchService = Depends(get_flight_search_service),
):
    return await service.search(params)
