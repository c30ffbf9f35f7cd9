from fastapi import APIRouter, Depends, Query

from travelmap.api.deps import get_hotel_search_service
from travelmap.schemas.common import ErrorResponse
from travelmap.schemas.search import HotelSearchParams
from travelmap.services.hotel_search import HotelSearchService

router = APIRouter(prefix="/api/hotels", tags=["hotels"])


@router.get(
    "/search",
    summary="Hotel offer search with hotel markers",
    description="Hotels without offers are omitted. Results are cached for 1 hour.",
    responses={
        400: {"model": ErrorResponse, "description": "missing or invalid parameter"},
        503: {"model": ErrorResponse, "description": "travel provider unavailable"},
    },
)
async def search_hotels(
    city_code: str | None = Query(default=None, alias="cityCode"),
    check_in_date: str | None = Query(default=None, alias="checkInDate"),
    check_out_date: str | None = Query(default=None, alias="checkOutDate"),
    adults: int = Query(default=1, ge=1, le=9),
    rooms: int = Query(default=1, ge=1, le=9),
    currency: str = Query(default="EUR", min_length=3, max_length=3),
    service: HotelSearchService = Depends(get_hotel_search_service),
):
    params = HotelSearchParams(
        city_code=city_code,
        check_in_date=check_in_date,
        check_out_date=check_out_date,
        adults=adults,
        rooms=rooms,
        currency=currency,
    )
    return await service.search(params)
