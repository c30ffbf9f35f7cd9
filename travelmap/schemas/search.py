# travelmap/schemas/search.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = ["FlightSearchParams", "HotelSearchParams"]


class FlightSearchParams(BaseModel):
    """Flight search request.

    Accepts the camelCase field names of the provider API as well as snake_case.
    Required fields are optional here so the orchestrator can report every
    missing one at once.
    """

    origin_location_code: str | None = Field(default=None, description="Origin IATA code")
    destination_location_code: str | None = Field(default=None, description="Destination IATA code")
    departure_date: str | None = Field(default=None, description="YYYY-MM-DD")
    return_date: str | None = Field(default=None, description="YYYY-MM-DD, omitted for one-way")
    adults: int = Field(default=1, ge=1, le=9)
    children: int = Field(default=0, ge=0, le=9)
    infants: int = Field(default=0, ge=0, le=9)
    travel_class: str = Field(default="ECONOMY", description="ECONOMY, PREMIUM_ECONOMY, BUSINESS, FIRST")
    non_stop: bool = False
    max_price: int | None = Field(default=None, ge=1, description="Whole units of currency_code")
    currency_code: str = Field(default="EUR", min_length=3, max_length=3)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HotelSearchParams(BaseModel):
    city_code: str | None = Field(default=None, description="City IATA code")
    check_in_date: str | None = Field(default=None, description="YYYY-MM-DD")
    check_out_date: str | None = Field(default=None, description="YYYY-MM-DD")
    adults: int = Field(default=1, ge=1, le=9)
    rooms: int = Field(default=1, ge=1, le=9)
    currency: str = Field(default="EUR", min_length=3, max_length=3)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
