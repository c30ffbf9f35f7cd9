"""DTOs for map payloads attached to search results."""

from __future__ import annotations

from pydantic import BaseModel, Field

from travelmap.dto.location import LocationDTO


class BoundsDTO(BaseModel):
    south: float
    west: float
    north: float
    east: float


class CoordinatesDTO(BaseModel):
    latitude: float
    longitude: float


class RouteMapDTO(BaseModel):
    origin: LocationDTO
    destination: LocationDTO
    distance_km: int = Field(description="Great-circle distance, rounded to whole km")
    bounds: BoundsDTO


class HotelMarkerDTO(BaseModel):
    hotel_id: str
    name: str | None = None
    coordinates: CoordinatesDTO
    address: dict | None = None
    rating: str | None = None


class HotelMapDTO(BaseModel):
    city: LocationDTO | None = None
    hotels: list[HotelMarkerDTO] = Field(default_factory=list)
    bounds: BoundsDTO | None = None
