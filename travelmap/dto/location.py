"""DTOs for resolved locations and provider search candidates."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from travelmap.utils.geo import LatLng


class LocationDTO(BaseModel):
    code: str = Field(description="IATA code (upper case)")
    name: str = Field(description="Airport or city name")
    city: str | None = Field(default=None, description="City name")
    country: str | None = Field(default=None, description="Country name")
    country_code: str | None = Field(default=None, description="ISO 3166-1 alpha-2 country code")
    latitude: float = Field(description="Latitude in signed decimal degrees")
    longitude: float = Field(description="Longitude in signed decimal degrees")
    kind: str = Field(description="airport or city")
    updated_at: datetime | None = Field(default=None, description="Last refresh from the provider")

    model_config = ConfigDict(from_attributes=True)

    @property
    def coordinates(self) -> LatLng:
        return (self.latitude, self.longitude)


class LocationCandidateDTO(BaseModel):
    code: str | None = Field(default=None, description="IATA code")
    name: str | None = Field(default=None, description="Airport or city name")
    city: str | None = Field(default=None, description="City name")
    country: str | None = Field(default=None, description="Country name")
    country_code: str | None = Field(default=None, description="Country code")
    kind: str | None = Field(default=None, description="airport or city")
    relevance: float = Field(default=0, description="Provider traveller score")
    latitude: float | None = Field(default=None, description="Latitude if known")
    longitude: float | None = Field(default=None, description="Longitude if known")

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_location(self, updated_at: datetime) -> LocationDTO:
        """Promote the candidate to a storable location; requires code and coordinates."""

        if not self.code or not self.has_coordinates:
            raise ValueError("candidate lacks code or coordinates")
        return LocationDTO(
            code=self.code.upper(),
            name=self.name or self.code.upper(),
            city=self.city,
            country=self.country,
            country_code=self.country_code,
            latitude=float(self.latitude),  # type: ignore[arg-type]
            longitude=float(self.longitude),  # type: ignore[arg-type]
            kind=(self.kind or "airport").lower(),
            updated_at=updated_at,
        )
