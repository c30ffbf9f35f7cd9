from .location import LocationCandidateDTO, LocationDTO
from .maps import BoundsDTO, CoordinatesDTO, HotelMapDTO, HotelMarkerDTO, RouteMapDTO

__all__ = [
    "BoundsDTO",
    "CoordinatesDTO",
    "HotelMapDTO",
    "HotelMarkerDTO",
    "LocationCandidateDTO",
    "LocationDTO",
    "RouteMapDTO",
]
