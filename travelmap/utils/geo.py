"""Great-circle distance and map viewport helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

LatLng = tuple[float, float]

EARTH_RADIUS_KM = 6371.0
BOUNDS_PADDING_RATIO = 0.1
# Half-size in degrees of the viewport drawn around a lone marker
SINGLE_POINT_SPAN_DEG = 0.5


def haversine_distance_km(
    point_a: LatLng, point_b: LatLng, *, radius_km: float = EARTH_RADIUS_KM
) -> float:
    """Compute the great-circle distance between two points in kilometres.

    The intermediate value is clamped to avoid floating point drift near the
    poles and for antipodal points.
    """

    lat1, lng1 = point_a
    lat2, lng2 = point_b

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return radius_km * c


def distance_km(point_a: LatLng, point_b: LatLng) -> int:
    """Great-circle distance rounded to the nearest whole kilometre, halves up."""

    return math.floor(haversine_distance_km(point_a, point_b) + 0.5)


@dataclass(frozen=True)
class BoundingRegion:
    south: float
    west: float
    north: float
    east: float

    @property
    def center(self) -> LatLng:
        return ((self.south + self.north) / 2.0, (self.west + self.east) / 2.0)

    def contains(self, point: LatLng) -> bool:
        lat, lng = point
        return self.south <= lat <= self.north and self.west <= lng <= self.east

    def to_dict(self) -> dict[str, float]:
        return {"south": self.south, "west": self.west, "north": self.north, "east": self.east}


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


def _padding(span: float) -> float:
    # a collapsed axis falls back to the fixed single-marker viewport
    if span == 0:
        return SINGLE_POINT_SPAN_DEG
    return span * BOUNDS_PADDING_RATIO


def bounds_of(points: Iterable[LatLng]) -> BoundingRegion:
    """Return the padded lat/lng box enclosing ``points``.

    Each side is padded by 10% of the span on that axis. A single distinct
    point (or an axis with no extent) gets a fixed viewport centred on it
    instead of a zero-area box.
    """

    pts = list(points)
    if not pts:
        raise ValueError("bounds_of() requires at least one point")

    lats = [lat for lat, _ in pts]
    lngs = [lng for _, lng in pts]
    south, north = min(lats), max(lats)
    west, east = min(lngs), max(lngs)

    lat_pad = _padding(north - south)
    lng_pad = _padding(east - west)
    return BoundingRegion(
        south=_clamp(south - lat_pad, 90.0),
        west=_clamp(west - lng_pad, 180.0),
        north=_clamp(north + lat_pad, 90.0),
        east=_clamp(east + lng_pad, 180.0),
    )


__all__ = [
    "BoundingRegion",
    "EARTH_RADIUS_KM",
    "LatLng",
    "bounds_of",
    "distance_km",
    "haversine_distance_km",
]
