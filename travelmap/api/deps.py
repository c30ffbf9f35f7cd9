"""Service providers for route dependencies."""

from fastapi import Depends, Request

from travelmap.infra.container import ServiceContainer
from travelmap.services.flight_search import FlightSearchService
from travelmap.services.health import HealthService
from travelmap.services.hotel_search import HotelSearchService
from travelmap.services.location_resolver import LocationResolver

__all__ = [
    "get_container",
    "get_flight_search_service",
    "get_health_service",
    "get_hotel_search_service",
    "get_location_resolver",
]


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_location_resolver(container: ServiceContainer = Depends(get_container)) -> LocationResolver:
    return container.resolver


def get_flight_search_service(
    container: ServiceContainer = Depends(get_container),
) -> FlightSearchService:
    return container.flights


def get_hotel_search_service(
    container: ServiceContainer = Depends(get_container),
) -> HotelSearchService:
    return container.hotels


def get_health_service(container: ServiceContainer = Depends(get_container)) -> HealthService:
    return container.health
