"""FastAPI dependency injection providers."""

from typing import Any

from fastapi import Request


def get_fare_route_service(request: Request) -> Any:
    """Retrieve FareRouteService from app state."""
    return request.app.state.fare_route_service


def get_taxi_client(request: Request) -> Any:
    """Retrieve TaxiAvailabilityClient from app state (None when unconfigured)."""
    return getattr(request.app.state, "taxi_client", None)
