"""OneMap routing, itinerary ranking and the fare route service."""

from .aggregator import RouteAggregator, rank_itineraries
from .models import FareRoutePlan, Itinerary, Leg, Plan, TripRequest
from .onemap_client import OneMapRoutingClient, RoutingServiceError, RoutingTimeoutError
from .responses import DriveResponse, InvalidRouteDataError, TransitResponse, parse_route_response
from .service import FareRouteService, build_trip_request

__all__ = [
    "RouteAggregator",
    "rank_itineraries",
    "FareRoutePlan",
    "Itinerary",
    "Leg",
    "Plan",
    "TripRequest",
    "OneMapRoutingClient",
    "RoutingServiceError",
    "RoutingTimeoutError",
    "DriveResponse",
    "TransitResponse",
    "InvalidRouteDataError",
    "parse_route_response",
    "FareRouteService",
    "build_trip_request",
]
