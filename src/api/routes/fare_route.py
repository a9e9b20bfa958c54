from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies import get_fare_route_service
from api.rate_limit import fare_route_limit, limiter
from app_logging import log_trip_context
from routing.service import build_trip_request

router = APIRouter()

FareRouteServiceDep = Annotated[Any, Depends(get_fare_route_service)]


@router.get("")
@limiter.limit(fare_route_limit)
async def get_fare_route(
    request: Request,
    service: FareRouteServiceDep,
    start: str | None = None,
    end: str | None = None,
    route_type: Annotated[str | None, Query(alias="routeType")] = None,
    date: str | None = None,
    time: str | None = None,
    mode: str | None = None,
    max_walk_distance: Annotated[str | None, Query(alias="maxWalkDistance")] = None,
    num_itineraries: Annotated[str | None, Query(alias="numItineraries")] = None,
) -> dict[str, Any]:
    """Ranked itineraries between two places or ``lat,lng`` pairs.

    Transit lookups return every OneMap itinerary with ``durationInMinutes``
    plus ``cheapestIndex``/``fastestIndex``; drive lookups return a single
    cab itinerary with an estimated fare.
    """
    trip = build_trip_request(
        start,
        end,
        route_type=route_type,
        date=date,
        time=time,
        mode=mode,
        max_walk_distance=max_walk_distance,
        num_itineraries=num_itineraries,
    )
    with log_trip_context(trip.route_type, endpoint="fare-route"):
        result = await service.get_fare_route(trip)
    return result.to_response()
