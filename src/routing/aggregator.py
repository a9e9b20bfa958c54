"""Fare route aggregation and itinerary ranking.

One OneMap routing call per lookup. Drive responses become a single
synthetic cab itinerary priced by CabFareEstimator; transit responses keep
every itinerary, gain ``durationInMinutes``, and are ranked by fare and by
duration.
"""

import logging
from collections.abc import Sequence

from fares.cab_fare import CabFareEstimator
from geo.coordinates import Coordinate
from geo.polyline_codec import PolylineDecodeError, decode_polyline
from routing.models import (
    FareRoutePlan,
    Itinerary,
    Leg,
    LegGeometry,
    Place,
    Plan,
    TripRequest,
    round_half_up,
)
from routing.onemap_client import OneMapRoutingClient
from routing.responses import (
    INVALID_ROUTE_DATA_MESSAGE,
    DriveResponse,
    InvalidRouteDataError,
    TransitResponse,
    parse_route_response,
)

logger = logging.getLogger(__name__)


def rank_itineraries(itineraries: Sequence[Itinerary]) -> tuple[int, int]:
    """Return (cheapest_index, fastest_index).

    Ties keep the lowest index. Itineraries must already carry
    ``duration_in_minutes``.
    """
    if not itineraries:
        raise ValueError("Cannot rank an empty itinerary list")

    cheapest_index = 0
    fastest_index = 0
    min_fare = itineraries[0].parsed_fare()
    min_duration = itineraries[0].duration_in_minutes

    for idx, itinerary in enumerate(itineraries):
        fare = itinerary.parsed_fare()
        duration = itinerary.duration_in_minutes
        if fare < min_fare:
            min_fare = fare
            cheapest_index = idx
        if duration is not None and (min_duration is None or duration < min_duration):
            min_duration = duration
            fastest_index = idx

    return cheapest_index, fastest_index


def annotate_duration(itinerary: Itinerary) -> Itinerary:
    data = itinerary.model_dump(by_alias=True, exclude_unset=True)
    data["durationInMinutes"] = round_half_up(itinerary.duration / 60)
    return Itinerary.model_validate(data)


class RouteAggregator:
    def __init__(self, routing_client: OneMapRoutingClient, fare_estimator: CabFareEstimator):
        self._routing_client = routing_client
        self._fare_estimator = fare_estimator

    async def aggregate(
        self, origin: Coordinate, destination: Coordinate, trip: TripRequest
    ) -> FareRoutePlan:
        """Fetch, reshape and rank the itineraries for one trip.

        Raises:
            RoutingTimeoutError / RoutingServiceError: upstream call failed.
            InvalidRouteDataError: upstream payload has an unexpected shape.
        """
        data = await self._routing_client.fetch_route(origin, destination, trip)
        response = parse_route_response(data, trip.route_type)

        if isinstance(response, DriveResponse):
            result = self._build_drive_plan(response)
        else:
            result = self._build_transit_plan(response)

        logger.info(
            f"Aggregated {len(result.plan.itineraries)} itinerary(ies) for "
            f"route_type={trip.route_type} (cheapest={result.cheapest_index}, "
            f"fastest={result.fastest_index})"
        )
        return result

    def _build_drive_plan(self, response: DriveResponse) -> FareRoutePlan:
        try:
            coords = decode_polyline(response.route_geometry)
        except PolylineDecodeError as e:
            raise InvalidRouteDataError(INVALID_ROUTE_DATA_MESSAGE) from e
        if not coords:
            raise InvalidRouteDataError(INVALID_ROUTE_DATA_MESSAGE)

        summary = response.route_summary
        origin_lat, origin_lon = coords[0]
        dest_lat, dest_lon = coords[-1]

        leg = Leg(
            mode="CAR",
            from_=Place(name="Origin", lat=origin_lat, lon=origin_lon),
            to=Place(name="Destination", lat=dest_lat, lon=dest_lon),
            leg_geometry=LegGeometry(points=response.route_geometry),
            intermediate_stops=[],
            instructions=response.instruction_texts(),
        )
        itinerary = Itinerary(
            duration=summary.total_time,
            duration_in_minutes=round_half_up(summary.total_time / 60),
            distance=summary.total_distance,
            fare=self._fare_estimator.estimate(
                summary.total_distance / 1000, summary.total_time / 60
            ),
            legs=[leg],
        )
        return FareRoutePlan(
            plan=Plan(itineraries=[itinerary]),
            cheapest_index=0,
            fastest_index=0,
        )

    def _build_transit_plan(self, response: TransitResponse) -> FareRoutePlan:
        itineraries = [annotate_duration(it) for it in response.plan.itineraries]
        cheapest_index, fastest_index = rank_itineraries(itineraries)
        plan = response.plan.model_copy(update={"itineraries": itineraries})
        return FareRoutePlan(
            plan=plan,
            cheapest_index=cheapest_index,
            fastest_index=fastest_index,
        )
