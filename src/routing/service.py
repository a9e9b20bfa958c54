import asyncio
import logging

from pydantic import ValidationError as PydanticValidationError

from core.exceptions import LocationNotFoundError, ValidationError
from geo.coordinates import Coordinate, is_coordinate_string, parse_coordinate_string
from geo.geocoder import OneMapGeocoder
from routing.aggregator import RouteAggregator
from routing.models import FareRoutePlan, TripRequest

logger = logging.getLogger(__name__)

MISSING_ENDPOINTS_MESSAGE = "Origin and destination are required."


def build_trip_request(
    start: str | None,
    end: str | None,
    **options: str | int | None,
) -> TripRequest:
    """Validate raw query values into a TripRequest.

    Origin and destination are trimmed; omitted options fall back to the
    TripRequest defaults.
    """
    start = (start or "").strip()
    end = (end or "").strip()
    if not start or not end:
        raise ValidationError(MISSING_ENDPOINTS_MESSAGE)

    provided = {key: value for key, value in options.items() if value is not None}
    try:
        return TripRequest(start=start, end=end, **provided)
    except PydanticValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise ValidationError(
            f"Invalid trip parameters: {', '.join(fields)}", details={"fields": fields}
        ) from e


class FareRouteService:
    """Resolves trip endpoints and hands them to the RouteAggregator."""

    def __init__(self, geocoder: OneMapGeocoder, aggregator: RouteAggregator):
        self._geocoder = geocoder
        self._aggregator = aggregator

    async def resolve_endpoint(self, value: str, label: str) -> Coordinate:
        """Coordinate for a raw ``lat,lng`` string or a place name.

        Raises:
            LocationNotFoundError: the place is unknown or the pair is out of range.
        """
        not_valid = f"{label} location not valid."
        if is_coordinate_string(value):
            try:
                return parse_coordinate_string(value)
            except ValueError as e:
                raise LocationNotFoundError(not_valid, details={"value": value}) from e

        coordinate = await self._geocoder.resolve(value)
        if coordinate is None:
            raise LocationNotFoundError(not_valid, details={"value": value})
        return coordinate

    async def get_fare_route(self, trip: TripRequest) -> FareRoutePlan:
        # Both lookups run concurrently; failures are reported origin first.
        origin, destination = await asyncio.gather(
            self.resolve_endpoint(trip.start, "Origin"),
            self.resolve_endpoint(trip.end, "Destination"),
            return_exceptions=True,
        )
        if isinstance(origin, BaseException):
            raise origin
        if isinstance(destination, BaseException):
            raise destination

        logger.debug(f"Resolved trip endpoints {origin.to_query()} -> {destination.to_query()}")
        return await self._aggregator.aggregate(origin, destination, trip)
