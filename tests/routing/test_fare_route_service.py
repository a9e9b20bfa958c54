from unittest.mock import AsyncMock, Mock

import pytest

from core.exceptions import LocationNotFoundError, ValidationError
from geo.coordinates import Coordinate
from geo.geocoder import GeocodeServiceError, OneMapGeocoder
from routing.aggregator import RouteAggregator
from routing.models import TripRequest
from routing.service import (
    MISSING_ENDPOINTS_MESSAGE,
    FareRouteService,
    build_trip_request,
)

BUGIS = Coordinate(latitude=1.3002, longitude=103.8551)
CHANGI = Coordinate(latitude=1.3644, longitude=103.9915)


@pytest.fixture
def geocoder() -> Mock:
    mock = Mock(spec=OneMapGeocoder)
    mock.resolve = AsyncMock()
    return mock


@pytest.fixture
def aggregator() -> Mock:
    mock = Mock(spec=RouteAggregator)
    mock.aggregate = AsyncMock(return_value="plan")
    return mock


@pytest.fixture
def service(geocoder, aggregator) -> FareRouteService:
    return FareRouteService(geocoder, aggregator)


@pytest.mark.unit
class TestBuildTripRequest:
    def test_trims_endpoints(self):
        trip = build_trip_request("  Bugis ", "\tChangi Airport\n")
        assert trip.start == "Bugis"
        assert trip.end == "Changi Airport"

    @pytest.mark.parametrize("start,end", [(None, "b"), ("a", None), ("   ", "b"), ("a", "")])
    def test_missing_endpoint(self, start, end):
        with pytest.raises(ValidationError) as exc_info:
            build_trip_request(start, end)
        assert exc_info.value.message == MISSING_ENDPOINTS_MESSAGE

    def test_omitted_options_use_defaults(self):
        trip = build_trip_request("a", "b", route_type=None, date=None, num_itineraries=None)
        assert trip == TripRequest(start="a", end="b")

    def test_options_are_applied(self):
        trip = build_trip_request(
            "a", "b", route_type="drive", max_walk_distance="800", num_itineraries="2"
        )
        assert trip.route_type == "drive"
        assert trip.max_walk_distance == 800
        assert trip.num_itineraries == 2

    def test_invalid_options_name_the_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            build_trip_request("a", "b", route_type="boat", num_itineraries="many")
        assert exc_info.value.message == "Invalid trip parameters: num_itineraries, route_type"
        assert exc_info.value.details["fields"] == ["num_itineraries", "route_type"]


class TestResolveEndpoint:
    async def test_coordinate_pair_skips_geocoder(self, service, geocoder):
        result = await service.resolve_endpoint("1.3002,103.8551", "Origin")

        assert result == BUGIS
        geocoder.resolve.assert_not_awaited()

    async def test_place_name_is_geocoded(self, service, geocoder):
        geocoder.resolve.return_value = CHANGI

        assert await service.resolve_endpoint("Changi Airport", "Destination") == CHANGI
        geocoder.resolve.assert_awaited_once_with("Changi Airport")

    async def test_unknown_place(self, service, geocoder):
        geocoder.resolve.return_value = None

        with pytest.raises(LocationNotFoundError) as exc_info:
            await service.resolve_endpoint("Atlantis", "Destination")
        assert exc_info.value.message == "Destination location not valid."

    async def test_out_of_range_pair(self, service, geocoder):
        with pytest.raises(LocationNotFoundError) as exc_info:
            await service.resolve_endpoint("95.0,103.8", "Origin")
        assert exc_info.value.message == "Origin location not valid."
        geocoder.resolve.assert_not_awaited()


class TestGetFareRoute:
    async def test_raw_coordinates_never_geocode(self, service, geocoder, aggregator):
        trip = TripRequest(start="1.3002,103.8551", end="1.3644,103.9915")

        assert await service.get_fare_route(trip) == "plan"

        geocoder.resolve.assert_not_awaited()
        aggregator.aggregate.assert_awaited_once_with(BUGIS, CHANGI, trip)

    async def test_mixed_endpoints(self, service, geocoder, aggregator):
        geocoder.resolve.return_value = CHANGI
        trip = TripRequest(start="1.3002,103.8551", end="Changi Airport")

        await service.get_fare_route(trip)

        geocoder.resolve.assert_awaited_once_with("Changi Airport")
        aggregator.aggregate.assert_awaited_once_with(BUGIS, CHANGI, trip)

    async def test_origin_not_found_skips_routing(self, service, geocoder, aggregator):
        geocoder.resolve.side_effect = [None, CHANGI]
        trip = TripRequest(start="Atlantis", end="Changi Airport")

        with pytest.raises(LocationNotFoundError) as exc_info:
            await service.get_fare_route(trip)

        assert exc_info.value.message == "Origin location not valid."
        aggregator.aggregate.assert_not_awaited()

    async def test_destination_not_found(self, service, geocoder, aggregator):
        geocoder.resolve.side_effect = [BUGIS, None]
        trip = TripRequest(start="Bugis", end="Atlantis")

        with pytest.raises(LocationNotFoundError) as exc_info:
            await service.get_fare_route(trip)

        assert exc_info.value.message == "Destination location not valid."
        aggregator.aggregate.assert_not_awaited()

    async def test_origin_reported_first_when_both_fail(self, service, geocoder, aggregator):
        geocoder.resolve.return_value = None
        trip = TripRequest(start="Atlantis", end="Lemuria")

        with pytest.raises(LocationNotFoundError) as exc_info:
            await service.get_fare_route(trip)

        assert exc_info.value.message == "Origin location not valid."

    async def test_geocoder_outage_is_not_not_found(self, service, geocoder, aggregator):
        geocoder.resolve.side_effect = GeocodeServiceError("Geocode request failed. Status: 503")
        trip = TripRequest(start="Bugis", end="1.3644,103.9915")

        with pytest.raises(GeocodeServiceError):
            await service.get_fare_route(trip)
        aggregator.aggregate.assert_not_awaited()
