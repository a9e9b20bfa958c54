from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.rate_limit import limiter
from routing.service import FareRouteService
from settings import LTASettings, OneMapSettings, Settings
from taxi.availability import TaxiAvailabilityClient
from tests.factories import LTA_BASE_URL, ONEMAP_BASE_URL


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        onemap=OneMapSettings(base_url=ONEMAP_BASE_URL, token="test-token"),
        lta=LTASettings(base_url=LTA_BASE_URL, account_key="test-key"),
    )


@pytest.fixture
def mock_fare_route_service() -> Mock:
    service = Mock(spec=FareRouteService)
    service.get_fare_route = AsyncMock()
    return service


@pytest.fixture
def mock_taxi_client() -> Mock:
    client = Mock(spec=TaxiAvailabilityClient)
    client.nearby_taxis = AsyncMock(return_value=[])
    return client


@pytest.fixture
def app(test_settings, mock_fare_route_service, mock_taxi_client):
    return create_app(
        settings=test_settings,
        fare_route_service=mock_fare_route_service,
        taxi_client=mock_taxi_client,
    )


@pytest.fixture
def test_client(app):
    return TestClient(app, raise_server_exceptions=False)
