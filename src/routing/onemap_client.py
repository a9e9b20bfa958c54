import logging
import time
from typing import Any

import httpx

from core.exceptions import ConfigurationError, NetworkError, ServiceUnavailableError
from geo.coordinates import Coordinate
from metrics import record_upstream_error, record_upstream_latency
from routing.models import TripRequest
from routing.responses import INVALID_ROUTE_DATA_MESSAGE, InvalidRouteDataError

logger = logging.getLogger(__name__)


class RoutingServiceError(ServiceUnavailableError):
    """OneMap routing failed with a network error or non-2xx status."""

    pass


class RoutingTimeoutError(NetworkError):
    """OneMap routing request timed out."""

    pass


def bearer_header(token: str) -> str:
    """Authorization header value; tokens already prefixed with Bearer pass through."""
    token = token.strip()
    return token if token.startswith("Bearer") else f"Bearer {token}"


class OneMapRoutingClient:
    """Single-shot client for OneMap's public routing service."""

    ROUTE_PATH = "/api/public/routingsvc/route"

    def __init__(self, base_url: str, token: str, timeout: float = 10.0):
        if not token or not token.strip():
            raise ConfigurationError("ONEMAP_TOKEN is not defined")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._authorization = bearer_header(token)

    def _build_params(
        self, origin: Coordinate, destination: Coordinate, trip: TripRequest
    ) -> dict[str, str]:
        return {
            "start": origin.to_query(),
            "end": destination.to_query(),
            "routeType": trip.route_type,
            "date": trip.date,
            "time": trip.time,
            "mode": trip.mode,
            "maxWalkDistance": str(trip.max_walk_distance),
            "numItineraries": str(trip.num_itineraries),
        }

    async def fetch_route(
        self, origin: Coordinate, destination: Coordinate, trip: TripRequest
    ) -> dict[str, Any]:
        """Fetch the raw routing payload for one trip."""
        url = f"{self.base_url}{self.ROUTE_PATH}"
        params = self._build_params(origin, destination, trip)
        headers = {"Authorization": self._authorization}

        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as e:
            record_upstream_error("routing", "timeout")
            raise RoutingTimeoutError(f"Request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            record_upstream_error("routing", "network_error")
            raise RoutingServiceError(f"Network error: {e}") from e

        if not response.is_success:
            record_upstream_error("routing", f"http_{response.status_code}")
            logger.warning(f"OneMap routing returned HTTP {response.status_code}")
            raise RoutingServiceError(
                f"OneMap routing error: {response.status_code}",
                details={"status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            record_upstream_error("routing", "invalid_body")
            raise InvalidRouteDataError(INVALID_ROUTE_DATA_MESSAGE) from e

        record_upstream_latency("routing", (time.perf_counter() - start_time) * 1000)
        return data
