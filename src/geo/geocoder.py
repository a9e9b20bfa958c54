import logging
import time

import httpx
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import NetworkError, ServiceUnavailableError, UpstreamDataError
from geo.coordinates import Coordinate
from metrics import record_upstream_error, record_upstream_latency

logger = logging.getLogger(__name__)


class GeocodeServiceError(ServiceUnavailableError):
    """OneMap search failed (network error or non-2xx). Distinct from not-found."""

    pass


class GeocodeTimeoutError(NetworkError):
    """OneMap search request timed out."""

    pass


class OneMapGeocoder:
    """Resolves free-text place names through OneMap's elastic search."""

    SEARCH_PATH = "/api/common/elastic/search"

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def resolve(self, place_name: str) -> Coordinate | None:
        """Resolve a place name to the first matching coordinate.

        Returns None when OneMap has no candidates. Transport failures raise
        GeocodeTimeoutError or GeocodeServiceError so callers never confuse
        an outage with an unknown place.
        """
        url = f"{self.base_url}{self.SEARCH_PATH}"
        params = {
            "searchVal": place_name,
            "returnGeom": "Y",
            "getAddrDetails": "Y",
            "pageNum": "1",
        }

        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
        except httpx.TimeoutException as e:
            record_upstream_error("geocode", "timeout")
            raise GeocodeTimeoutError(f"Geocode request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            record_upstream_error("geocode", "network_error")
            raise GeocodeServiceError(f"Network error: {e}") from e

        if not response.is_success:
            record_upstream_error("geocode", f"http_{response.status_code}")
            raise GeocodeServiceError(
                f"Geocode request failed. Status: {response.status_code}",
                details={"status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            record_upstream_error("geocode", "invalid_body")
            raise UpstreamDataError("Geocode response is not valid JSON") from e

        record_upstream_latency("geocode", (time.perf_counter() - start_time) * 1000)

        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            logger.info(f"No geocode match for {place_name!r}")
            return None

        first = results[0]
        try:
            return Coordinate(
                latitude=float(first["LATITUDE"]),
                longitude=float(first["LONGITUDE"]),
            )
        except (KeyError, TypeError, ValueError, PydanticValidationError) as e:
            record_upstream_error("geocode", "invalid_body")
            raise UpstreamDataError(
                "Geocode result has no usable coordinates", details={"result": first}
            ) from e
