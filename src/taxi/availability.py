import logging
import math
import time
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from core.exceptions import ConfigurationError, NetworkError, ServiceUnavailableError
from geo.distance import haversine_distance_m
from metrics import record_upstream_error, record_upstream_latency

logger = logging.getLogger(__name__)

AVERAGE_SPEED_KMPH = 30.0


class TaxiServiceError(ServiceUnavailableError):
    """LTA DataMall taxi feed failed with a network error or non-2xx status."""

    pass


class TaxiTimeoutError(NetworkError):
    """LTA DataMall taxi feed request timed out."""

    pass


class TaxiLocation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    latitude: float
    longitude: float
    eta_minutes: int = Field(alias="etaMinutes", ge=0)


def _first_number(entry: dict[str, Any], *keys: str) -> float:
    for key in keys:
        value = entry.get(key)
        if value not in (None, ""):
            try:
                return float(value)
            except (TypeError, ValueError):
                return math.nan
    return math.nan


def eta_minutes(distance_m: float, speed_kmph: float = AVERAGE_SPEED_KMPH) -> int:
    return math.ceil((distance_m / 1000 / speed_kmph) * 60)


class TaxiAvailabilityClient:
    """Finds available taxis near a point from the LTA DataMall feed."""

    AVAILABILITY_PATH = "/ltaodataservice/Taxi-Availability"

    def __init__(self, base_url: str, account_key: str, timeout: float = 10.0):
        if not account_key or not account_key.strip():
            raise ConfigurationError("LTA_ACCOUNT_KEY is not defined")
        self.base_url = base_url.rstrip("/")
        self.account_key = account_key.strip()
        self.timeout = timeout

    async def _fetch_all(self) -> list[dict[str, Any]]:
        url = f"{self.base_url}{self.AVAILABILITY_PATH}"
        headers = {"AccountKey": self.account_key, "accept": "application/json"}

        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            record_upstream_error("taxi", "timeout")
            raise TaxiTimeoutError(f"Request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            record_upstream_error("taxi", "network_error")
            raise TaxiServiceError(f"Network error: {e}") from e

        if not response.is_success:
            record_upstream_error("taxi", f"http_{response.status_code}")
            raise TaxiServiceError(f"Taxi availability error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            record_upstream_error("taxi", "invalid_body")
            raise TaxiServiceError("Taxi availability response is not valid JSON") from e

        record_upstream_latency("taxi", (time.perf_counter() - start_time) * 1000)

        if isinstance(data, dict):
            data = data.get("value") or []
        return [entry for entry in data if isinstance(entry, dict)] if data else []

    async def nearby_taxis(
        self, latitude: float, longitude: float, radius_m: float
    ) -> list[TaxiLocation]:
        """Available taxis within ``radius_m`` metres, with a straight-line ETA."""
        nearby: list[TaxiLocation] = []

        for entry in await self._fetch_all():
            lat = _first_number(entry, "Latitude", "latitude", "lat")
            lon = _first_number(entry, "Longitude", "longitude", "lon")
            if math.isnan(lat) or math.isnan(lon):
                logger.warning(f"Skipping taxi with invalid coordinates: {entry}")
                continue

            distance_m = haversine_distance_m(latitude, longitude, lat, lon)
            if distance_m > radius_m:
                continue

            nearby.append(
                TaxiLocation(latitude=lat, longitude=lon, eta_minutes=eta_minutes(distance_m))
            )

        logger.debug(f"Found {len(nearby)} taxis within {radius_m:.0f}m")
        return nearby
