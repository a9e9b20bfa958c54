"""Nearby taxi availability from LTA DataMall."""

from .availability import (
    TaxiAvailabilityClient,
    TaxiLocation,
    TaxiServiceError,
    TaxiTimeoutError,
    eta_minutes,
)

__all__ = [
    "TaxiAvailabilityClient",
    "TaxiLocation",
    "TaxiServiceError",
    "TaxiTimeoutError",
    "eta_minutes",
]
