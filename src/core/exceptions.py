"""Standardized exception hierarchy for the fare route service."""

from typing import Any


class FareRouteError(Exception):
    """Base exception for all fare route errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransientError(FareRouteError):
    """Errors that may succeed if the caller retries."""

    pass


class NetworkError(TransientError):
    """Network-related transient errors (timeout, connection refused)."""

    pass


class ServiceUnavailableError(TransientError):
    """Upstream service failed or answered with a non-2xx status."""

    pass


class PermanentError(FareRouteError):
    """Errors that will not succeed on retry."""

    pass


class ValidationError(PermanentError):
    """Invalid client input. Surfaced as HTTP 400."""

    pass


class LocationNotFoundError(ValidationError):
    """A place name could not be resolved to coordinates."""

    pass


class UpstreamDataError(PermanentError):
    """An upstream provider answered with data of an unexpected shape."""

    pass


class ConfigurationError(PermanentError):
    """Missing or invalid configuration."""

    pass
