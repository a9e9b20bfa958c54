"""Cross-cutting primitives: exceptions and request correlation."""

from .correlation import (
    CorrelationFilter,
    get_current_correlation_id,
    new_correlation_id,
    with_correlation,
)
from .exceptions import (
    ConfigurationError,
    FareRouteError,
    LocationNotFoundError,
    NetworkError,
    PermanentError,
    ServiceUnavailableError,
    TransientError,
    UpstreamDataError,
    ValidationError,
)

__all__ = [
    "FareRouteError",
    "TransientError",
    "NetworkError",
    "ServiceUnavailableError",
    "PermanentError",
    "ValidationError",
    "LocationNotFoundError",
    "UpstreamDataError",
    "ConfigurationError",
    "CorrelationFilter",
    "with_correlation",
    "new_correlation_id",
    "get_current_correlation_id",
]
