"""Rate limiting configuration using slowapi."""

from opentelemetry import metrics
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from settings import RateLimitSettings

meter = metrics.get_meter("fare_route")

rate_limit_hits = meter.create_counter(
    name="api_rate_limit_hits_total",
    description="Total API requests rejected by rate limiting",
    unit="1",
)

limiter = Limiter(key_func=get_remote_address)

_limits = RateLimitSettings()


def fare_route_limit() -> str:
    return _limits.fare_route


def taxi_limit() -> str:
    return _limits.taxi


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """429 handler with OTel tracking and Retry-After header.

    Builds the response manually instead of using slowapi's default handler
    so the body uses the service's ``{"error": ...}`` shape.
    """
    rate_limit_hits.add(
        1,
        {"endpoint": request.url.path, "method": request.method},
    )

    retry_after = "60"
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit:
        # view_rate_limit holds the matched limit, e.g. "60 per 1 minute"
        window_map = {"second": 1, "minute": 60, "hour": 3600, "day": 86400}
        limit_text = str(view_rate_limit)
        for unit, seconds in window_map.items():
            if unit in limit_text:
                retry_after = str(seconds)
                break

    response = JSONResponse(
        status_code=429,
        content={"error": f"Rate limit exceeded: {exc.detail}"},
    )
    response.headers["retry-after"] = retry_after
    return response
