"""Per-request correlation ID middleware."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from core.correlation import new_correlation_id, with_correlation

REQUEST_ID_HEADER = "X-Request-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Tag every request's logs with a correlation ID and echo it back."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or new_correlation_id()

        with with_correlation(correlation_id):
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response
