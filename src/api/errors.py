"""Map service exceptions onto ``{"error": ...}`` JSON responses."""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from core.exceptions import FareRouteError, ValidationError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info(f"Rejected {request.url.path}: {exc.message}")
    return error_response(400, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    return error_response(400, f"Invalid query parameters: {', '.join(fields)}")


async def fare_route_error_handler(request: Request, exc: FareRouteError) -> JSONResponse:
    logger.error(f"Error in {request.url.path}: {exc.message}", exc_info=exc)
    return error_response(500, exc.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error in {request.url.path}")
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, request_validation_error_handler  # type: ignore[arg-type]
    )
    app.add_exception_handler(FareRouteError, fare_route_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
