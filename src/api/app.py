"""FastAPI application factory for the fare route service."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from api.errors import register_exception_handlers
from api.middleware.correlation import CorrelationIdMiddleware
from api.rate_limit import limiter, rate_limit_exceeded_handler
from api.routes import fare_route, taxi
from fares.cab_fare import CabFareEstimator
from fares.fare_table import FareTable
from geo.geocoder import OneMapGeocoder
from routing.aggregator import RouteAggregator
from routing.onemap_client import OneMapRoutingClient
from routing.service import FareRouteService
from settings import Settings, get_settings
from taxi.availability import TaxiAvailabilityClient

logger = logging.getLogger(__name__)


def build_fare_route_service(settings: Settings) -> FareRouteService:
    """Wire geocoder, routing client and fare estimator from settings.

    Raises:
        ConfigurationError: ONEMAP_TOKEN is unset or the fare table is unreadable.
    """
    fare_table = FareTable.load(settings.fare.table_path)
    routing_client = OneMapRoutingClient(
        base_url=settings.onemap.base_url,
        token=settings.onemap.token,
        timeout=settings.onemap.timeout_seconds,
    )
    geocoder = OneMapGeocoder(
        base_url=settings.onemap.base_url,
        timeout=settings.onemap.timeout_seconds,
    )
    aggregator = RouteAggregator(routing_client, CabFareEstimator(fare_table))
    return FareRouteService(geocoder, aggregator)


def build_taxi_client(settings: Settings) -> TaxiAvailabilityClient | None:
    if not settings.lta.account_key:
        logger.warning("LTA_ACCOUNT_KEY not set; taxi availability endpoint disabled")
        return None
    return TaxiAvailabilityClient(
        base_url=settings.lta.base_url,
        account_key=settings.lta.account_key,
        timeout=settings.lta.timeout_seconds,
    )


def create_app(
    settings: Settings | None = None,
    fare_route_service: FareRouteService | None = None,
    taxi_client: TaxiAvailabilityClient | None = None,
) -> FastAPI:
    """Create FastAPI application with injected dependencies.

    Args:
        settings: Loaded settings; read from the environment when omitted
        fare_route_service: Service for /api/fare-route; built from settings when omitted
        taxi_client: Client for /api/taxi; built from settings when omitted
    """
    if settings is None:
        settings = get_settings()
    if fare_route_service is None:
        fare_route_service = build_fare_route_service(settings)
    if taxi_client is None:
        taxi_client = build_taxi_client(settings)

    app = FastAPI(
        title="Fare Route API",
        version="1.0.0",
        description="Ranked transit itineraries, cab fare estimates and taxi availability",
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
    register_exception_handlers(app)

    # Set dependencies immediately so they're available for testing
    app.state.settings = settings
    app.state.fare_route_service = fare_route_service
    app.state.taxi_client = taxi_client

    origins = [origin.strip() for origin in settings.cors.origins.split(",") if origin.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(fare_route.router, prefix="/api/fare-route", tags=["fare-route"])
    app.include_router(taxi.router, prefix="/api/taxi", tags=["taxi"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint for monitoring."""
        return {"status": "healthy"}

    return app
