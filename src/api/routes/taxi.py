import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.dependencies import get_taxi_client
from api.rate_limit import limiter, taxi_limit
from core.exceptions import FareRouteError

logger = logging.getLogger(__name__)

router = APIRouter()

TaxiClientDep = Annotated[Any, Depends(get_taxi_client)]

DEFAULT_LATITUDE = 1.34
DEFAULT_LONGITUDE = 103.68
SEARCH_RADIUS_M = 3000


@router.get("/taxi-availability", response_model=None)
@limiter.limit(taxi_limit)
async def get_available_taxis(
    request: Request,
    taxi_client: TaxiClientDep,
    lat: float = DEFAULT_LATITUDE,
    lon: float = DEFAULT_LONGITUDE,
) -> list[dict[str, Any]] | JSONResponse:
    """Available taxis within 3 km of the given point, with a drive-time ETA."""
    if taxi_client is None:
        logger.error("Taxi availability requested but LTA_ACCOUNT_KEY is not configured")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch taxi data"})

    try:
        taxis = await taxi_client.nearby_taxis(lat, lon, SEARCH_RADIUS_M)
    except FareRouteError as e:
        logger.error(f"Error fetching taxi availability: {e.message}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch taxi data"})

    return [taxi.model_dump(by_alias=True) for taxi in taxis]
