"""Typed views of the raw OneMap routing response.

The response is classified exactly once into DriveResponse or
TransitResponse; anything else is rejected as invalid route data.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import UpstreamDataError
from routing.models import Plan, RouteType


class InvalidRouteDataError(UpstreamDataError):
    """OneMap answered with neither a drive summary nor an itinerary list."""

    pass


class RouteSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    total_time: float = Field(ge=0)
    total_distance: float = Field(ge=0)


class DriveResponse(BaseModel):
    kind: Literal["drive"] = "drive"
    route_geometry: str = Field(min_length=1)
    route_summary: RouteSummary
    route_instructions: list[Any] = Field(default_factory=list)

    def instruction_texts(self) -> list[str]:
        """Human-readable text of each turn-by-turn step (element 9 of a step)."""
        texts = []
        for step in self.route_instructions:
            if isinstance(step, list | tuple) and len(step) > 9 and step[9] is not None:
                texts.append(str(step[9]))
        return texts


class TransitResponse(BaseModel):
    kind: Literal["transit"] = "transit"
    plan: Plan


RouteResponse = DriveResponse | TransitResponse

INVALID_ROUTE_DATA_MESSAGE = "Invalid route data returned from OneMap"


def parse_route_response(data: Any, route_type: RouteType) -> RouteResponse:
    """Classify a raw OneMap routing payload.

    Raises:
        InvalidRouteDataError: if the payload matches neither shape or a
            matching shape carries malformed fields.
    """
    if not isinstance(data, dict):
        raise InvalidRouteDataError(INVALID_ROUTE_DATA_MESSAGE)

    try:
        if route_type == "drive" and data.get("route_geometry") and data.get("route_summary"):
            return DriveResponse.model_validate(
                {
                    "route_geometry": data["route_geometry"],
                    "route_summary": data["route_summary"],
                    "route_instructions": data.get("route_instructions") or [],
                }
            )

        plan = data.get("plan")
        if isinstance(plan, dict) and plan.get("itineraries"):
            return TransitResponse.model_validate({"plan": plan})
    except PydanticValidationError as e:
        raise InvalidRouteDataError(
            INVALID_ROUTE_DATA_MESSAGE, details={"errors": e.errors(include_url=False)}
        ) from e

    raise InvalidRouteDataError(INVALID_ROUTE_DATA_MESSAGE, details={"keys": sorted(data)})
