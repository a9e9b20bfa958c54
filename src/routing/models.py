"""Trip request and plan models.

Itinerary, Leg and the plan keep every field OneMap sends (``extra="allow"``)
so a transit plan goes back to the client unchanged apart from the derived
``durationInMinutes``. Serialize with ``by_alias=True, exclude_unset=True``.
"""

import math
from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

RouteType = Literal["pt", "drive"]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, matching JavaScript's Math.round."""
    return math.floor(value + 0.5)


class TripRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: str = Field(min_length=1)
    end: str = Field(min_length=1)
    route_type: RouteType = "pt"
    date: str = Field(default="08-13-2023", pattern=r"^\d{2}-\d{2}-\d{4}$")
    time: str = Field(default="07:35:00", pattern=r"^\d{2}:\d{2}:\d{2}$")
    mode: str = Field(default="TRANSIT", pattern=r"^[A-Z_]+$")
    max_walk_distance: int = Field(default=50, ge=0)
    num_itineraries: int = Field(default=5, ge=1)


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Place(_UpstreamModel):
    name: str = ""
    lat: float
    lon: float


class LegGeometry(_UpstreamModel):
    points: str


class Leg(_UpstreamModel):
    mode: str
    from_: Place = Field(alias="from")
    to: Place
    leg_geometry: LegGeometry = Field(alias="legGeometry")
    intermediate_stops: list[Any] = Field(default_factory=list, alias="intermediateStops")
    route_short_name: str | None = Field(default=None, alias="routeShortName")
    instructions: list[str] | None = None


class Itinerary(_UpstreamModel):
    duration: float = Field(ge=0)
    fare: str | float | None = None
    duration_in_minutes: int | None = Field(default=None, alias="durationInMinutes")
    distance: float | None = None
    legs: list[Leg] = Field(min_length=1)

    def parsed_fare(self) -> float:
        """Fare as a number; +inf when missing or not numeric so it never ranks cheapest."""
        if self.fare is None:
            return math.inf
        try:
            value = float(self.fare)
        except (TypeError, ValueError):
            return math.inf
        return value if not math.isnan(value) else math.inf


class Plan(_UpstreamModel):
    itineraries: list[Itinerary] = Field(min_length=1)


class FareRoutePlan(BaseModel):
    """Response body of a fare route lookup."""

    model_config = ConfigDict(populate_by_name=True)

    plan: Plan
    cheapest_index: int = Field(alias="cheapestIndex", ge=0)
    fastest_index: int = Field(alias="fastestIndex", ge=0)

    @model_validator(mode="after")
    def indices_in_range(self) -> Self:
        count = len(self.plan.itineraries)
        if self.cheapest_index >= count or self.fastest_index >= count:
            raise ValueError(f"Ranking index out of range for {count} itineraries")
        return self

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)
