"""Coordinate value type and the "lat,lng" query string format."""

import math
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

COORDINATE_PATTERN = re.compile(r"^-?\d+(\.\d+)?,-?\d+(\.\d+)?$")


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    @field_validator("latitude", "longitude")
    @classmethod
    def must_be_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Coordinate components must be finite")
        return v

    def to_query(self) -> str:
        """Format as the ``lat,lng`` string OneMap expects."""
        return f"{self.latitude},{self.longitude}"

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


def is_coordinate_string(value: str) -> bool:
    """True when ``value`` is already a ``lat,lng`` pair and needs no geocoding."""
    return COORDINATE_PATTERN.match(value) is not None


def parse_coordinate_string(value: str) -> Coordinate:
    """Parse a ``lat,lng`` string.

    Raises:
        ValueError: if the string is not a pair or is out of range.
    """
    if not is_coordinate_string(value):
        raise ValueError(f"Not a coordinate pair: {value!r}")
    lat, lng = value.split(",")
    return Coordinate(latitude=float(lat), longitude=float(lng))
