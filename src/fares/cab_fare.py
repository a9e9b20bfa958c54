import math

from pydantic import BaseModel, Field

from fares.fare_table import FareTable


class CabFareBreakdown(BaseModel):
    """Detailed breakdown of an estimated cab fare."""

    flag_down_fare: float = Field(ge=0)
    distance_units: int = Field(ge=0)
    distance_charge: float = Field(ge=0)
    wait_units: int = Field(ge=0)
    wait_charge: float = Field(ge=0)
    total_fare: str


class CabFareEstimator:
    """Estimates a metered taxi fare from trip distance and duration.

    The first kilometre is covered by the flag-down fare. Distance is then
    charged per 400 m up to 10 km and per 350 m beyond, and waiting time per
    45 seconds of trip duration.
    """

    DEFAULT_FLAG_DOWN_FARE = 4.40
    PER_400M_FARE = 0.26
    PER_45SEC_WAIT_FARE = 0.26
    INCLUDED_METERS = 1000
    FIRST_BAND_KM = 10
    FIRST_BAND_METERS = 9000

    def __init__(self, fare_table: FareTable | None = None):
        flag_down = fare_table.flag_down_fare() if fare_table is not None else None
        self.flag_down_fare = flag_down if flag_down is not None else self.DEFAULT_FLAG_DOWN_FARE

    def calculate(self, distance_km: float, duration_min: float) -> CabFareBreakdown:
        if not math.isfinite(distance_km) or distance_km < 0:
            raise ValueError("Distance must be a non-negative number")
        if not math.isfinite(duration_min) or duration_min < 0:
            raise ValueError("Duration must be a non-negative number")

        total_fare = self.flag_down_fare
        additional_meters = max(0, distance_km * 1000 - self.INCLUDED_METERS)

        if distance_km <= self.FIRST_BAND_KM:
            distance_units = math.floor(additional_meters / 400)
            distance_charge = distance_units * self.PER_400M_FARE
            total_fare += distance_charge
        else:
            beyond_meters = additional_meters - self.FIRST_BAND_METERS
            first_units = math.floor(self.FIRST_BAND_METERS / 400)
            beyond_units = math.floor(beyond_meters / 350)
            # The beyond-10km band reuses the 400 m rate.
            distance_charge = first_units * self.PER_400M_FARE + beyond_units * self.PER_400M_FARE
            distance_units = first_units + beyond_units
            total_fare += distance_charge

        wait_units = math.floor((duration_min * 60) / 45)
        wait_charge = wait_units * self.PER_45SEC_WAIT_FARE
        total_fare += wait_charge

        return CabFareBreakdown(
            flag_down_fare=self.flag_down_fare,
            distance_units=distance_units,
            distance_charge=distance_charge,
            wait_units=wait_units,
            wait_charge=wait_charge,
            total_fare=f"{total_fare:.2f}",
        )

    def estimate(self, distance_km: float, duration_min: float) -> str:
        """Estimated fare rounded to cents, e.g. ``"10.38"``."""
        return self.calculate(distance_km, duration_min).total_fare
