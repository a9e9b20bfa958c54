"""Taxi fare reference data and cab fare estimation."""

from .cab_fare import CabFareBreakdown, CabFareEstimator
from .fare_table import FareTable, FareTableEntry, parse_fare_amount

__all__ = [
    "CabFareBreakdown",
    "CabFareEstimator",
    "FareTable",
    "FareTableEntry",
    "parse_fare_amount",
]
