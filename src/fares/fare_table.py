import json
import logging
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# "$4.40 - $4.80" -> "4.40": drop dollar signs and everything after the first space.
_FARE_NOISE = re.compile(r"\$| .*")
_LEADING_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)")


class FareTableEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    taxi_fare_type: str = Field(alias="taxiFareType")
    taxi_type: str = Field(alias="taxiType")
    fare: str


def parse_fare_amount(fare: str) -> float | None:
    """Leading numeric amount of a fare string, or None if there is none."""
    match = _LEADING_NUMBER.match(_FARE_NOISE.sub("", fare))
    if match is None:
        return None
    return float(match.group(0))


class FareTable:
    """Static taxi fare reference data.

    Loaded once at startup and never mutated, so a single instance is shared
    by every request handler without locking.
    """

    FLAG_DOWN_FARE_TYPE = "Flag-Down Fare"
    STANDARD_TAXI_TYPE = "Standard"

    def __init__(self, entries: tuple[FareTableEntry, ...] = ()):
        self._entries = tuple(entries)

    @classmethod
    def load(cls, path: Path | str) -> "FareTable":
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Cannot load fare table from {path}", details={"path": str(path)}
            ) from e

        rows = data.get("taxiFareTable", []) if isinstance(data, dict) else []
        entries = []
        for row in rows:
            try:
                entries.append(FareTableEntry.model_validate(row))
            except ValueError as e:
                logger.warning(f"Skipping malformed fare table row {row!r}: {e}")

        logger.info(f"Loaded {len(entries)} fare table entries from {path}")
        return cls(tuple(entries))

    @property
    def entries(self) -> tuple[FareTableEntry, ...]:
        return self._entries

    def find(self, taxi_fare_type: str, taxi_type: str) -> FareTableEntry | None:
        for entry in self._entries:
            if entry.taxi_fare_type == taxi_fare_type and entry.taxi_type == taxi_type:
                return entry
        return None

    def flag_down_fare(self) -> float | None:
        """Standard-taxi flag-down fare, or None when the table lacks a usable row."""
        entry = self.find(self.FLAG_DOWN_FARE_TYPE, self.STANDARD_TAXI_TYPE)
        if entry is None:
            return None
        amount = parse_fare_amount(entry.fare)
        if amount is None:
            logger.warning(f"Unparseable flag-down fare {entry.fare!r}")
        return amount

    def __len__(self) -> int:
        return len(self._entries)
