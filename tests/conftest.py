import os

# Provider credentials have no defaults; the routing client must fail without a token.
# Provide test values so Settings() and create_app() can be constructed in tests.
os.environ.setdefault("ONEMAP_TOKEN", "test-onemap-token")
os.environ.setdefault("LTA_ACCOUNT_KEY", "test-lta-key")

import json
from pathlib import Path

import pytest

from fares.cab_fare import CabFareEstimator
from fares.fare_table import FareTable
from settings import DEFAULT_FARE_TABLE_PATH


@pytest.fixture
def fare_table() -> FareTable:
    """The packaged fare table."""
    return FareTable.load(DEFAULT_FARE_TABLE_PATH)


@pytest.fixture
def cab_fare_estimator(fare_table: FareTable) -> CabFareEstimator:
    return CabFareEstimator(fare_table)


@pytest.fixture
def write_fare_table(tmp_path: Path):
    """Write a taxiFareTable JSON file and return its path."""

    def _write(rows: list[dict[str, str]]) -> Path:
        path = tmp_path / "transportFare.json"
        path.write_text(json.dumps({"taxiFareTable": rows}), encoding="utf-8")
        return path

    return _write
