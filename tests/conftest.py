"""
Shared pytest fixtures for the elapsed-time analysis tests.
Creates minimal BTS-like DataFrames for consistent testing.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
import pandas as pd
import numpy as np

from flight_analysis.data.flight_loader import normalize_categoricals

AIRPORTS = [
    "ATL", "ORD", "DFW", "DEN", "LAX", "JFK", "SFO", "SEA", "LAS", "MCO",
    "CLT", "PHX", "MIA", "IAH", "BOS", "MSP", "DTW", "FLL", "EWR", "PHL",
    "LGA", "BWI", "SLC", "DCA", "SAN",
]

DEP_TIME_BLOCKS = ["0600-0659", "0900-0959", "1200-1259", "1500-1559", "1800-1859"]


def make_raw_flights(n=400, seed=42, missing_outcome=0.05):
    """
    BTS-like flights in the internal schema with integer month/weekday codes.

    Busy airports get more flights (geometric weights), elapsed time grows
    with distance, and a small share of flights has no actual elapsed time.
    """
    rng = np.random.RandomState(seed)

    weights = 0.85 ** np.arange(len(AIRPORTS))
    weights = weights / weights.sum()

    distance = rng.randint(200, 2500, n).astype(float)
    scheduled = 30 + distance / 8 + rng.normal(0, 5, n)
    actual = scheduled + rng.normal(0, 12, n)
    actual[rng.rand(n) < missing_outcome] = np.nan

    return pd.DataFrame(
        {
            "ORIGIN": rng.choice(AIRPORTS, n, p=weights),
            "DEST": rng.choice(AIRPORTS, n, p=weights),
            "OP_CARRIER": rng.choice(["AA", "UA", "DL", "WN", "B6"], n),
            "DISTANCE": distance,
            "CRS_ELAPSED_TIME": scheduled.round(),
            "ACTUAL_ELAPSED_TIME": actual.round(),
            "DEP_TIME_BLK": rng.choice(DEP_TIME_BLOCKS, n),
            "YEAR": rng.choice([2022, 2023], n),
            "MONTH": rng.randint(1, 13, n),
            "DAY_OF_WEEK": rng.randint(1, 8, n),
        }
    )


@pytest.fixture
def raw_flight_data():
    """400 raw flights over 25 airports, integer month/weekday codes."""
    return make_raw_flights()


@pytest.fixture
def flight_data(raw_flight_data):
    """Raw flights with enumerated month/weekday categoricals."""
    return normalize_categoricals(raw_flight_data)


@pytest.fixture
def clean_flight_data(flight_data):
    """Flights with no missing outcome and a fresh index."""
    return flight_data.dropna(subset=["ACTUAL_ELAPSED_TIME"]).reset_index(drop=True)


@pytest.fixture
def bts_csv_dir(tmp_path):
    """
    Directory with two BTS-format CSV files (raw camelCase headers).
    """
    rename = {
        "ORIGIN": "Origin",
        "DEST": "Dest",
        "OP_CARRIER": "Reporting_Airline",
        "DISTANCE": "Distance",
        "CRS_ELAPSED_TIME": "CRSElapsedTime",
        "ACTUAL_ELAPSED_TIME": "ActualElapsedTime",
        "DEP_TIME_BLK": "DepTimeBlk",
        "YEAR": "Year",
        "MONTH": "Month",
        "DAY_OF_WEEK": "DayOfWeek",
    }

    for i, seed in enumerate([1, 2]):
        df = make_raw_flights(n=150, seed=seed).rename(columns=rename)
        df["Flight_Number_Reporting_Airline"] = np.arange(len(df))
        df.to_csv(tmp_path / f"flights_2023_{i + 1}.csv", index=False)

    # Not a data file
    (tmp_path / "readme.csv").write_text("notes\n")

    return tmp_path
