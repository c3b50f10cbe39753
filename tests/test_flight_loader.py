"""
Unit Tests for Flight Loader and Categorical Types

Tests:
1. File discovery and concatenation
2. Raw BTS header renaming
3. Enumerated month/weekday conversion
"""

import pytest
import pandas as pd
import numpy as np

from flight_analysis.data.categories import DayOfWeek, Month, enum_labels, to_categorical
from flight_analysis.data.flight_loader import (
    FlightDataLoader,
    load_flights,
    normalize_categoricals,
)


class TestFileDiscovery:
    def test_readme_excluded(self, bts_csv_dir):
        """Readme files are not treated as data."""
        files = FlightDataLoader(bts_csv_dir).get_available_files()

        assert [f.name for f in files] == ["flights_2023_1.csv", "flights_2023_2.csv"]

    def test_missing_directory(self, tmp_path):
        """A missing directory should raise FileNotFoundError."""
        loader = FlightDataLoader(tmp_path / "nope")

        with pytest.raises(FileNotFoundError):
            loader.get_available_files()

    def test_empty_directory(self, tmp_path):
        """A directory without CSV files should raise ValueError."""
        with pytest.raises(ValueError):
            FlightDataLoader(tmp_path).load_all()


class TestLoading:
    def test_concatenates_all_files(self, bts_csv_dir):
        """All rows of all files are kept."""
        df = FlightDataLoader(bts_csv_dir).load_all()

        assert len(df) == 300
        assert df.index.is_unique

    def test_no_deduplication(self, bts_csv_dir):
        """Loading the same file twice keeps both copies."""
        loader = FlightDataLoader(bts_csv_dir)
        first = loader.get_available_files()[0]

        df = loader.load_all([first, first])

        assert len(df) == 300

    def test_headers_renamed(self, bts_csv_dir):
        """Raw BTS headers are mapped to the internal schema."""
        df = FlightDataLoader(bts_csv_dir).load_all()

        for col in ["ORIGIN", "DEST", "OP_CARRIER", "ACTUAL_ELAPSED_TIME", "DAY_OF_WEEK"]:
            assert col in df.columns, f"Missing column: {col}"
        # Columns outside the schema are carried through
        assert "Flight_Number_Reporting_Airline" in df.columns

    def test_load_flights_normalizes(self, bts_csv_dir):
        """The convenience loader returns categorical month/weekday."""
        df = load_flights(bts_csv_dir)

        assert isinstance(df["MONTH"].dtype, pd.CategoricalDtype)
        assert isinstance(df["DAY_OF_WEEK"].dtype, pd.CategoricalDtype)


class TestCategoricalConversion:
    def test_full_label_set(self):
        """Every label is a category even when absent from the data."""
        result = to_categorical(pd.Series([1, 1, 3]), DayOfWeek)

        assert list(result.cat.categories) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert list(result) == ["Mon", "Mon", "Wed"]

    def test_month_labels(self):
        """Month codes map to calendar labels in order."""
        assert enum_labels(Month)[0] == "Jan"
        assert enum_labels(Month)[-1] == "Dec"
        assert Month(7).label == "Jul"

    def test_invalid_code(self):
        """A code outside the enum should raise ValueError."""
        with pytest.raises(ValueError):
            to_categorical(pd.Series([1, 8]), DayOfWeek)

    def test_missing_code_kept_as_nan(self):
        """Missing codes stay missing."""
        result = to_categorical(pd.Series([1.0, np.nan]), Month)

        assert result.isna().tolist() == [False, True]

    def test_normalize_is_idempotent(self, raw_flight_data):
        """Normalizing an already normalized frame changes nothing."""
        once = normalize_categoricals(raw_flight_data)
        twice = normalize_categoricals(once)

        pd.testing.assert_series_equal(once["MONTH"], twice["MONTH"])
        pd.testing.assert_series_equal(once["DAY_OF_WEEK"], twice["DAY_OF_WEEK"])

    def test_normalize_does_not_mutate_input(self, raw_flight_data):
        """The raw frame keeps its integer codes."""
        normalize_categoricals(raw_flight_data)

        assert raw_flight_data["MONTH"].dtype.kind == "i"
