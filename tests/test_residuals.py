"""
Unit Tests for Baseline Residual Model

Tests:
1. Baseline fit on distance
2. Residual identity (actual - predicted)
3. Residual aggregation along exploration axes
"""

import pytest
import pandas as pd
import numpy as np

from flight_analysis.features.residuals import (
    BaselineResidualModel,
    drop_derived_columns,
    residual_summaries,
    summarize_residuals,
)


@pytest.fixture
def residual_data(clean_flight_data):
    return BaselineResidualModel().fit(clean_flight_data).add_residuals(clean_flight_data)


class TestBaselineFit:
    def test_recovers_exact_line(self):
        """A perfectly linear relation is recovered."""
        df = pd.DataFrame({"DISTANCE": [100.0, 200.0, 300.0, 400.0]})
        df["ACTUAL_ELAPSED_TIME"] = 30 + 0.125 * df["DISTANCE"]

        baseline = BaselineResidualModel().fit(df)

        assert baseline.intercept_ == pytest.approx(30.0)
        assert baseline.slope_ == pytest.approx(0.125)

    def test_positive_slope(self, clean_flight_data):
        """Longer flights take longer."""
        baseline = BaselineResidualModel().fit(clean_flight_data)

        assert baseline.slope_ > 0

    def test_predict_before_fit(self, clean_flight_data):
        """predict() on an unfitted model should raise RuntimeError."""
        with pytest.raises(RuntimeError):
            BaselineResidualModel().predict(clean_flight_data)


class TestResiduals:
    def test_residual_identity(self, residual_data):
        """RESIDUAL equals actual minus predicted for every flight."""
        expected = residual_data["ACTUAL_ELAPSED_TIME"] - residual_data["PREDICTED_ELAPSED_TIME"]

        np.testing.assert_allclose(residual_data["RESIDUAL"], expected, rtol=0, atol=1e-9)

    def test_residuals_mean_zero(self, residual_data):
        """OLS with intercept leaves residuals centered on zero."""
        assert residual_data["RESIDUAL"].mean() == pytest.approx(0.0, abs=1e-6)

    def test_input_not_mutated(self, clean_flight_data):
        """add_residuals works on a copy."""
        BaselineResidualModel().fit(clean_flight_data).add_residuals(clean_flight_data)

        assert "RESIDUAL" not in clean_flight_data.columns

    def test_drop_derived_columns(self, residual_data, clean_flight_data):
        """Derived columns are removed before training."""
        result = drop_derived_columns(residual_data)

        assert list(result.columns) == list(clean_flight_data.columns)


class TestResidualSummaries:
    def test_weekday_keeps_calendar_order(self, residual_data):
        """Categorical axes keep category order."""
        summary = summarize_residuals(residual_data, "DAY_OF_WEEK")

        assert list(summary.index) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

    def test_counts_add_up(self, residual_data):
        """Group counts sum to the number of flights."""
        summary = summarize_residuals(residual_data, "OP_CARRIER")

        assert summary["flights"].sum() == len(residual_data)

    def test_non_categorical_sorted_by_mean(self, residual_data):
        """Other axes are sorted by mean residual, largest first."""
        summary = summarize_residuals(residual_data, "ORIGIN")

        assert summary["mean_residual"].is_monotonic_decreasing

    def test_all_axes(self, residual_data):
        """One summary per exploration axis."""
        summaries = residual_summaries(residual_data)

        assert set(summaries) == {
            "DAY_OF_WEEK",
            "DEP_TIME_BLK",
            "MONTH",
            "ORIGIN",
            "DEST",
            "OP_CARRIER",
        }

    def test_requires_residuals(self, clean_flight_data):
        """Summaries need the RESIDUAL column."""
        with pytest.raises(ValueError):
            summarize_residuals(clean_flight_data, "ORIGIN")
