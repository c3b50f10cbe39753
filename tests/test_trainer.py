"""
Unit Tests for Model Trainer and the Analysis Pipeline

Tests:
1. Shared partition across candidates
2. Residual columns removed before training
3. End-to-end report generation
"""

import pytest
import pandas as pd
import numpy as np

from flight_analysis.features.residuals import BaselineResidualModel
from flight_analysis.models.candidates import (
    BoostedTrees,
    DistanceRegression,
    MultiVariableRegression,
    ScheduledTimeReference,
)
from flight_analysis.models.trainer import ModelTrainer
from flight_analysis.pipeline import run_analysis
from flight_analysis.validation.cross_validation import CrossValidator, FoldPartition


def fast_candidates():
    return [
        DistanceRegression(),
        ScheduledTimeReference(),
        MultiVariableRegression(),
        BoostedTrees(n_estimators=20, max_depth=2, learning_rate=0.1, random_state=0),
    ]


class TestModelTrainer:
    def test_all_candidates_scored(self, clean_flight_data):
        """One comparison row per candidate."""
        results = ModelTrainer(candidates=fast_candidates()).train_and_evaluate(
            clean_flight_data
        )

        assert len(results["comparison"]) == 4
        assert set(results["cv_results"]) == {
            "distance_regression",
            "scheduled_reference",
            "multivariable_regression",
            "boosted_trees",
        }
        assert {"rmse", "mae"} <= set(results["comparison"].columns)

    def test_residual_columns_dropped(self, clean_flight_data):
        """Derived residual columns never reach the candidates."""
        annotated = BaselineResidualModel().fit(clean_flight_data).add_residuals(
            clean_flight_data
        )

        prepared = ModelTrainer(candidates=[DistanceRegression()]).prepare_training_data(
            annotated
        )

        assert "RESIDUAL" not in prepared.columns
        assert "PREDICTED_ELAPSED_TIME" not in prepared.columns

    def test_matches_standalone_partition(self, clean_flight_data):
        """The trainer's scores match a partition built with the same seed."""
        results = ModelTrainer(
            candidates=[DistanceRegression()], random_state=11, in_sample_metrics=False
        ).train_and_evaluate(clean_flight_data)

        partition = FoldPartition.from_frame(clean_flight_data, random_state=11)
        expected = CrossValidator(partition).score(DistanceRegression(), clean_flight_data)

        assert results["cv_results"]["distance_regression"].score == pytest.approx(
            expected.score
        )

    def test_missing_outcome_rejected(self, flight_data):
        """Unfiltered data with null outcomes should raise ValueError."""
        with pytest.raises(ValueError):
            ModelTrainer(candidates=[DistanceRegression()]).train_and_evaluate(flight_data)

    def test_duplicate_names_rejected(self):
        """Candidate names must be unique."""
        with pytest.raises(ValueError):
            ModelTrainer(candidates=[DistanceRegression(), DistanceRegression()])


class TestPipeline:
    def test_end_to_end(self, bts_csv_dir, tmp_path):
        """The full run writes tables and figures."""
        output_dir = tmp_path / "report"

        results = run_analysis(
            data_dir=bts_csv_dir,
            output_dir=output_dir,
            candidates=fast_candidates(),
        )

        flights = results["flights"]
        assert flights["ORIGIN"].isin(list(results["airports"])).all()
        assert flights["DEST"].isin(list(results["airports"])).all()
        n_origins = results["filter_stats"]["distinct_origins"]
        assert len(results["airports"]) == min(20, n_origins)

        table = pd.read_csv(output_dir / "model_comparison.csv")
        assert len(table) == 4
        assert (output_dir / "residual_day_of_week.csv").exists()
        assert (output_dir / "model_comparison.png").exists()
        assert (output_dir / "baseline_fit.png").exists()
        assert all(path.exists() for path in results["written"])

    def test_tables_only(self, bts_csv_dir, tmp_path):
        """render=False skips the figures."""
        output_dir = tmp_path / "report"

        run_analysis(
            data_dir=bts_csv_dir,
            output_dir=output_dir,
            candidates=[DistanceRegression(), ScheduledTimeReference()],
            render=False,
        )

        assert (output_dir / "model_comparison.csv").exists()
        assert not list(output_dir.glob("*.png"))
