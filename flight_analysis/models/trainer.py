"""
Model Trainer - Unified Training Pipeline
Scores every candidate model on one shared cross-validation partition
"""

import logging
import time
from typing import Dict, List, Optional

import pandas as pd

from config.data_config import LOG_FORMAT, OUTCOME_COLUMN
from config.model_config import CV_CONFIG
from flight_analysis.features.residuals import drop_derived_columns
from flight_analysis.models.candidates import CandidateModel, default_candidates
from flight_analysis.models.evaluator import ModelEvaluator
from flight_analysis.validation.cross_validation import (
    CrossValidator,
    FoldPartition,
)


class ModelTrainer:
    """
    Unified trainer for the candidate elapsed-time models

    Features:
    - Removal of exploration-only residual columns before training
    - One seeded FoldPartition shared by all candidates
    - Cross-validated squared correlation per candidate
    - In-sample RMSE/MAE from a refit on the full dataset

    Usage:
        trainer = ModelTrainer(n_splits=5)
        results = trainer.train_and_evaluate(df)
    """

    def __init__(
        self,
        candidates: Optional[List[CandidateModel]] = None,
        n_splits: int = CV_CONFIG["n_splits"],
        random_state: int = CV_CONFIG["random_state"],
        in_sample_metrics: bool = True,
        log_level: str = "INFO",
    ):
        """
        Initialize trainer

        Args:
            candidates: Candidate models (default: all four from config)
            n_splits: Number of cross-validation folds (default: 5)
            random_state: Seed for the fold assignment
            in_sample_metrics: Refit on full data and report RMSE/MAE
            log_level: Logging level
        """
        if candidates is None:
            candidates = default_candidates()

        if not candidates:
            raise ValueError("At least one candidate model is required")

        names = [candidate.name for candidate in candidates]
        if len(set(names)) != len(names):
            raise ValueError(f"Candidate names must be unique, got {names}")

        self.candidates = candidates
        self.n_splits = n_splits
        self.random_state = random_state
        self.in_sample_metrics = in_sample_metrics
        self.log_level = log_level

        # Setup logging
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)

        self.evaluator = ModelEvaluator(log_level=log_level)
        self.partition: Optional[FoldPartition] = None

        self.logger.info(
            f"ModelTrainer initialized: {len(candidates)} candidates, {n_splits} folds"
        )

    def prepare_training_data(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Drop residual annotations and make sure the index is unique

        Args:
            df: Filtered (optionally residual-annotated) dataset

        Returns:
            Training dataset
        """
        df = drop_derived_columns(df)

        if OUTCOME_COLUMN not in df.columns:
            raise ValueError(f"Training data has no {OUTCOME_COLUMN} column")
        if df[OUTCOME_COLUMN].isna().any():
            raise ValueError(
                f"{OUTCOME_COLUMN} has missing values; run FlightFilter first"
            )

        if not df.index.is_unique:
            df = df.reset_index(drop=True)

        return df

    def train_and_evaluate(self, df: pd.DataFrame) -> Dict:
        """
        Complete training and evaluation pipeline

        Args:
            df: Filtered dataset

        Returns:
            {
                "comparison": DataFrame (one row per candidate),
                "cv_results": {name: CVResult},
                "partition": FoldPartition,
                "in_sample": {name: metrics dict}
            }
        """
        self.logger.info("\n" + "=" * 70)
        self.logger.info("MODEL TRAINING PIPELINE")
        self.logger.info("=" * 70)

        df = self.prepare_training_data(df)

        # Step 1: One partition for every candidate
        self.partition = FoldPartition.from_frame(
            df, n_splits=self.n_splits, random_state=self.random_state
        )
        self.logger.info(
            f"Partition: {self.n_splits} folds, sizes {self.partition.fold_sizes()}"
        )

        validator = CrossValidator(self.partition, log_level=self.log_level)

        # Step 2: Cross-validate
        cv_results = {}
        for candidate in self.candidates:
            self.logger.info(f"\nScoring {candidate.name}...")
            start_time = time.time()
            cv_results[candidate.name] = validator.score(candidate, df)
            self.logger.info(
                f"✓ {candidate.name} scored in {time.time() - start_time:.2f} seconds"
            )

        comparison = self.evaluator.compare_models(list(cv_results.values()))

        # Step 3: In-sample error on a full-data refit
        in_sample = {}
        if self.in_sample_metrics:
            for candidate in self.candidates:
                candidate.fit(df)
                in_sample[candidate.name] = self.evaluator.evaluate_regression(
                    df[OUTCOME_COLUMN], candidate.predict(df)
                )

            comparison["rmse"] = comparison["model"].map(
                lambda name: in_sample[name]["rmse"]
            )
            comparison["mae"] = comparison["model"].map(
                lambda name: in_sample[name]["mae"]
            )

        self.evaluator.log_results(comparison)

        self.logger.info("=" * 70)

        return {
            "comparison": comparison,
            "cv_results": cv_results,
            "partition": self.partition,
            "in_sample": in_sample,
        }


def compare_candidates(
    df: pd.DataFrame,
    n_splits: int = CV_CONFIG["n_splits"],
    random_state: int = CV_CONFIG["random_state"],
) -> pd.DataFrame:
    """Quick comparison of the four default candidates"""
    trainer = ModelTrainer(n_splits=n_splits, random_state=random_state)
    return trainer.train_and_evaluate(df)["comparison"]
