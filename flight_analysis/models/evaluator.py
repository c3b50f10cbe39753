"""
Model Evaluator - Metric Computation Utilities
Computes regression metrics and the model comparison table
"""

import logging
from typing import Dict, List

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from config.data_config import LOG_FORMAT
from config.model_config import MODEL_DISPLAY_NAMES
from flight_analysis.validation.cross_validation import CVResult, squared_correlation

COMPARISON_COLUMNS = [
    "model",
    "description",
    "cv_r_squared",
    "pooled_r_squared",
    "fold_std",
    "cross_validated",
    "n_records",
]


class ModelEvaluator:
    """
    Evaluates elapsed-time predictions and compares candidate models

    The headline score is the squared Pearson correlation between
    predicted and actual elapsed time.
    """

    def __init__(self, log_level: str = "INFO"):
        """
        Initialize evaluator

        Args:
            log_level: Logging level
        """
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)

    def evaluate_regression(self, y_true, y_pred) -> Dict:
        """
        Compute regression metrics

        Args:
            y_true: Actual elapsed times
            y_pred: Predicted elapsed times

        Returns:
            Metrics dict:
            {
                "rmse": float,
                "mae": float,
                "r2": float,
                "r_squared": float (squared correlation)
            }
        """
        y_true = np.asarray(y_true, dtype=float)
        y_pred = np.asarray(y_pred, dtype=float)

        valid = np.isfinite(y_true) & np.isfinite(y_pred)
        if not valid.any():
            raise ValueError("No finite (actual, predicted) pairs to evaluate")

        metrics = {}

        try:
            # Root Mean Squared Error
            mse = mean_squared_error(y_true[valid], y_pred[valid])
            metrics["rmse"] = float(np.sqrt(mse))

            # Mean Absolute Error
            metrics["mae"] = float(mean_absolute_error(y_true[valid], y_pred[valid]))

            # Coefficient of determination
            metrics["r2"] = float(r2_score(y_true[valid], y_pred[valid]))

            # Squared correlation (comparison score)
            metrics["r_squared"] = squared_correlation(y_true, y_pred)

            self.logger.info(
                f"Regression metrics computed: RMSE={metrics['rmse']:.2f}, "
                f"MAE={metrics['mae']:.2f}, r^2={metrics['r_squared']:.4f}"
            )

        except Exception as e:
            self.logger.error(f"Error computing regression metrics: {e}")
            raise

        return metrics

    def compare_models(self, results: List[CVResult]) -> pd.DataFrame:
        """
        Build the model comparison table

        Args:
            results: One CVResult per candidate

        Returns:
            DataFrame sorted by cv_r_squared (best first)
        """
        rows = [
            {
                "model": result.model,
                "description": MODEL_DISPLAY_NAMES.get(result.model, result.model),
                "cv_r_squared": result.score,
                "pooled_r_squared": result.pooled_score,
                "fold_std": result.fold_std,
                "cross_validated": result.cross_validated,
                "n_records": result.n_records,
            }
            for result in results
        ]

        table = pd.DataFrame(rows, columns=COMPARISON_COLUMNS)
        return table.sort_values(
            "cv_r_squared", ascending=False, na_position="last"
        ).reset_index(drop=True)

    def log_results(self, table: pd.DataFrame):
        """
        Log the comparison table in readable format

        Args:
            table: Output of compare_models
        """
        self.logger.info("\nMODEL COMPARISON (squared correlation):")
        for _, row in table.iterrows():
            marker = "" if row["cross_validated"] else "  (full data, no CV)"
            self.logger.info(
                f"  {row['description']:<30} {row['cv_r_squared']:.4f}{marker}"
            )

        if len(table) > 0:
            best = table.iloc[0]
            self.logger.info(
                f"\n  Best model: {best['description']} (r^2={best['cv_r_squared']:.4f})"
            )
