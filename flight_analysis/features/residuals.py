"""
Baseline Residual Model
Fits elapsed time against distance and exposes per-flight residuals

The residuals drive exploratory aggregations only (by weekday, departure
time block, month, origin, destination and carrier). They never feed the
candidate models, and drop_derived_columns() removes them before training.
"""

import logging
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression

from config.data_config import (
    DERIVED_COLUMNS,
    DISTANCE_COLUMN,
    LOG_FORMAT,
    OUTCOME_COLUMN,
    PREDICTED_COLUMN,
    RESIDUAL_COLUMN,
    RESIDUAL_GROUP_COLUMNS,
)


class BaselineResidualModel:
    """
    Ordinary least squares: ACTUAL_ELAPSED_TIME ~ DISTANCE

    Usage:
        baseline = BaselineResidualModel().fit(df)
        df_resid = baseline.add_residuals(df)
    """

    def __init__(self, log_level: str = "INFO"):
        self.model: Optional[LinearRegression] = None

        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)

    @property
    def intercept_(self) -> float:
        self._check_fitted()
        return float(self.model.intercept_)

    @property
    def slope_(self) -> float:
        self._check_fitted()
        return float(self.model.coef_[0])

    def _check_fitted(self):
        if self.model is None:
            raise RuntimeError("BaselineResidualModel must be fitted before use")

    def fit(self, df: pd.DataFrame) -> "BaselineResidualModel":
        """
        Fit the baseline regression

        Args:
            df: Filtered DataFrame with DISTANCE and ACTUAL_ELAPSED_TIME

        Returns:
            self
        """
        model = LinearRegression()
        model.fit(df[[DISTANCE_COLUMN]], df[OUTCOME_COLUMN])
        self.model = model

        self.logger.info(
            f"Baseline fit on {len(df):,} flights: "
            f"elapsed = {self.intercept_:.2f} + {self.slope_:.4f} * distance"
        )

        return self

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        """Predicted elapsed time per flight"""
        self._check_fitted()
        return self.model.predict(df[[DISTANCE_COLUMN]])

    def add_residuals(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Annotate flights with baseline prediction and residual

        Args:
            df: Filtered DataFrame

        Returns:
            Copy of df with PREDICTED_ELAPSED_TIME and RESIDUAL
            (actual minus predicted)
        """
        df = df.copy()
        df[PREDICTED_COLUMN] = self.predict(df)
        df[RESIDUAL_COLUMN] = df[OUTCOME_COLUMN] - df[PREDICTED_COLUMN]

        self.logger.info(
            f"Residuals: mean={df[RESIDUAL_COLUMN].mean():.2f}, "
            f"std={df[RESIDUAL_COLUMN].std():.2f} minutes"
        )

        return df


def summarize_residuals(df: pd.DataFrame, by: str) -> pd.DataFrame:
    """
    Aggregate residuals along one exploration axis

    Args:
        df: DataFrame with a RESIDUAL column
        by: Grouping column

    Returns:
        DataFrame indexed by group with flights, mean_residual and
        median_residual. Categorical axes keep their category order;
        other axes are sorted by mean residual, largest first.
    """
    if RESIDUAL_COLUMN not in df.columns:
        raise ValueError(
            f"{RESIDUAL_COLUMN} column missing; run BaselineResidualModel.add_residuals first"
        )

    is_categorical = isinstance(df[by].dtype, pd.CategoricalDtype)

    summary = df.groupby(by, observed=True)[RESIDUAL_COLUMN].agg(
        flights="count", mean_residual="mean", median_residual="median"
    )

    if not is_categorical:
        summary = summary.sort_values("mean_residual", ascending=False)

    return summary


def residual_summaries(
    df: pd.DataFrame, group_columns: Optional[List[str]] = None
) -> Dict[str, pd.DataFrame]:
    """Residual summary for every exploration axis present in df"""
    if group_columns is None:
        group_columns = RESIDUAL_GROUP_COLUMNS

    return {
        column: summarize_residuals(df, column)
        for column in group_columns
        if column in df.columns
    }


def drop_derived_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Remove residual annotations before model training"""
    return df.drop(columns=[c for c in DERIVED_COLUMNS if c in df.columns])
