"""
Candidate Models
Four interchangeable elapsed-time predictors with a uniform contract

Every candidate exposes:
    fit(df) -> self
    predict(df) -> np.ndarray
    name, requires_training

Candidates:
- DistanceRegression: OLS on distance alone
- ScheduledTimeReference: the published scheduled elapsed time, no fitting
- MultiVariableRegression: OLS on all predictors except scheduled time
- BoostedTrees: gradient-boosted regression trees on the same predictors
"""

from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.ensemble import GradientBoostingRegressor
from sklearn.linear_model import LinearRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder

from config.data_config import (
    CATEGORICAL_PREDICTORS,
    DISTANCE_COLUMN,
    NUMERIC_PREDICTORS,
    OUTCOME_COLUMN,
    SCHEDULED_COLUMN,
)
from config.model_config import AVAILABLE_MODELS, get_model_config


def predictor_columns(df: pd.DataFrame) -> Dict[str, List[str]]:
    """
    Predictor columns present in df, split by kind

    Returns:
        {"categorical": [...], "numeric": [...]}
    """
    return {
        "categorical": [c for c in CATEGORICAL_PREDICTORS if c in df.columns],
        "numeric": [c for c in NUMERIC_PREDICTORS if c in df.columns],
    }


class CandidateModel:
    """Base class for elapsed-time predictors"""

    name = "candidate"
    requires_training = True

    def __init__(self):
        self.model = None

    def _check_fitted(self):
        if self.requires_training and self.model is None:
            raise RuntimeError(f"{self.name} must be fitted before predict()")

    def fit(self, df: pd.DataFrame) -> "CandidateModel":
        raise NotImplementedError

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        raise NotImplementedError

    def __repr__(self):
        return f"{self.__class__.__name__}(name={self.name!r})"


class DistanceRegression(CandidateModel):
    """ACTUAL_ELAPSED_TIME ~ DISTANCE"""

    name = "distance_regression"

    def __init__(self, **params):
        super().__init__()
        self.params = params

    def fit(self, df: pd.DataFrame) -> "DistanceRegression":
        model = LinearRegression(**self.params)
        model.fit(df[[DISTANCE_COLUMN]], df[OUTCOME_COLUMN])
        self.model = model
        return self

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        self._check_fitted()
        return self.model.predict(df[[DISTANCE_COLUMN]])


class ScheduledTimeReference(CandidateModel):
    """Carrier-published scheduled elapsed time, passed through unchanged"""

    name = "scheduled_reference"
    requires_training = False

    def fit(self, df: pd.DataFrame) -> "ScheduledTimeReference":
        return self

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        return df[SCHEDULED_COLUMN].to_numpy(dtype=float)


class _FeatureModel(CandidateModel):
    """Shared one-hot + estimator pipeline for the multi-variable candidates"""

    def __init__(self, **params):
        super().__init__()
        self.params = params
        self.feature_columns: List[str] = []

    def _build_estimator(self):
        raise NotImplementedError

    def fit(self, df: pd.DataFrame) -> "_FeatureModel":
        columns = predictor_columns(df)
        if not columns["categorical"] and not columns["numeric"]:
            raise ValueError(f"{self.name}: no predictor columns in data")

        preprocessor = ColumnTransformer(
            [
                (
                    "categorical",
                    OneHotEncoder(handle_unknown="ignore", sparse_output=False),
                    columns["categorical"],
                ),
                ("numeric", "passthrough", columns["numeric"]),
            ]
        )

        self.feature_columns = columns["categorical"] + columns["numeric"]
        model = Pipeline(
            [("preprocess", preprocessor), ("estimator", self._build_estimator())]
        )
        model.fit(self._features(df), df[OUTCOME_COLUMN])
        self.model = model
        return self

    def _features(self, df: pd.DataFrame) -> pd.DataFrame:
        features = df[self.feature_columns].copy()
        # OneHotEncoder wants plain labels, not pandas categoricals
        for column in features.columns:
            if isinstance(features[column].dtype, pd.CategoricalDtype):
                features[column] = features[column].astype(object)
        return features

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        self._check_fitted()
        return self.model.predict(self._features(df))


class MultiVariableRegression(_FeatureModel):
    """OLS on every predictor except the scheduled elapsed time"""

    name = "multivariable_regression"

    def _build_estimator(self):
        return LinearRegression(**self.params)


class BoostedTrees(_FeatureModel):
    """Gradient-boosted regression trees, fixed hyperparameters"""

    name = "boosted_trees"

    def _build_estimator(self):
        return GradientBoostingRegressor(**self.params)


CANDIDATE_CLASSES = {
    "distance_regression": DistanceRegression,
    "scheduled_reference": ScheduledTimeReference,
    "multivariable_regression": MultiVariableRegression,
    "boosted_trees": BoostedTrees,
}


def create_candidate(model_type: str, params: Optional[dict] = None) -> CandidateModel:
    """
    Create candidate instance with configured parameters

    Args:
        model_type: One of AVAILABLE_MODELS
        params: Overrides merged on top of the configured parameters

    Returns:
        Unfitted candidate
    """
    config = get_model_config(model_type)
    merged = {**config["params"], **(params or {})}
    return CANDIDATE_CLASSES[model_type](**merged)


def default_candidates() -> List[CandidateModel]:
    """All four candidates with configured parameters"""
    return [create_candidate(model_type) for model_type in AVAILABLE_MODELS]
