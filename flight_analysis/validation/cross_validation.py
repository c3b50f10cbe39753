"""
Cross-Validated Evaluation Module

Estimates out-of-sample explanatory power (squared Pearson correlation
between predicted and actual elapsed time) for each candidate model.

One FoldPartition is built per analysis run and reused for every
candidate, so all models are compared on identical folds. Fold
membership is decided on a content-sorted ordering of the rows, which
makes the partition (and the scores) independent of input row order.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

import numpy as np
import pandas as pd
from scipy import stats
from sklearn.model_selection import KFold

from config.data_config import LOG_FORMAT, OUTCOME_COLUMN
from config.model_config import CV_CONFIG


def squared_correlation(actual, predicted) -> float:
    """
    Squared Pearson correlation between actual and predicted values

    Pairs with a missing value on either side are ignored.

    Returns:
        r^2 in [0, 1], or nan when fewer than two pairs remain or either
        side is constant
    """
    actual = np.asarray(actual, dtype=float)
    predicted = np.asarray(predicted, dtype=float)

    if actual.shape != predicted.shape:
        raise ValueError(
            f"Shape mismatch: actual {actual.shape} vs predicted {predicted.shape}"
        )

    valid = np.isfinite(actual) & np.isfinite(predicted)
    actual, predicted = actual[valid], predicted[valid]

    if len(actual) < 2 or np.ptp(actual) == 0 or np.ptp(predicted) == 0:
        return float("nan")

    r, _ = stats.pearsonr(actual, predicted)
    return float(r**2)


@dataclass(frozen=True, eq=False)
class FoldPartition:
    """
    Fixed k-fold assignment of dataset rows

    Attributes:
        folds: Fold id (0..n_splits-1) per dataset index label
        order: Index labels in canonical (content-sorted) order
        n_splits: Number of folds
        random_state: Seed used for the assignment
    """

    folds: pd.Series
    order: pd.Index
    n_splits: int
    random_state: int

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        n_splits: int = CV_CONFIG["n_splits"],
        random_state: int = CV_CONFIG["random_state"],
    ) -> "FoldPartition":
        """
        Build a seeded partition of df's rows

        Args:
            df: Dataset to partition (unique index required)
            n_splits: Number of folds (default: 5)
            random_state: Seed for the shuffled assignment

        Returns:
            FoldPartition
        """
        if n_splits < 2:
            raise ValueError(f"n_splits must be at least 2, got {n_splits}")
        if n_splits > len(df):
            raise ValueError(
                f"Cannot split {len(df)} rows into {n_splits} folds"
            )
        if not df.index.is_unique:
            raise ValueError("Dataset index must be unique to build a partition")

        # Canonical order: identical content -> identical position
        canonical = df.sort_values(by=list(df.columns), kind="mergesort")
        order = canonical.index

        fold_ids = np.empty(len(order), dtype=int)
        kfold = KFold(n_splits=n_splits, shuffle=True, random_state=random_state)
        for fold, (_, test_positions) in enumerate(kfold.split(np.arange(len(order)))):
            fold_ids[test_positions] = fold

        folds = pd.Series(fold_ids, index=order, name="fold")

        return cls(
            folds=folds, order=order, n_splits=n_splits, random_state=random_state
        )

    def fold_sizes(self) -> List[int]:
        counts = self.folds.value_counts()
        return [int(counts.get(fold, 0)) for fold in range(self.n_splits)]

    def splits(self, df: pd.DataFrame) -> Iterator[Tuple[pd.Index, pd.Index]]:
        """
        Yield (train_labels, test_labels) per fold, both in canonical order

        Raises:
            ValueError: If df is not the dataset this partition was built on
        """
        if len(df.index) != len(self.order) or not df.index.isin(self.order).all():
            raise ValueError("Partition does not match the dataset index")

        fold_of = self.folds.to_numpy()
        for fold in range(self.n_splits):
            yield self.order[fold_of != fold], self.order[fold_of == fold]


@dataclass
class CVResult:
    """Cross-validation outcome for one candidate"""

    model: str
    score: float
    pooled_score: float
    fold_scores: List[float] = field(default_factory=list)
    cross_validated: bool = True
    n_records: int = 0

    @property
    def fold_std(self) -> float:
        if len(self.fold_scores) < 2:
            return float("nan")
        return float(np.nanstd(self.fold_scores))


class CrossValidator:
    """
    Scores candidates on a shared FoldPartition

    Usage:
        partition = FoldPartition.from_frame(df, n_splits=5, random_state=42)
        validator = CrossValidator(partition)
        result = validator.score(candidate, df)
    """

    def __init__(self, partition: FoldPartition, log_level: str = "INFO"):
        self.partition = partition

        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)

    def score(self, candidate, df: pd.DataFrame) -> CVResult:
        """
        Estimate squared correlation for one candidate

        Trained candidates: for each fold, fit on the other k-1 folds,
        predict the held-out fold and compute r^2 there. The result holds
        the per-fold scores, their mean, and r^2 of the pooled
        out-of-fold predictions.

        Candidates without a training step are scored once on the full
        dataset.

        Args:
            candidate: Object with fit/predict, name, requires_training
            df: Filtered dataset the partition was built on

        Returns:
            CVResult
        """
        if not candidate.requires_training:
            r2 = squared_correlation(df[OUTCOME_COLUMN], candidate.predict(df))
            self.logger.info(f"{candidate.name}: r^2={r2:.4f} (full data, no CV)")
            return CVResult(
                model=candidate.name,
                score=r2,
                pooled_score=r2,
                cross_validated=False,
                n_records=len(df),
            )

        fold_scores = []
        pooled = pd.Series(np.nan, index=df.index, dtype=float)

        for fold, (train_labels, test_labels) in enumerate(self.partition.splits(df)):
            train_df = df.loc[train_labels]
            test_df = df.loc[test_labels]

            try:
                candidate.fit(train_df)
            except Exception as e:
                self.logger.error(f"{candidate.name}: fold {fold + 1} training failed: {e}")
                raise

            predicted = candidate.predict(test_df)
            pooled.loc[test_labels] = predicted

            fold_r2 = squared_correlation(test_df[OUTCOME_COLUMN], predicted)
            fold_scores.append(fold_r2)
            self.logger.debug(
                f"{candidate.name}: fold {fold + 1}/{self.partition.n_splits} "
                f"r^2={fold_r2:.4f} ({len(test_df):,} held out)"
            )

        valid_scores = [s for s in fold_scores if not np.isnan(s)]
        mean_score = float(np.mean(valid_scores)) if valid_scores else float("nan")
        pooled_score = squared_correlation(df[OUTCOME_COLUMN], pooled)

        self.logger.info(
            f"{candidate.name}: cv r^2={mean_score:.4f}, pooled r^2={pooled_score:.4f}"
        )

        return CVResult(
            model=candidate.name,
            score=mean_score,
            pooled_score=pooled_score,
            fold_scores=fold_scores,
            cross_validated=True,
            n_records=len(df),
        )
