"""
Flight Filtering Module
Narrows the working dataset to completed flights between the busiest airports

Steps:
- Removal of flights with no actual elapsed time (cancelled or diverted)
- Selection of the N most frequent origin airports
- Restriction to flights whose origin AND destination are in that set

The selected airport set is returned as an immutable TopAirports value and
is passed explicitly to every later stage. It is never recomputed.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Tuple

import numpy as np
import pandas as pd

from config.data_config import (
    DEST_COLUMN,
    LOG_FORMAT,
    ORIGIN_COLUMN,
    OUTCOME_COLUMN,
    TOP_N_AIRPORTS,
)


@dataclass(frozen=True)
class TopAirports:
    """
    Frozen set of the most frequent origin airport codes

    Attributes:
        codes: Selected codes, most frequent first
        n: Number of airports requested (fewer are selected when the data
           holds fewer distinct origins)
    """

    codes: Tuple[str, ...]
    n: int = TOP_N_AIRPORTS

    def __contains__(self, code: object) -> bool:
        return code in self.codes

    def __iter__(self) -> Iterator[str]:
        return iter(self.codes)

    def __len__(self) -> int:
        return len(self.codes)

    def as_set(self) -> frozenset:
        return frozenset(self.codes)


class FlightFilter:
    """
    Filtering pipeline for the elapsed-time analysis

    Output invariant: every record has a non-null ACTUAL_ELAPSED_TIME and both
    ORIGIN and DEST belong to the TopAirports set computed from the
    null-filtered data.
    """

    def __init__(self, top_n: int = TOP_N_AIRPORTS, log_level: str = "INFO"):
        """
        Initialize flight filter

        Args:
            top_n: Number of busiest origin airports to keep (default: 20)
            log_level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        """
        if top_n < 1:
            raise ValueError(f"top_n must be a positive integer, got {top_n}")

        self.top_n = top_n

        # Setup logging
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)

        # Track filtering statistics
        self.stats = {
            "original_records": 0,
            "missing_outcome_removed": 0,
            "distinct_origins": 0,
            "airports_selected": 0,
            "outside_top_airports_removed": 0,
            "final_records": 0,
        }

    def drop_missing_outcome(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Remove flights with no actual elapsed time

        A null outcome marks a cancelled or diverted flight.

        Args:
            df: Input DataFrame

        Returns:
            DataFrame with null outcomes removed
        """
        initial_count = len(df)

        df_clean = df.dropna(subset=[OUTCOME_COLUMN]).copy()

        self.stats["missing_outcome_removed"] = initial_count - len(df_clean)
        self.logger.info(
            f"Dropped {self.stats['missing_outcome_removed']:,} rows with missing "
            f"{OUTCOME_COLUMN}"
        )

        return df_clean

    def compute_top_origins(self, df: pd.DataFrame) -> TopAirports:
        """
        Select the most frequent origin airports

        Ranking is by descending flight count; ties go to the airport that
        appears first in the input.

        Args:
            df: Null-filtered DataFrame

        Returns:
            TopAirports with min(top_n, distinct origins) codes
        """
        origins = df[ORIGIN_COLUMN]

        summary = (
            pd.DataFrame({"code": origins.values, "position": np.arange(len(origins))})
            .dropna(subset=["code"])
            .groupby("code", sort=False)
            .agg(count=("position", "size"), first_seen=("position", "min"))
            .sort_values(["count", "first_seen"], ascending=[False, True])
        )

        self.stats["distinct_origins"] = len(summary)

        if len(summary) < self.top_n:
            self.logger.info(
                f"Only {len(summary)} distinct origins, keeping all of them"
            )

        codes = tuple(str(code) for code in summary.index[: self.top_n])
        self.stats["airports_selected"] = len(codes)

        self.logger.info(f"Top {len(codes)} origin airports: {', '.join(codes)}")

        return TopAirports(codes=codes, n=self.top_n)

    def restrict_to_airports(
        self, df: pd.DataFrame, airports: TopAirports
    ) -> pd.DataFrame:
        """
        Keep flights whose origin and destination are both selected airports

        Args:
            df: Input DataFrame
            airports: Frozen airport set from compute_top_origins

        Returns:
            Restricted DataFrame
        """
        initial_count = len(df)
        selected = list(airports)

        mask = df[ORIGIN_COLUMN].isin(selected) & df[DEST_COLUMN].isin(selected)
        df_clean = df[mask].copy()

        self.stats["outside_top_airports_removed"] = initial_count - len(df_clean)
        self.logger.info(
            f"Removed {self.stats['outside_top_airports_removed']:,} flights outside "
            f"the top {len(airports)} airports"
        )

        return df_clean

    def full_pipeline(self, df: pd.DataFrame) -> Tuple[pd.DataFrame, TopAirports]:
        """
        Execute the complete filtering pipeline

        Pipeline steps:
        1. Drop flights with missing outcome
        2. Compute the top origin airports (once)
        3. Restrict to flights between those airports

        Args:
            df: Working dataset from the loader

        Returns:
            (filtered DataFrame with a fresh RangeIndex, TopAirports)
        """
        self.stats["original_records"] = len(df)
        self.logger.info("=" * 60)
        self.logger.info("STARTING FILTERING PIPELINE")
        self.logger.info("=" * 60)
        self.logger.info(f"Input records: {len(df):,}")

        self.logger.info("[1/3] Dropping flights with missing outcome...")
        df = self.drop_missing_outcome(df)

        self.logger.info("[2/3] Computing top origin airports...")
        airports = self.compute_top_origins(df)

        self.logger.info("[3/3] Restricting to top airport pairs...")
        df = self.restrict_to_airports(df, airports).reset_index(drop=True)

        self.stats["final_records"] = len(df)

        if self.stats["original_records"] > 0:
            retention_rate = (
                self.stats["final_records"] / self.stats["original_records"]
            ) * 100
        else:
            retention_rate = 0.0

        self.logger.info("=" * 60)
        self.logger.info("FILTERING PIPELINE COMPLETE")
        self.logger.info("=" * 60)
        self.logger.info(f"Original records:      {self.stats['original_records']:,}")
        self.logger.info(
            f"Missing outcome:       {self.stats['missing_outcome_removed']:,}"
        )
        self.logger.info(
            f"Outside top airports:  {self.stats['outside_top_airports_removed']:,}"
        )
        self.logger.info(f"Final records:         {self.stats['final_records']:,}")
        self.logger.info(f"Data retention rate:   {retention_rate:.1f}%")

        return df, airports

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get filtering statistics from last pipeline run

        Returns:
            Dictionary with filtering metrics
        """
        return self.stats.copy()


def filter_flights(
    df: pd.DataFrame, top_n: int = TOP_N_AIRPORTS
) -> Tuple[pd.DataFrame, TopAirports]:
    """Quick filtering with default settings"""
    return FlightFilter(top_n=top_n).full_pipeline(df)
