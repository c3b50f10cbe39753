"""
Flight Data Loader

Reads every BTS CSV file in a directory and combines them into one
working dataset.
"""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from config.data_config import (
    COL_MAP,
    DAY_OF_WEEK_COLUMN,
    LOG_FORMAT,
    MONTH_COLUMN,
    RAW_DATA_DIR,
)
from flight_analysis.data.categories import DayOfWeek, Month, to_categorical

ENUM_TYPES = {
    MONTH_COLUMN: Month,
    DAY_OF_WEEK_COLUMN: DayOfWeek,
}


class FlightDataLoader:
    """Loads and combines flight data files from one directory."""

    def __init__(self, data_root: Optional[Path] = None, log_level: str = "INFO"):
        """
        Initialize loader.

        Args:
            data_root: Directory holding the delimited input files
            log_level: Logging level
        """
        if data_root is None:
            data_root = RAW_DATA_DIR

        self.data_root = Path(data_root)

        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)

    def get_available_files(self) -> List[Path]:
        """Get all CSV files in the data directory, sorted by name."""
        if not self.data_root.exists():
            raise FileNotFoundError(f"Data directory not found: {self.data_root}")

        # Exclude readme files shipped with BTS downloads
        return sorted(
            f for f in self.data_root.glob("*.csv") if "readme" not in f.name.lower()
        )

    def load_file(self, filepath: Path) -> pd.DataFrame:
        """
        Load one file and rename raw BTS headers to the internal schema.

        Args:
            filepath: CSV file path

        Returns:
            DataFrame with internal column names
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        df = pd.read_csv(filepath, low_memory=False)
        return df.rename(columns=COL_MAP)

    def load_all(self, files: Optional[List[Path]] = None) -> pd.DataFrame:
        """
        Load and concatenate files. Records are not deduplicated.

        Args:
            files: Files to load. If None, loads all available files

        Returns:
            Concatenated DataFrame
        """
        if files is None:
            files = self.get_available_files()

        if not files:
            raise ValueError(f"No data files found in {self.data_root}")

        data_frames = []
        total_rows = 0

        for csv_file in files:
            df = self.load_file(csv_file)
            data_frames.append(df)
            total_rows += len(df)
            self.logger.info(f"Loaded {Path(csv_file).name}: {len(df):,} rows")

        combined_df = pd.concat(data_frames, ignore_index=True)

        self.logger.info(
            f"Loaded {len(data_frames)} files, {total_rows:,} total rows"
        )

        return combined_df


def normalize_categoricals(df: pd.DataFrame) -> pd.DataFrame:
    """
    Convert integer-coded month and weekday columns to enumerated categoricals

    Args:
        df: Raw flight DataFrame

    Returns:
        Copy of df with MONTH and DAY_OF_WEEK as fixed-label categoricals
    """
    df = df.copy()

    for column, enum_cls in ENUM_TYPES.items():
        if column in df.columns:
            df[column] = to_categorical(df[column], enum_cls)

    return df


def load_flights(data_root: Optional[Path] = None) -> pd.DataFrame:
    """
    Convenience function: load every file in data_root and normalize it

    Args:
        data_root: Directory of delimited input files

    Returns:
        Working dataset
    """
    loader = FlightDataLoader(data_root)
    return normalize_categoricals(loader.load_all())
