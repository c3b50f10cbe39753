"""
Data Configuration Module
Centralizes all data-related parameters for the flight elapsed-time analysis
"""

from pathlib import Path

# ============================================================================
# PROJECT ROOT & PATHS
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"

# Data subdirectories
RAW_DATA_DIR = DATA_DIR / "raw"  # BTS CSV files go here

# Rendered report (figures + tables)
REPORTS_DIR = PROJECT_ROOT / "reports"

# Logs
LOGS_DIR = PROJECT_ROOT / "logs"

# ============================================================================
# BTS SCHEMA
# ============================================================================

# Column renaming map (BTS camelCase -> internal UPPERCASE)
COL_MAP = {
    "Origin": "ORIGIN",
    "Dest": "DEST",
    "Reporting_Airline": "OP_CARRIER",
    "Distance": "DISTANCE",
    "CRSElapsedTime": "CRS_ELAPSED_TIME",
    "ActualElapsedTime": "ACTUAL_ELAPSED_TIME",
    "DepTimeBlk": "DEP_TIME_BLK",
    "Year": "YEAR",
    "Month": "MONTH",
    "DayOfWeek": "DAY_OF_WEEK",
}

# Internal schema (one FlightRecord per row)
FLIGHT_COLUMNS = list(COL_MAP.values())

ORIGIN_COLUMN = "ORIGIN"
DEST_COLUMN = "DEST"
CARRIER_COLUMN = "OP_CARRIER"
DISTANCE_COLUMN = "DISTANCE"
DEP_TIME_BLOCK_COLUMN = "DEP_TIME_BLK"
YEAR_COLUMN = "YEAR"
MONTH_COLUMN = "MONTH"
DAY_OF_WEEK_COLUMN = "DAY_OF_WEEK"

# Outcome (TARGET) and the published schedule estimate
OUTCOME_COLUMN = "ACTUAL_ELAPSED_TIME"
SCHEDULED_COLUMN = "CRS_ELAPSED_TIME"

# Derived columns (exploration only, dropped before training)
PREDICTED_COLUMN = "PREDICTED_ELAPSED_TIME"
RESIDUAL_COLUMN = "RESIDUAL"
DERIVED_COLUMNS = [PREDICTED_COLUMN, RESIDUAL_COLUMN]

# Integer-coded columns converted to enumerated categoricals on load
ENUM_COLUMNS = [MONTH_COLUMN, DAY_OF_WEEK_COLUMN]

# Predictors for the multi-variable models (scheduled time excluded)
CATEGORICAL_PREDICTORS = [
    ORIGIN_COLUMN,
    DEST_COLUMN,
    CARRIER_COLUMN,
    DEP_TIME_BLOCK_COLUMN,
    MONTH_COLUMN,
    DAY_OF_WEEK_COLUMN,
]
NUMERIC_PREDICTORS = [DISTANCE_COLUMN, YEAR_COLUMN]

# ============================================================================
# FILTERING PARAMETERS
# ============================================================================

# Keep only flights between the N busiest origin airports
TOP_N_AIRPORTS = 20

# ============================================================================
# EXPLORATION PARAMETERS
# ============================================================================

# Residuals are aggregated along each of these axes
RESIDUAL_GROUP_COLUMNS = [
    DAY_OF_WEEK_COLUMN,
    DEP_TIME_BLOCK_COLUMN,
    MONTH_COLUMN,
    ORIGIN_COLUMN,
    DEST_COLUMN,
    CARRIER_COLUMN,
]

# ============================================================================
# REPORT OUTPUT
# ============================================================================

RESULTS_TABLE_FILENAME = "model_comparison.csv"
RESIDUAL_TABLE_TEMPLATE = "residual_{axis}.csv"
FIGURE_DPI = 150

# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = LOGS_DIR / "analysis.log"

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def ensure_directories():
    """
    Create all necessary directories if they don't exist
    """
    directories = [
        RAW_DATA_DIR,
        REPORTS_DIR,
        LOGS_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)
