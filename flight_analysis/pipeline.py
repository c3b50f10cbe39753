"""
Elapsed-Time Analysis Pipeline

Load -> filter -> explore -> fit -> evaluate, executed once top to bottom.
Writes the comparison table, residual summaries and figures to an output
directory.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from config.data_config import (
    LOG_FORMAT,
    RAW_DATA_DIR,
    REPORTS_DIR,
    RESIDUAL_TABLE_TEMPLATE,
    RESULTS_TABLE_FILENAME,
    TOP_N_AIRPORTS,
)
from config.model_config import CV_CONFIG
from flight_analysis.data.flight_filter import FlightFilter
from flight_analysis.data.flight_loader import FlightDataLoader, normalize_categoricals
from flight_analysis.features.residuals import (
    BaselineResidualModel,
    residual_summaries,
)
from flight_analysis.models.candidates import CandidateModel
from flight_analysis.models.trainer import ModelTrainer
from flight_analysis.reporting.plots import render_figures

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

if not logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)


def run_analysis(
    data_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    top_n: int = TOP_N_AIRPORTS,
    n_splits: int = CV_CONFIG["n_splits"],
    random_state: int = CV_CONFIG["random_state"],
    candidates: Optional[List[CandidateModel]] = None,
    render: bool = True,
) -> Dict:
    """
    Run the complete analysis

    Args:
        data_dir: Directory of delimited flight files (default: data/raw)
        output_dir: Report directory (default: reports/)
        top_n: Number of busiest origin airports to keep
        n_splits: Cross-validation folds
        random_state: Seed for the fold assignment
        candidates: Candidate models (default: all four from config)
        render: Write figures in addition to the tables

    Returns:
        Dict with the filtered data, airport set, residual summaries,
        comparison table and paths of written files
    """
    data_dir = Path(data_dir) if data_dir is not None else RAW_DATA_DIR
    output_dir = Path(output_dir) if output_dir is not None else REPORTS_DIR

    # 1. Ingestion & normalization
    logger.info("[1/5] Loading flight files...")
    raw = normalize_categoricals(FlightDataLoader(data_dir).load_all())

    # 2. Filtering
    logger.info("[2/5] Filtering...")
    flight_filter = FlightFilter(top_n=top_n)
    flights, airports = flight_filter.full_pipeline(raw)

    if flights.empty:
        raise ValueError("No flights left after filtering; nothing to analyze")

    # 3. Residual exploration
    logger.info("[3/5] Fitting baseline and computing residuals...")
    baseline = BaselineResidualModel().fit(flights)
    flights_resid = baseline.add_residuals(flights)
    summaries = residual_summaries(flights_resid)

    # 4. Candidate models
    logger.info("[4/5] Cross-validating candidate models...")
    trainer = ModelTrainer(
        candidates=candidates, n_splits=n_splits, random_state=random_state
    )
    results = trainer.train_and_evaluate(flights_resid)
    comparison = results["comparison"]

    # 5. Report
    logger.info(f"[5/5] Writing report to {output_dir}...")
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    table_path = output_dir / RESULTS_TABLE_FILENAME
    comparison.to_csv(table_path, index=False)
    written.append(table_path)

    for axis_name, summary in summaries.items():
        summary_path = output_dir / RESIDUAL_TABLE_TEMPLATE.format(axis=axis_name.lower())
        summary.to_csv(summary_path)
        written.append(summary_path)

    if render:
        written.extend(render_figures(flights_resid, summaries, comparison, output_dir))

    return {
        "flights": flights,
        "airports": airports,
        "filter_stats": flight_filter.get_statistics(),
        "baseline": baseline,
        "residual_summaries": summaries,
        "comparison": comparison,
        "cv_results": results["cv_results"],
        "partition": results["partition"],
        "written": written,
    }
