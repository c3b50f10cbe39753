"""
Report figures for the elapsed-time analysis.

Creates plots for:
- Baseline fit (elapsed time vs distance)
- Residual means along each exploration axis
- Model comparison (squared correlation per candidate)
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from config.data_config import (
    DISTANCE_COLUMN,
    FIGURE_DPI,
    OUTCOME_COLUMN,
    PREDICTED_COLUMN,
)

logger = logging.getLogger(__name__)

# Set style
sns.set_theme(style="darkgrid")
plt.rcParams["figure.figsize"] = (12, 8)
plt.rcParams["font.size"] = 10

# Scatter plots are drawn from a sample above this size
MAX_SCATTER_POINTS = 20_000


def _save(fig, save_path: Optional[Path]) -> Optional[Path]:
    plt.tight_layout()

    if save_path:
        save_path = Path(save_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, dpi=FIGURE_DPI)
        logger.info(f"Saved plot to {save_path}")

    plt.close(fig)
    return save_path


def plot_baseline_fit(
    df: pd.DataFrame,
    save_path: Optional[Path] = None,
    title: str = "Elapsed Time vs Distance",
) -> Optional[Path]:
    """
    Scatter of actual elapsed time against distance with the baseline line.

    Args:
        df: Residual-annotated flights
        save_path: Optional path to save the plot
        title: Plot title
    """
    if df.empty:
        logger.warning("Empty DataFrame, skipping plot")
        return None

    sample = df
    if len(df) > MAX_SCATTER_POINTS:
        sample = df.sample(MAX_SCATTER_POINTS, random_state=0)

    fig, ax = plt.subplots(figsize=(12, 8))
    ax.scatter(sample[DISTANCE_COLUMN], sample[OUTCOME_COLUMN], alpha=0.2, s=5)

    if PREDICTED_COLUMN in df.columns:
        line = df[[DISTANCE_COLUMN, PREDICTED_COLUMN]].sort_values(DISTANCE_COLUMN)
        ax.plot(line[DISTANCE_COLUMN], line[PREDICTED_COLUMN], color="red", linewidth=2)

    ax.set_xlabel("Distance (miles)")
    ax.set_ylabel("Actual elapsed time (minutes)")
    ax.set_title(title)

    return _save(fig, save_path)


def plot_residual_summary(
    summary: pd.DataFrame,
    axis_name: str,
    save_path: Optional[Path] = None,
) -> Optional[Path]:
    """
    Bar chart of mean residual per group.

    Args:
        summary: Output of summarize_residuals
        axis_name: Grouping column name (used in labels)
        save_path: Optional path to save the plot
    """
    if summary.empty:
        logger.warning(f"No residual summary for {axis_name}, skipping plot")
        return None

    fig, ax = plt.subplots(figsize=(12, 6))
    labels = [str(label) for label in summary.index]
    ax.bar(labels, summary["mean_residual"])
    ax.axhline(0, color="black", linewidth=0.8)

    ax.set_xlabel(axis_name)
    ax.set_ylabel("Mean residual (minutes)")
    ax.set_title(f"Residual by {axis_name}")
    if len(labels) > 8:
        ax.tick_params(axis="x", rotation=90)

    return _save(fig, save_path)


def plot_model_comparison(
    comparison: pd.DataFrame,
    save_path: Optional[Path] = None,
    title: str = "Cross-Validated Squared Correlation",
) -> Optional[Path]:
    """
    Horizontal bar chart of each candidate's score.

    Args:
        comparison: Output of ModelEvaluator.compare_models
        save_path: Optional path to save the plot
        title: Plot title
    """
    if comparison.empty:
        logger.warning("Empty comparison table, skipping plot")
        return None

    fig, ax = plt.subplots(figsize=(10, 5))
    sns.barplot(data=comparison, x="cv_r_squared", y="description", ax=ax)

    ax.set_xlim(0, 1)
    ax.set_xlabel("r^2 (predicted vs actual)")
    ax.set_ylabel("")
    ax.set_title(title)

    return _save(fig, save_path)


def render_figures(
    df: pd.DataFrame,
    summaries: Dict[str, pd.DataFrame],
    comparison: pd.DataFrame,
    output_dir: Path,
) -> List[Path]:
    """Write every report figure to output_dir and return the saved paths"""
    output_dir = Path(output_dir)
    saved = [plot_baseline_fit(df, output_dir / "baseline_fit.png")]

    for axis_name, summary in summaries.items():
        saved.append(
            plot_residual_summary(
                summary, axis_name, output_dir / f"residual_{axis_name.lower()}.png"
            )
        )

    saved.append(plot_model_comparison(comparison, output_dir / "model_comparison.png"))

    return [path for path in saved if path is not None]
