from .plots import (
    plot_baseline_fit,
    plot_model_comparison,
    plot_residual_summary,
    render_figures,
)

__all__ = [
    "plot_baseline_fit",
    "plot_model_comparison",
    "plot_residual_summary",
    "render_figures",
]
