from .residuals import (
    BaselineResidualModel,
    drop_derived_columns,
    residual_summaries,
    summarize_residuals,
)

__all__ = [
    "BaselineResidualModel",
    "drop_derived_columns",
    "residual_summaries",
    "summarize_residuals",
]
