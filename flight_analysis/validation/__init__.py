from .cross_validation import CrossValidator, CVResult, FoldPartition, squared_correlation

__all__ = [
    "CrossValidator",
    "CVResult",
    "FoldPartition",
    "squared_correlation",
]
