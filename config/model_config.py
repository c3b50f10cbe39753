"""
Model Configuration Module
Centralizes candidate-model hyperparameters and cross-validation settings
"""

from typing import Dict, Any

# ============================================================================
# MODEL TYPES
# ============================================================================

AVAILABLE_MODELS = [
    "distance_regression",
    "scheduled_reference",
    "multivariable_regression",
    "boosted_trees",
]

# Display names used in the results table
MODEL_DISPLAY_NAMES = {
    "distance_regression": "Distance-only regression",
    "scheduled_reference": "Scheduled time (reference)",
    "multivariable_regression": "Multi-variable regression",
    "boosted_trees": "Gradient-boosted trees",
}

# ============================================================================
# LINEAR REGRESSION CONFIGURATION
# ============================================================================

LINEAR_REGRESSION_PARAMS = {
    "fit_intercept": True,
}

# ============================================================================
# GRADIENT BOOSTING CONFIGURATION
# ============================================================================

# Fixed, not tuned
GRADIENT_BOOSTING_PARAMS = {
    # Tree count
    "n_estimators": 500,
    # Interaction depth
    "max_depth": 4,
    # Shrinkage
    "learning_rate": 0.05,
    # Squared error loss (gaussian)
    "loss": "squared_error",
    "subsample": 1.0,
    # Reproducibility
    "random_state": 42,
    # Verbosity
    "verbose": 0,
}

# ============================================================================
# CROSS-VALIDATION CONFIGURATION
# ============================================================================

CV_CONFIG = {
    "n_splits": 5,
    "random_state": 42,
}

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def get_model_config(model_type: str) -> Dict[str, Any]:
    """
    Get model configuration based on model type

    Args:
        model_type: One of AVAILABLE_MODELS

    Returns:
        Dictionary with model parameters and display name
    """
    if model_type not in AVAILABLE_MODELS:
        raise ValueError(
            f"Unknown model type: {model_type}. Available: {AVAILABLE_MODELS}"
        )

    if model_type == "boosted_trees":
        params = GRADIENT_BOOSTING_PARAMS
    elif model_type == "scheduled_reference":
        params = {}
    else:
        params = LINEAR_REGRESSION_PARAMS

    return {"params": dict(params), "display_name": MODEL_DISPLAY_NAMES[model_type]}
