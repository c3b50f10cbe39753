"""
Models Package
Provides candidate models, evaluation and the training pipeline
"""

from .candidates import (
    BoostedTrees,
    CandidateModel,
    DistanceRegression,
    MultiVariableRegression,
    ScheduledTimeReference,
    create_candidate,
    default_candidates,
)
from .evaluator import ModelEvaluator
from .trainer import ModelTrainer, compare_candidates

__all__ = [
    # Candidates
    "CandidateModel",
    "DistanceRegression",
    "ScheduledTimeReference",
    "MultiVariableRegression",
    "BoostedTrees",
    "create_candidate",
    "default_candidates",
    # Evaluation
    "ModelEvaluator",
    # Training
    "ModelTrainer",
    "compare_candidates",
]
