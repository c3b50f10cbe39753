"""
Flight Elapsed-Time Analysis Package

Contains all source modules for the analysis:
- data/: Loading, categorical normalization and filtering
- features/: Baseline regression and residual exploration
- models/: Candidate models, evaluation and training
- validation/: Shared k-fold partition and cross-validated scoring
- reporting/: Report figures
"""

__version__ = "1.0.0"
