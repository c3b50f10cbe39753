"""
Flight Elapsed-Time Analysis Configuration Package

This package contains all configuration modules for the analysis:
- data_config.py: Data paths, schema, filtering and report parameters
- model_config.py: Candidate model hyperparameters and cross-validation settings
"""

__version__ = "1.0.0"
