"""
Hoax Detector - Source Package

This package contains the modules for training a hoax / news category classifier:
- config: Configuration and hyperparameters
- schema: Input row schema and prediction result shapes
- data_io: Data loading and splitting
- labels: Label survey and label adaptation
- preprocess: Title + narrative text assembly
- features: Feature extraction (word and char TF-IDF)
- pipeline: Binary and multiclass pipelines
- evaluate: Model evaluation
- persistence: Model save/load
- train: Training workflow and CLI
- utils: Utility functions
"""

__version__ = "1.0.0"

# Lazy imports - modules are imported when accessed
__all__ = [
    "config",
    "schema",
    "data_io",
    "labels",
    "preprocess",
    "features",
    "pipeline",
    "evaluate",
    "persistence",
    "train",
    "utils",
]
