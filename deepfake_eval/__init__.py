# deepfake_eval/__init__.py
"""
Threshold selection and evaluation aggregation for deep-fake image classifiers.

Subpackages:
- evaluation: PredictionSet, metrics, Youden threshold selection, summary table
- data: prediction/metric artifact I/O
- plotting: ROC overlays and confusion matrices
- utils: logging, YAML config, repo paths
"""

from .evaluation import (
    PredictionSet,
    MetricReport,
    SummaryTable,
    ThresholdResult,
    EmptyInputError,
    InvalidInputError,
    InsufficientDataError,
    select_threshold,
    evaluate,
    build_summary,
)

__version__ = "0.1.0"

__all__ = [
    "PredictionSet",
    "MetricReport",
    "SummaryTable",
    "ThresholdResult",
    "EmptyInputError",
    "InvalidInputError",
    "InsufficientDataError",
    "select_threshold",
    "evaluate",
    "build_summary",
]
