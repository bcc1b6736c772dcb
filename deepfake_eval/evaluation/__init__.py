# deepfake_eval/evaluation/__init__.py
"""
Evaluation subpackage for the deep-fake detector comparison.

Contains:
- predictions: PredictionSet (aligned probabilities/labels) and input validation
- confusion: binary confusion counts and their log formatting
- roc: ROC curve and rank-based AUC without sklearn dependency
- metrics: MetricReport and fixed-threshold evaluation
- thresholding: Youden's J threshold selection on a validation split
- summary: ordered summary table across models and stages
"""

from .errors import (
    EvaluationError,
    EmptyInputError,
    InvalidInputError,
    InsufficientDataError,
)
from .predictions import PredictionSet, as_prediction_set, validate_threshold
from .confusion import (
    BinaryConfusion,
    binary_confusion,
    format_confusion,
)
from .roc import roc_curve, roc_auc
from .metrics import MetricReport, metrics_from_confusion, evaluate
from .thresholding import (
    ThresholdResult,
    candidate_thresholds,
    threshold_sweep,
    select_threshold,
)
from .summary import SummaryRow, SummaryTable, build_summary, format_summary

__all__ = [
    # errors
    "EvaluationError",
    "EmptyInputError",
    "InvalidInputError",
    "InsufficientDataError",
    # predictions
    "PredictionSet",
    "as_prediction_set",
    "validate_threshold",
    # confusion
    "BinaryConfusion",
    "binary_confusion",
    "format_confusion",
    # roc
    "roc_curve",
    "roc_auc",
    # metrics
    "MetricReport",
    "metrics_from_confusion",
    "evaluate",
    # thresholding
    "ThresholdResult",
    "candidate_thresholds",
    "threshold_sweep",
    "select_threshold",
    # summary
    "SummaryRow",
    "SummaryTable",
    "build_summary",
    "format_summary",
]
