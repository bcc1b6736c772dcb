# deepfake_eval/evaluation/thresholding.py
from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Tuple

import numpy as np
import pandas as pd

from .errors import InsufficientDataError, InvalidInputError
from .metrics import MetricReport, evaluate
from .predictions import PredictionSet, PredictionsLike, as_prediction_set
from .roc import roc_auc


logger = logging.getLogger(__name__)


class ThresholdResult(NamedTuple):
    threshold: float
    report: MetricReport


def candidate_thresholds(predictions: PredictionSet, step: Optional[float] = None) -> np.ndarray:
    """
    Candidate cut-offs in ascending order.

    Args:
        predictions: validation PredictionSet
        step: if None, use the distinct probability values present;
              otherwise a fixed grid 0, step, 2*step, ..., 1 (e.g. 0.001)
    """
    if step is None:
        return np.unique(predictions.probabilities)

    step = float(step)
    if not (0.0 < step <= 1.0):
        raise InvalidInputError(f"Grid step must lie in (0, 1], got {step}")
    # rounding drops arange drift (0.30000000000000004); 1.0 closes the grid
    grid = np.round(np.arange(0.0, 1.0, step), 12)
    return np.unique(np.r_[grid, 1.0])


def _sweep_counts(
    predictions: PredictionSet,
    thresholds: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, int, int]:
    """TP and FP counts at each threshold (positive iff probability >= t)."""
    p = predictions.probabilities
    y = predictions.labels
    pos = np.sort(p[y == 1])
    neg = np.sort(p[y == 0])

    tp = pos.size - np.searchsorted(pos, thresholds, side="left")
    fp = neg.size - np.searchsorted(neg, thresholds, side="left")
    return tp, fp, int(pos.size), int(neg.size)


def _require_both_classes(predictions: PredictionSet) -> None:
    if not predictions.has_both_classes:
        raise InsufficientDataError(
            "Threshold selection needs at least one positive and one negative label "
            f"(positives={predictions.n_positive}, negatives={predictions.n_negative})."
        )


def threshold_sweep(predictions: PredictionsLike, step: Optional[float] = None) -> pd.DataFrame:
    """
    Confusion counts, TPR, FPR and Youden's J for every candidate threshold.

    Columns: threshold, tp, fp, tn, fn, tpr, fpr, youden_j
    """
    preds = as_prediction_set(predictions)
    _require_both_classes(preds)

    thresholds = candidate_thresholds(preds, step)
    tp, fp, n_pos, n_neg = _sweep_counts(preds, thresholds)
    tpr = tp / n_pos
    fpr = fp / n_neg

    return pd.DataFrame({
        "threshold": thresholds,
        "tp": tp,
        "fp": fp,
        "tn": n_neg - fp,
        "fn": n_pos - tp,
        "tpr": tpr,
        "fpr": fpr,
        "youden_j": tpr - fpr,
    })


def select_threshold(
    predictions: PredictionsLike,
    step: Optional[float] = None,
    model_name: str = "model",
) -> ThresholdResult:
    """
    Select the decision threshold that maximizes Youden's J on a validation set.

        J(t) = TPR(t) - FPR(t),  positive iff probability >= t

    Ties resolve to the smallest threshold.

    Args:
        predictions: PredictionSet or (probability, label) pairs
        step: None for distinct probability values, else a fixed grid step
        model_name: log context

    Returns:
        ThresholdResult(threshold, report) where report holds accuracy,
        precision, recall and F1 at the threshold and the ranking AUC.

    Raises:
        InsufficientDataError: a class is missing from the labels.
        EmptyInputError, InvalidInputError: malformed input.
    """
    preds = as_prediction_set(predictions)
    _require_both_classes(preds)

    thresholds = candidate_thresholds(preds, step)
    tp, fp, n_pos, n_neg = _sweep_counts(preds, thresholds)
    j = tp / n_pos - fp / n_neg

    # argmax returns the first maximum; thresholds are ascending
    best = int(np.argmax(j))
    thr = float(thresholds[best])

    auc = roc_auc(preds.probabilities, preds.labels)
    report = evaluate(model_name, preds, thr, auc=auc)

    logger.info(
        f"{model_name}: selected threshold={thr:.4f} (J={j[best]:.4f}, "
        f"TPR={report.counts.tpr:.4f}, FPR={report.counts.fpr:.4f}, "
        f"candidates={thresholds.size})"
    )
    return ThresholdResult(threshold=thr, report=report)
