# deepfake_eval/evaluation/roc.py
from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np


def roc_curve(
    probabilities: Sequence[float],
    labels: Sequence[int],
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    ROC curve with one point per distinct score.

    Samples are ranked by descending probability; every distinct value is a
    cut-off (positive iff probability >= cut-off). Tied scores move the curve
    diagonally, so ties earn half credit in the area.

    Returns:
        fpr, tpr, thresholds: arrays of length (#distinct + 1). The first
        point is (0, 0) with threshold +inf; thresholds are descending.
        If a class is absent, the corresponding rate array is all NaN.
    """
    p = np.asarray(probabilities, dtype=float).ravel()
    y = np.asarray(labels, dtype=int).ravel()
    if p.shape != y.shape:
        raise ValueError("probabilities and labels must have the same shape.")
    if p.size == 0:
        raise ValueError("Empty arrays; cannot compute ROC curve.")

    order = np.argsort(-p, kind="mergesort")
    p_sorted = p[order]
    y_sorted = y[order]

    # last index of each run of equal scores
    distinct = np.where(np.diff(p_sorted))[0]
    cut = np.r_[distinct, p_sorted.size - 1]

    tps = np.cumsum(y_sorted == 1)[cut]
    fps = (cut + 1) - tps

    tps = np.r_[0, tps].astype(float)
    fps = np.r_[0, fps].astype(float)
    thresholds = np.r_[np.inf, p_sorted[cut]]

    n_pos, n_neg = tps[-1], fps[-1]
    tpr = tps / n_pos if n_pos > 0 else np.full(tps.shape, np.nan)
    fpr = fps / n_neg if n_neg > 0 else np.full(fps.shape, np.nan)
    return fpr, tpr, thresholds


def roc_auc(probabilities: Sequence[float], labels: Sequence[int]) -> float:
    """
    Area under the ROC curve by trapezoidal integration.

    Returns NaN when only one class is present (AUC is undefined).
    """
    fpr, tpr, _ = roc_curve(probabilities, labels)
    if np.isnan(fpr).any() or np.isnan(tpr).any():
        return float("nan")
    return float(np.sum(np.diff(fpr) * (tpr[1:] + tpr[:-1]) / 2.0))
