# deepfake_eval/evaluation/metrics.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .confusion import BinaryConfusion, binary_confusion
from .predictions import PredictionsLike, as_prediction_set, validate_threshold
from .roc import roc_auc


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricReport:
    """
    Classification metrics for one PredictionSet at one threshold.

    `auc` depends only on the probability ranking; the other four are read
    off the confusion counts at the threshold.
    """
    accuracy: float
    precision: float
    recall: float
    f1: float
    auc: float
    counts: BinaryConfusion

    def to_dict(self) -> Dict[str, float]:
        return {
            "accuracy": self.accuracy,
            "precision": self.precision,
            "recall": self.recall,
            "f1": self.f1,
            "auc": self.auc,
            "tp": self.counts.tp,
            "fp": self.counts.fp,
            "tn": self.counts.tn,
            "fn": self.counts.fn,
        }


def metrics_from_confusion(counts: BinaryConfusion, auc: float) -> MetricReport:
    """
    Derive accuracy/precision/recall/F1 from a confusion matrix.

    Definitions (zero denominators yield 0, not NaN):
        accuracy  = (TP + TN) / N
        precision = TP / (TP + FP)
        recall    = TP / (TP + FN)
        f1        = 2 * precision * recall / (precision + recall)
    """
    tp, fp, tn, fn = counts.tp, counts.fp, counts.tn, counts.fn
    total = tp + fp + tn + fn

    acc = (tp + tn) / total if total else 0.0
    prec = tp / (tp + fp) if (tp + fp) else 0.0
    rec = tp / (tp + fn) if (tp + fn) else 0.0
    f1 = 2.0 * prec * rec / (prec + rec) if (prec + rec) else 0.0

    return MetricReport(
        accuracy=float(acc),
        precision=float(prec),
        recall=float(rec),
        f1=float(f1),
        auc=float(auc),
        counts=counts,
    )


def evaluate(
    model_name: str,
    predictions: PredictionsLike,
    threshold: float,
    auc: Optional[float] = None,
) -> MetricReport:
    """
    Apply a fixed threshold and compute the MetricReport.

    Args:
        model_name: used for log context only
        predictions: PredictionSet or sequence of (probability, label) pairs
        threshold: decision cut-off in [0, 1]; positive iff probability >= threshold
        auc: precomputed AUC for this PredictionSet (skips recomputation)

    Raises:
        EmptyInputError, InvalidInputError
    """
    preds = as_prediction_set(predictions)
    thr = validate_threshold(threshold)

    counts = binary_confusion(preds.labels, preds.classify(thr))
    if auc is None:
        auc = roc_auc(preds.probabilities, preds.labels)
    report = metrics_from_confusion(counts, auc)

    logger.debug(
        f"{model_name}: thr={thr:.4f} acc={report.accuracy:.4f} prec={report.precision:.4f} "
        f"rec={report.recall:.4f} f1={report.f1:.4f} auc={report.auc:.4f}"
    )
    return report
