# deepfake_eval/evaluation/confusion.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class BinaryConfusion:
    """2x2 confusion counts for the positive class (label 1 = fake)."""
    tp: int
    fp: int
    tn: int
    fn: int

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn

    @property
    def tpr(self) -> float:
        """Sensitivity / recall; 0 when there are no positives."""
        return _ratio(self.tp, self.tp + self.fn)

    @property
    def fpr(self) -> float:
        return _ratio(self.fp, self.fp + self.tn)

    @property
    def specificity(self) -> float:
        return _ratio(self.tn, self.tn + self.fp)

    @property
    def youden_j(self) -> float:
        return self.tpr - self.fpr

    def as_matrix(self) -> np.ndarray:
        """(2,2) array, rows = true [0, 1], cols = predicted [0, 1]."""
        return np.array([[self.tn, self.fp], [self.fn, self.tp]], dtype=int)


def _ratio(num: float, den: float) -> float:
    return float(num) / float(den) if den else 0.0


def binary_confusion(y_true: Sequence[int], y_pred: Sequence[int], pos_label: int = 1) -> BinaryConfusion:
    """
    Count TP/FP/TN/FN for a binary problem.

    Args:
        y_true, y_pred: sequences of labels of equal length
        pos_label: label treated as positive
    """
    y_true = np.asarray(y_true, dtype=int)
    y_pred = np.asarray(y_pred, dtype=int)
    if y_true.shape != y_pred.shape:
        raise ValueError("y_true and y_pred must have the same shape.")

    t = y_true == pos_label
    p = y_pred == pos_label
    return BinaryConfusion(
        tp=int((t & p).sum()),
        fp=int((~t & p).sum()),
        tn=int((~t & ~p).sum()),
        fn=int((t & ~p).sum()),
    )


def format_confusion(counts: BinaryConfusion, label_names: Optional[Dict[int, str]] = None) -> str:
    """
    Aligned 2x2 table for log output (rows = true, cols = predicted).

    Example:
                 pred real  pred fake
        real            48          2
        fake             5         45
    """
    label_names = label_names or {0: "real", 1: "fake"}
    names = [label_names.get(0, "0"), label_names.get(1, "1")]
    cm = counts.as_matrix()

    headers = [f"pred {n}" for n in names]
    row_w = max(len(n) for n in names)
    cell_w = max(max(len(h) for h in headers), len(str(int(cm.max()))))

    lines = [" " * (row_w + 2) + "  ".join(f"{h:>{cell_w}}" for h in headers)]
    for name, row in zip(names, cm):
        lines.append(f"{name:<{row_w}}  " + "  ".join(f"{int(v):>{cell_w}d}" for v in row))
    return "\n".join(lines)
