# deepfake_eval/evaluation/predictions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple, Union

import numpy as np

from .errors import EmptyInputError, InvalidInputError


@dataclass(frozen=True, eq=False)
class PredictionSet:
    """
    Index-aligned positive-class probabilities and true labels for one
    model on one data split.

    Shape conventions:
        probabilities: (N,) float64 in [0, 1]
        labels:        (N,) int64 in {0, 1}

    Both arrays are copied and made read-only on construction.
    """
    probabilities: np.ndarray
    labels: np.ndarray

    def __post_init__(self) -> None:
        try:
            p = np.array(self.probabilities, dtype=float).ravel()
        except (TypeError, ValueError) as exc:
            raise InvalidInputError("Probabilities must be numeric.") from exc
        y_raw = np.asarray(self.labels).ravel()

        if p.size == 0 and y_raw.size == 0:
            raise EmptyInputError("PredictionSet is empty; need at least one sample.")
        if p.shape != y_raw.shape:
            raise InvalidInputError(
                f"probabilities and labels must have equal length: {p.size} vs {y_raw.size}"
            )
        if not np.all(np.isfinite(p)) or np.any((p < 0.0) | (p > 1.0)):
            bad = p[~(np.isfinite(p) & (p >= 0.0) & (p <= 1.0))]
            raise InvalidInputError(f"Probabilities must lie in [0, 1]; got e.g. {bad[:3].tolist()}")

        try:
            y_float = y_raw.astype(float)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError("Labels must be numeric 0/1 values.") from exc
        if not np.all(np.isin(y_float, [0.0, 1.0])):
            bad = sorted(set(y_raw.tolist()) - {0, 1})
            raise InvalidInputError(f"Labels must be 0 or 1; unexpected values: {bad[:5]}")
        y = y_float.astype(np.int64)

        p.setflags(write=False)
        y.setflags(write=False)
        object.__setattr__(self, "probabilities", p)
        object.__setattr__(self, "labels", y)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[float, int]]) -> "PredictionSet":
        """Build from a sequence of (probability, label) pairs."""
        pairs = list(pairs)
        if not pairs:
            raise EmptyInputError("PredictionSet is empty; need at least one sample.")
        try:
            probs, labels = zip(*pairs)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError("Each pair must be (probability, label).") from exc
        return cls(probs, labels)

    def __len__(self) -> int:
        return int(self.labels.size)

    @property
    def n_positive(self) -> int:
        return int((self.labels == 1).sum())

    @property
    def n_negative(self) -> int:
        return int((self.labels == 0).sum())

    @property
    def has_both_classes(self) -> bool:
        return self.n_positive > 0 and self.n_negative > 0

    def pairs(self) -> Iterator[Tuple[float, int]]:
        for p, y in zip(self.probabilities.tolist(), self.labels.tolist()):
            yield float(p), int(y)

    def classify(self, threshold: float) -> np.ndarray:
        """Predicted labels: 1 iff probability >= threshold."""
        return (self.probabilities >= validate_threshold(threshold)).astype(np.int64)


PredictionsLike = Union[PredictionSet, Sequence[Tuple[float, int]]]


def as_prediction_set(predictions: PredictionsLike) -> PredictionSet:
    """Accept either a PredictionSet or a sequence of (probability, label) pairs."""
    if isinstance(predictions, PredictionSet):
        return predictions
    return PredictionSet.from_pairs(predictions)


def validate_threshold(threshold: float) -> float:
    """Return `threshold` as float, rejecting NaN and values outside [0, 1]."""
    try:
        t = float(threshold)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Threshold must be a number, got {threshold!r}") from exc
    if not (0.0 <= t <= 1.0):
        raise InvalidInputError(f"Threshold must lie in [0, 1], got {t}")
    return t
