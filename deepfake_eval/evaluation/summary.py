# deepfake_eval/evaluation/summary.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import pandas as pd

from .metrics import MetricReport, evaluate
from .predictions import PredictionsLike, validate_threshold


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

METRIC_COLUMNS = ["accuracy", "precision", "recall", "f1", "auc"]
COUNT_COLUMNS = ["tp", "fp", "tn", "fn"]


@dataclass(frozen=True)
class SummaryRow:
    model_name: str
    threshold: float
    report: MetricReport
    stage: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"stage": self.stage, "model_name": self.model_name, "threshold": self.threshold}
        out.update(self.report.to_dict())
        return out


@dataclass(frozen=True)
class SummaryTable:
    """
    Ordered, immutable rows of (model_name, threshold, MetricReport).

    Row order is the order the rows were evaluated in; the same model may
    appear more than once (e.g. default vs tuned threshold).
    """
    rows: Tuple[SummaryRow, ...]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[SummaryRow]:
        return iter(self.rows)

    def __getitem__(self, i: int) -> SummaryRow:
        return self.rows[i]

    def to_frame(self) -> pd.DataFrame:
        """
        Columns: [stage,] model_name, threshold, accuracy, precision, recall, f1, auc, tp, fp, tn, fn

        `stage` is included only if at least one row carries one.
        """
        columns = ["stage", "model_name", "threshold"] + METRIC_COLUMNS + COUNT_COLUMNS
        if not any(r.stage is not None for r in self.rows):
            columns = columns[1:]
        return pd.DataFrame([r.to_dict() for r in self.rows], columns=columns)

    def to_csv(self, path: PathLike, float_format: Optional[str] = "%.4f") -> Path:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        self.to_frame().to_csv(p, index=False, float_format=float_format)
        return p


EvaluationRow = Union[
    Tuple[str, PredictionsLike, float],
    Tuple[str, PredictionsLike, float, Optional[str]],
]


def _unpack_row(row: Sequence[Any]) -> Tuple[str, PredictionsLike, float, Optional[str]]:
    if len(row) == 3:
        name, preds, thr = row
        return str(name), preds, thr, None
    if len(row) == 4:
        name, preds, thr, stage = row
        return str(name), preds, thr, (None if stage is None else str(stage))
    raise ValueError(
        f"Summary rows must be (model_name, predictions, threshold[, stage]); got {len(row)} fields."
    )


def build_summary(rows: Iterable[EvaluationRow]) -> SummaryTable:
    """
    Evaluate every row and collect the results in input order.

    No sorting and no de-duplication by model name. Errors from `evaluate`
    propagate; the caller decides whether to drop a row or abort.
    """
    out: List[SummaryRow] = []
    for row in rows:
        name, preds, thr, stage = _unpack_row(row)
        thr = validate_threshold(thr)
        report = evaluate(name, preds, thr)
        out.append(SummaryRow(model_name=name, threshold=thr, report=report, stage=stage))

    logger.info(f"Built summary table with {len(out)} rows.")
    return SummaryTable(rows=tuple(out))


def format_summary(table: SummaryTable) -> str:
    """Fixed-width text rendering for logs."""
    df = table.to_frame()
    if df.empty:
        return "(empty summary)"
    return df.to_string(index=False, float_format=lambda v: f"{v:.4f}")
