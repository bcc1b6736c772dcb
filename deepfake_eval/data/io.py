# deepfake_eval/data/io.py
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Union

import numpy as np
import pandas as pd

from ..evaluation.errors import InvalidInputError
from ..evaluation.predictions import PredictionSet


PathLike = Union[str, Path]

SPLITS = ("val", "test")
PREDICTION_SUFFIXES = (".csv", ".npz")


def _nan_to_none(obj: Any) -> Any:
    """NaN/inf floats become None so the artifact stays strict JSON."""
    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None
    if isinstance(obj, dict):
        return {k: _nan_to_none(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_nan_to_none(v) for v in obj]
    return obj


def save_json(path: PathLike, obj: Any) -> None:
    """Save a JSON artifact with readable indentation; non-finite floats are written as null."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(_nan_to_none(obj), f, indent=2, allow_nan=False)


def load_json(path: PathLike) -> Any:
    """Load a JSON artifact."""
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)


def save_predictions(path: PathLike, predictions: PredictionSet) -> Path:
    """
    Persist a PredictionSet.

    Format follows the suffix:
        .csv -> columns `probability,label`
        .npz -> arrays `probabilities`, `labels`
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    if p.suffix == ".csv":
        pd.DataFrame({
            "probability": predictions.probabilities,
            "label": predictions.labels,
        }).to_csv(p, index=False)
    elif p.suffix == ".npz":
        np.savez(p, probabilities=predictions.probabilities, labels=predictions.labels)
    else:
        raise ValueError(f"Unsupported predictions format: {p.suffix} (expected .csv or .npz)")
    return p


def load_predictions(path: PathLike) -> PredictionSet:
    """
    Load a PredictionSet written by the model inference step.

    Raises:
        FileNotFoundError: path missing
        ValueError: unknown suffix
        EmptyInputError: no rows
        InvalidInputError: missing columns/arrays or invalid contents
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Predictions not found: {p}")

    if p.suffix == ".csv":
        try:
            df = pd.read_csv(p)
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
            raise InvalidInputError(f"{p.name}: unreadable CSV ({exc})") from exc
        missing = {"probability", "label"} - set(df.columns)
        if missing:
            raise InvalidInputError(f"{p.name}: missing columns {sorted(missing)}")
        # non-numeric cells are rejected by PredictionSet as InvalidInputError
        return PredictionSet(df["probability"].to_numpy(), df["label"].to_numpy())

    if p.suffix == ".npz":
        with np.load(p) as data:
            missing = {"probabilities", "labels"} - set(data.files)
            if missing:
                raise InvalidInputError(f"{p.name}: missing arrays {sorted(missing)}")
            return PredictionSet(data["probabilities"], data["labels"])

    raise ValueError(f"Unsupported predictions format: {p.suffix} (expected .csv or .npz)")


def find_predictions_file(predictions_dir: PathLike, stage: str, model: str, split: str) -> Path:
    """
    Locate `<predictions_dir>/<stage>/<model>_<split>.{csv,npz}`.

    CSV wins if both exist.
    """
    if split not in SPLITS:
        raise ValueError(f"split must be one of {SPLITS}, got {split!r}")

    base = Path(predictions_dir) / stage / f"{model}_{split}"
    for suffix in PREDICTION_SUFFIXES:
        # model names may contain dots (e.g. vit_b.16), so append rather than replace a suffix
        candidate = base.parent / (base.name + suffix)
        if candidate.exists():
            return candidate
    raise FileNotFoundError(
        f"No predictions for model={model} stage={stage} split={split} under {base.parent} "
        f"(looked for {', '.join(base.name + s for s in PREDICTION_SUFFIXES)})"
    )
