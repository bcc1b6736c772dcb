# deepfake_eval/data/__init__.py
"""
Data subpackage: structured artifact I/O.

Prediction files are produced by the (external) model inference step, one
per model, stage and split:

    <predictions_dir>/<stage>/<model>_<split>.csv   columns: probability,label
    <predictions_dir>/<stage>/<model>_<split>.npz   arrays:  probabilities, labels
"""

from .io import (
    SPLITS,
    save_json,
    load_json,
    save_predictions,
    load_predictions,
    find_predictions_file,
)

__all__ = [
    "SPLITS",
    "save_json",
    "load_json",
    "save_predictions",
    "load_predictions",
    "find_predictions_file",
]
