# deepfake_eval/evaluation/errors.py
"""
Exception types raised by the evaluation subpackage.

All of them derive from ValueError so callers that already guard
numerical helpers with `except ValueError` keep working.
"""

from __future__ import annotations


class EvaluationError(ValueError):
    """Base class for prediction/threshold validation failures."""


class EmptyInputError(EvaluationError):
    """A PredictionSet with zero samples."""


class InvalidInputError(EvaluationError):
    """Out-of-range probability, label, or threshold, or misaligned arrays."""


class InsufficientDataError(EvaluationError):
    """Threshold selection needs at least one positive and one negative label."""
