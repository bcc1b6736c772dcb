# tests/conftest.py
from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from deepfake_eval.evaluation import PredictionSet


@pytest.fixture
def separable() -> PredictionSet:
    return PredictionSet.from_pairs([(0.9, 1), (0.8, 1), (0.4, 0), (0.2, 0)])


@pytest.fixture
def overlapping() -> PredictionSet:
    return PredictionSet.from_pairs([(0.6, 0), (0.55, 1), (0.5, 0), (0.45, 1)])


def make_random_set(seed: int, n: int = 200, decimals: int = 2) -> PredictionSet:
    """Noisy scores with ties (rounded) and both classes present."""
    rng = np.random.default_rng(seed)
    y = rng.integers(0, 2, size=n)
    y[0], y[1] = 0, 1
    p = np.clip(0.35 * y + rng.normal(0.35, 0.2, size=n), 0.0, 1.0)
    return PredictionSet(np.round(p, decimals), y)


@pytest.fixture(params=[0, 1, 2, 3])
def random_set(request) -> PredictionSet:
    return make_random_set(request.param)
