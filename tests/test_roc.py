# tests/test_roc.py
import math

import numpy as np
import pytest

from deepfake_eval.evaluation import roc_auc, roc_curve

from conftest import make_random_set


def test_roc_curve_points(separable):
    fpr, tpr, thr = roc_curve(separable.probabilities, separable.labels)
    assert thr[0] == np.inf
    assert thr[1:].tolist() == [0.9, 0.8, 0.4, 0.2]
    assert tpr.tolist() == [0.0, 0.5, 1.0, 1.0, 1.0]
    assert fpr.tolist() == [0.0, 0.0, 0.0, 0.5, 1.0]


def test_perfect_separation_auc_is_one(separable):
    assert roc_auc(separable.probabilities, separable.labels) == pytest.approx(1.0)


def test_inverted_ranking_auc_is_zero():
    assert roc_auc([0.1, 0.2, 0.8, 0.9], [1, 1, 0, 0]) == pytest.approx(0.0)


def test_tied_scores_get_half_credit():
    assert roc_auc([0.5, 0.5], [1, 0]) == pytest.approx(0.5)
    fpr, tpr, _ = roc_curve([0.5, 0.5], [1, 0])
    assert fpr.tolist() == [0.0, 1.0]
    assert tpr.tolist() == [0.0, 1.0]


def test_overlapping_auc_matches_pair_count(overlapping):
    # positives 0.55, 0.45 vs negatives 0.6, 0.5 -> 1 of 4 pairs ranked correctly
    assert roc_auc(overlapping.probabilities, overlapping.labels) == pytest.approx(0.25)


def test_single_class_auc_is_nan():
    assert math.isnan(roc_auc([0.2, 0.9], [1, 1]))
    fpr, tpr, _ = roc_curve([0.2, 0.9], [1, 1])
    assert np.isnan(fpr).all()
    assert not np.isnan(tpr).any()


def test_empty_input_raises():
    with pytest.raises(ValueError):
        roc_curve([], [])


@pytest.mark.parametrize("seed", range(5))
def test_auc_matches_sklearn(seed):
    metrics = pytest.importorskip("sklearn.metrics")
    preds = make_random_set(seed, n=300)
    expected = metrics.roc_auc_score(preds.labels, preds.probabilities)
    assert roc_auc(preds.probabilities, preds.labels) == pytest.approx(expected, abs=1e-12)
