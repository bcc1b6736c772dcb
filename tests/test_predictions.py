# tests/test_predictions.py
import numpy as np
import pytest

from deepfake_eval.evaluation import (
    EmptyInputError,
    InvalidInputError,
    PredictionSet,
    as_prediction_set,
    validate_threshold,
)


def test_from_pairs_aligns_probabilities_and_labels(separable):
    assert len(separable) == 4
    assert separable.probabilities.tolist() == [0.9, 0.8, 0.4, 0.2]
    assert separable.labels.tolist() == [1, 1, 0, 0]
    assert separable.n_positive == 2
    assert separable.n_negative == 2
    assert list(separable.pairs()) == [(0.9, 1), (0.8, 1), (0.4, 0), (0.2, 0)]


def test_arrays_are_copied_and_read_only():
    p = np.array([0.1, 0.7])
    y = np.array([0, 1])
    preds = PredictionSet(p, y)
    p[0] = 0.9
    assert preds.probabilities[0] == pytest.approx(0.1)
    with pytest.raises(ValueError):
        preds.probabilities[0] = 0.5


@pytest.mark.parametrize("probs,labels", [([], []), (np.array([]), np.array([]))])
def test_empty_set_is_rejected(probs, labels):
    with pytest.raises(EmptyInputError):
        PredictionSet(probs, labels)


def test_empty_pairs_are_rejected():
    with pytest.raises(EmptyInputError):
        PredictionSet.from_pairs([])


@pytest.mark.parametrize("bad_prob", [1.2, -0.01, float("nan"), float("inf")])
def test_out_of_range_probability_is_rejected(bad_prob):
    with pytest.raises(InvalidInputError):
        PredictionSet([0.5, bad_prob], [0, 1])


@pytest.mark.parametrize("bad_label", [2, -1, 0.5])
def test_non_binary_label_is_rejected(bad_label):
    with pytest.raises(InvalidInputError):
        PredictionSet([0.5, 0.6], [0, bad_label])


def test_length_mismatch_is_rejected():
    with pytest.raises(InvalidInputError):
        PredictionSet([0.5, 0.6, 0.7], [0, 1])


def test_malformed_pairs_are_rejected():
    with pytest.raises(InvalidInputError):
        PredictionSet.from_pairs([(0.5,)])


def test_boundary_probabilities_and_bool_labels_are_accepted():
    preds = PredictionSet([0.0, 1.0], np.array([False, True]))
    assert preds.labels.dtype == np.int64
    assert preds.labels.tolist() == [0, 1]


def test_classify_uses_greater_or_equal(overlapping):
    assert overlapping.classify(0.5).tolist() == [1, 1, 1, 0]


def test_as_prediction_set_passes_through_instances(separable):
    assert as_prediction_set(separable) is separable
    assert len(as_prediction_set([(0.3, 0), (0.7, 1)])) == 2


@pytest.mark.parametrize("bad", [-0.1, 1.0001, float("nan"), "high", None])
def test_validate_threshold_rejects_bad_values(bad):
    with pytest.raises(InvalidInputError):
        validate_threshold(bad)


def test_validate_threshold_accepts_bounds():
    assert validate_threshold(0) == 0.0
    assert validate_threshold(1) == 1.0


@pytest.mark.parametrize("pairs", [[0.5], [0.5, 0.7], [None]])
def test_pairs_that_are_not_tuples_are_rejected(pairs):
    with pytest.raises(InvalidInputError):
        PredictionSet.from_pairs(pairs)
