"""Tests for the greedy removal of items with missing distances."""

import logging

import numpy as np
import pytest

from matrix_ordering import InvalidArgumentError, repair_distance_matrix
from matrix_ordering.distances import to_condensed, to_square

nan = np.nan


def test_removes_the_item_with_missing_distances():
    D = np.array([[0.0, nan, 2.0], [nan, 0.0, nan], [2.0, nan, 0.0]])

    repaired, keep = repair_distance_matrix(D)

    np.testing.assert_array_equal(keep, [True, False, True])
    np.testing.assert_array_equal(repaired, [[0.0, 2.0], [2.0, 0.0]])


def test_complete_matrix_is_returned_unchanged(caplog):
    D = np.array([[0.0, 1.0, 2.0], [1.0, 0.0, 3.0], [2.0, 3.0, 0.0]])

    with caplog.at_level(logging.WARNING):
        repaired, keep = repair_distance_matrix(D)

    np.testing.assert_array_equal(repaired, D)
    assert keep.dtype == bool
    assert keep.all()
    assert caplog.records == []


def test_worst_offender_is_removed_first():
    D = np.ones((4, 4)) - np.eye(4)
    D[0, 1:] = D[1:, 0] = nan

    repaired, keep = repair_distance_matrix(D)

    np.testing.assert_array_equal(keep, [False, True, True, True])
    assert repaired.shape == (3, 3)


def test_ties_remove_one_item_at_a_time():
    D = np.ones((4, 4)) - np.eye(4)
    D[1, 3] = D[3, 1] = nan

    _, keep = repair_distance_matrix(D)

    np.testing.assert_array_equal(keep, [True, False, True, True])


def test_accepts_condensed_input():
    D = np.array([[0.0, nan, 2.0], [nan, 0.0, nan], [2.0, nan, 0.0]])

    repaired, keep = repair_distance_matrix(to_condensed(D))

    np.testing.assert_array_equal(keep, [True, False, True])
    assert repaired.shape == (2, 2)


def test_removal_is_reported_as_warning(caplog):
    D = np.array([[0.0, nan, 2.0], [nan, 0.0, nan], [2.0, nan, 0.0]])

    with caplog.at_level(logging.WARNING, logger="matrix_ordering.distances"):
        repair_distance_matrix(D)

    assert "Removed 1 of 3 items" in caplog.text


def test_result_never_contains_missing_entries(rng):
    D = to_square(rng.uniform(0.1, 1.0, size=45))
    for i, j in rng.integers(0, 10, size=(6, 2)):
        D[i, j] = D[j, i] = nan

    repaired, keep = repair_distance_matrix(D)

    assert not np.isnan(repaired).any()
    assert repaired.shape == (keep.sum(), keep.sum())
    np.testing.assert_array_equal(repaired, D[np.ix_(keep, keep)])


def test_malformed_condensed_length_is_rejected():
    with pytest.raises(InvalidArgumentError):
        repair_distance_matrix(np.ones(4))


def test_non_square_matrix_is_rejected():
    with pytest.raises(InvalidArgumentError):
        repair_distance_matrix(np.ones((3, 4)))
