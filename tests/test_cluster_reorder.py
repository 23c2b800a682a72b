"""Tests for clustering-based reordering of items."""

import logging

import numpy as np
import pytest
from scipy.cluster.hierarchy import leaves_list, linkage, optimal_leaf_ordering
from scipy.spatial.distance import pdist, squareform

from matrix_ordering import InvalidArgumentError, reorder
from matrix_ordering.distances import to_condensed
from matrix_ordering.ordering import compute_leaf_order
from matrix_ordering.ordering import leaf_order as leaf_order_module

nan = np.nan

# Items 0 and 1 are close, item 2 is far from both.
NEAR_PAIR = np.array([[0.0, 1.0, 10.0], [1.0, 0.0, 10.0], [10.0, 10.0, 0.0]])


def _assert_adjacent(order, a, b):
    positions = {item: pos for pos, item in enumerate(order)}
    assert abs(positions[a] - positions[b]) == 1


def _assert_permutation_of(order, expected):
    assert order.dtype.kind == "i"
    assert sorted(order.tolist()) == sorted(expected)


@pytest.mark.parametrize(
    "data", [NEAR_PAIR, to_condensed(NEAR_PAIR)], ids=["square", "condensed"]
)
def test_near_pair_is_placed_adjacent(data):
    order, distances, keep = reorder(data)

    _assert_permutation_of(order, [0, 1, 2])
    _assert_adjacent(order, 0, 1)
    np.testing.assert_array_equal(distances, NEAR_PAIR)
    assert keep.all()


def test_precomputed_metric_forces_distance_input():
    order, _, _ = reorder(NEAR_PAIR, metric="precomputed")

    _assert_adjacent(order, 0, 1)


def test_feature_rows_are_clustered_by_correlation():
    X = np.array(
        [
            [1.0, 2.0, 3.0, 4.0, 5.0],
            [5.0, 4.0, 3.0, 2.0, 1.0],
            [1.0, 2.0, 3.0, 5.0, 4.0],
            [5.0, 4.0, 3.0, 1.0, 2.0],
        ]
    )

    order, distances, keep = reorder(X, metric="corr", linkage_method="average")

    _assert_permutation_of(order, [0, 1, 2, 3])
    _assert_adjacent(order, 0, 2)
    _assert_adjacent(order, 1, 3)
    np.testing.assert_allclose(distances, 1.0 - np.corrcoef(X), atol=1e-12)
    assert keep.all()


def test_items_with_missing_distances_are_dropped(caplog):
    D = np.array(
        [
            [0.0, 1.0, nan, 6.0],
            [1.0, 0.0, nan, 6.0],
            [nan, nan, 0.0, nan],
            [6.0, 6.0, nan, 0.0],
        ]
    )

    with caplog.at_level(logging.WARNING, logger="matrix_ordering"):
        order, distances, keep = reorder(D)

    np.testing.assert_array_equal(keep, [True, True, False, True])
    _assert_permutation_of(order, [0, 1, 3])
    _assert_adjacent(order, 0, 1)
    assert distances.shape == (3, 3)
    assert "Removed 1 of 4 items" in caplog.text


def test_missing_feature_values_propagate_to_repair():
    X = np.array(
        [
            [1.0, 2.0, 3.0, 4.0],
            [2.0, 4.0, 6.0, 9.0],
            [nan, nan, nan, 1.0],
            [4.0, 3.0, 2.0, 1.0],
        ]
    )

    order, _, keep = reorder(X)

    np.testing.assert_array_equal(keep, [True, True, False, True])
    _assert_permutation_of(order, [0, 1, 3])


@pytest.mark.parametrize("method", ["single", "complete", "average"])
def test_order_is_always_a_permutation_of_kept_items(rng, method):
    D = np.abs(rng.normal(size=(15, 15)))
    D = D + D.T
    np.fill_diagonal(D, 0.0)
    D[4, 9] = D[9, 4] = nan
    D[4, 11] = D[11, 4] = nan

    order, _, keep = reorder(D, linkage_method=method)

    assert not keep[4]
    _assert_permutation_of(order, np.flatnonzero(keep).tolist())


def test_optimal_leaf_ordering_is_used(rng):
    y = pdist(rng.normal(size=(10, 3)))
    Z = linkage(y, method="average")

    result = compute_leaf_order(Z, y)

    assert result.optimal
    np.testing.assert_array_equal(
        result.order, leaves_list(optimal_leaf_ordering(Z, y))
    )


def test_large_inputs_skip_optimal_leaf_ordering(rng, caplog):
    y = pdist(rng.normal(size=(10, 3)))
    Z = linkage(y, method="average")

    with caplog.at_level(logging.WARNING, logger="matrix_ordering"):
        result = compute_leaf_order(Z, y, size_limit=1.0)

    assert not result.optimal
    np.testing.assert_array_equal(result.order, leaves_list(Z))
    assert "Too many items" in caplog.text


def test_failed_optimal_leaf_ordering_falls_back(rng, monkeypatch, caplog):
    def _fail(Z, y):
        raise ValueError("boom")

    monkeypatch.setattr(leaf_order_module, "optimal_leaf_ordering", _fail)
    X = rng.normal(size=(8, 5))

    with caplog.at_level(logging.WARNING, logger="matrix_ordering"):
        order, distances, keep = reorder(X, metric="euclidean")

    expected = leaves_list(linkage(pdist(X), method="average"))
    np.testing.assert_array_equal(order, expected)
    assert keep.all()
    assert "Optimal leaf ordering was not used" in caplog.text


def test_fewer_than_two_items_left():
    D = np.array([[0.0, nan], [nan, 0.0]])

    order, distances, keep = reorder(D)

    np.testing.assert_array_equal(keep, [False, True])
    np.testing.assert_array_equal(order, [1])
    assert distances.shape == (1, 1)


@pytest.mark.parametrize(
    "kwargs", [{"metric": "mutual_info"}, {"linkage_method": "upgma"}]
)
def test_invalid_names_are_rejected(kwargs):
    with pytest.raises(InvalidArgumentError):
        reorder(NEAR_PAIR, **kwargs)


def test_explicit_metric_is_applied_to_symmetric_feature_matrix():
    # Connectivity-like profiles: symmetric, non-negative, zero diagonal.
    X = np.array(
        [
            [0.0, 0.9, 0.8, 0.1],
            [0.9, 0.0, 0.7, 0.2],
            [0.8, 0.7, 0.0, 0.3],
            [0.1, 0.2, 0.3, 0.0],
        ]
    )

    _, distances, _ = reorder(X, metric="euclidean")

    np.testing.assert_allclose(distances, squareform(pdist(X)))


def test_symmetric_zero_diagonal_input_is_a_distance_matrix_by_default():
    X = np.array([[0.0, 0.9, 0.1], [0.9, 0.0, 0.2], [0.1, 0.2, 0.0]])

    _, distances, _ = reorder(X)

    np.testing.assert_array_equal(distances, X)
