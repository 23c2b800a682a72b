"""Conversions between condensed and square distance matrices."""

from __future__ import annotations

from typing import Any

import numpy as np
from scipy.spatial.distance import squareform

from .. import config
from ..errors import InvalidArgumentError


def is_condensed(distances: np.ndarray) -> bool:
    """Return True for a flat (or single row/column) distance vector."""
    if distances.ndim == 1:
        return True
    return distances.ndim == 2 and min(distances.shape) == 1 and distances.size != 1


def _n_items_from_condensed(length: int) -> int:
    n = int(round((1.0 + np.sqrt(1.0 + 8.0 * length)) / 2.0))
    if n * (n - 1) // 2 != length:
        raise InvalidArgumentError(
            f"A condensed distance vector must have n*(n-1)/2 entries, got {length}."
        )
    return n


def to_square(distances: Any) -> np.ndarray:
    """Return ``distances`` as a square float matrix (always a copy).

    Missing entries (NaN) are carried over unchanged.
    """
    arr = np.array(distances, dtype=np.float64, copy=True)
    if is_condensed(arr):
        vector = arr.ravel()
        _n_items_from_condensed(vector.size)
        return squareform(vector, force="tomatrix", checks=False)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InvalidArgumentError(
            f"Distance matrix must be square or condensed, got shape {arr.shape}."
        )
    return arr


def to_condensed(square: np.ndarray) -> np.ndarray:
    """Upper triangle of a square distance matrix as a flat vector."""
    return squareform(square, force="tovector", checks=False)


def looks_like_distance_matrix(arr: np.ndarray) -> bool:
    """Heuristic check that a square array is a (possibly incomplete) distance matrix.

    Requires a zero diagonal, non-negative observed entries and symmetry,
    treating NaN as equal to NaN.
    """
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1] or arr.shape[0] < 2:
        return False
    if not np.all(np.diag(arr) == 0):
        return False
    observed = arr[~np.isnan(arr)]
    if np.any(observed < 0):
        return False
    return bool(np.allclose(arr, arr.T, atol=config.SYMMETRY_ATOL, equal_nan=True))
