"""Reordering of items by hierarchical clustering.

Items are clustered from their pairwise distances (computed from a feature
matrix, or supplied directly) and returned in the leaf order of the
resulting tree, so that similar items end up next to each other. Items
with missing distances are dropped first; the returned order is expressed
in the original item indices.
"""

from __future__ import annotations

import logging
from typing import Any, Tuple

import numpy as np
from scipy.cluster.hierarchy import linkage

from .. import config
from ..distances.pairwise import (
    DistanceMetric,
    pairwise_distances,
    resolve_distance_metric,
)
from ..distances.repair import repair_distance_matrix
from ..distances.representation import (
    looks_like_distance_matrix,
    to_condensed,
    to_square,
)
from ..errors import InvalidArgumentError
from .leaf_order import compute_leaf_order

# Metric value marking ``data`` as an already computed distance matrix.
PRECOMPUTED = "precomputed"


def _default_logger() -> logging.Logger:
    return logging.getLogger(__name__)


def resolve_linkage_method(method: str) -> str:
    if method not in config.LINKAGE_METHODS:
        raise InvalidArgumentError(
            f"Unknown linkage method: {method!r}. "
            f"Supported methods: {', '.join(map(repr, config.LINKAGE_METHODS))}"
        )
    return method


def _square_distances(
    data: Any, metric: DistanceMetric | str | None, logger: logging.Logger
) -> np.ndarray:
    """Square distance matrix for ``data``, computing it when needed.

    An explicit metric always computes distances between the rows of
    ``data``; only ``metric=None`` inspects the input to decide.
    """
    if metric == PRECOMPUTED:
        return to_square(data)
    if metric is not None:
        resolved = resolve_distance_metric(metric)
        return to_square(pairwise_distances(data, resolved, logger=logger))

    arr = np.asarray(data, dtype=np.float64)
    if arr.ndim == 1:
        logger.debug("Treating 1-D input as a condensed distance matrix.")
        return to_square(arr)
    if looks_like_distance_matrix(arr):
        logger.debug("Treating %dx%d input as a distance matrix.", *arr.shape)
        return to_square(arr)
    return to_square(
        pairwise_distances(arr, config.DEFAULT_DISTANCE_METRIC, logger=logger)
    )


def reorder(
    data: Any,
    metric: DistanceMetric | str | None = None,
    linkage_method: str = config.DEFAULT_LINKAGE_METHOD,
    logger: logging.Logger | None = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Order items so that similar ones are adjacent.

    Parameters
    ----------
    data
        Either a feature matrix whose rows are the items, or a distance matrix
        between the items in square or condensed form.
    metric
        Distance between feature rows, see :class:`DistanceMetric`. Naming a
        metric always computes distances from the rows of ``data``, and
        ``'precomputed'`` always uses ``data`` as the distance matrix.
        With ``None`` a 1-D input, or a square, symmetric, non-negative input
        with zero diagonal, is taken to be a distance matrix; any other input
        is a feature matrix compared with ``config.DEFAULT_DISTANCE_METRIC``.
    linkage_method
        Any method accepted by :func:`scipy.cluster.hierarchy.linkage`
        (``'single'``, ``'complete'``, ``'average'``, ...).
    logger
        Receives the diagnostics (removed items, leaf ordering fallback).

    Returns
    -------
    order : np.ndarray (int)
        Permutation of the kept item indices, in original index space.
    distances : np.ndarray
        Square distance matrix of the kept items, in repaired index space.
    keep : np.ndarray (bool)
        True for items that survived the removal of missing distances.

    Raises
    ------
    InvalidArgumentError
        Unknown metric or linkage method, or a malformed distance matrix.
    """
    logger = logger or _default_logger()
    method = resolve_linkage_method(linkage_method)

    square = _square_distances(data, metric, logger)
    repaired, keep = repair_distance_matrix(square, logger=logger)
    kept_idx = np.flatnonzero(keep)

    if kept_idx.size < 2:
        logger.warning(
            "Only %d item(s) left to order; skipping hierarchical clustering.",
            kept_idx.size,
        )
        return kept_idx, repaired, keep

    condensed = to_condensed(repaired)
    linkage_matrix = linkage(condensed, method=method)
    result = compute_leaf_order(linkage_matrix, condensed, logger=logger)

    return kept_idx[result.order], repaired, keep
