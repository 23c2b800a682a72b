"""Pairwise distances between the rows of a feature matrix.

Complete matrices are handed straight to :func:`scipy.spatial.distance.pdist`.
When values are missing, each pair of rows is compared on the columns they
both observe; pairs without enough shared observations get a NaN distance,
which :func:`repair_distance_matrix` removes before clustering.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import numpy as np
from scipy.spatial.distance import pdist

from .. import config
from ..core_utils.data_utils import as_float_matrix
from ..errors import InvalidArgumentError


def _default_logger() -> logging.Logger:
    return logging.getLogger(__name__)


class DistanceMetric(str, Enum):
    CORR = "corr"
    ABS_CORR = "abscorr"
    EUCLIDEAN = "euclidean"
    CITYBLOCK = "cityblock"
    COSINE = "cosine"
    HAMMING = "hamming"

    @property
    def is_correlation(self) -> bool:
        return self in (DistanceMetric.CORR, DistanceMetric.ABS_CORR)


_ALIASES = {
    "correlation": DistanceMetric.CORR,
    "Euclidean": DistanceMetric.EUCLIDEAN,
}

# scipy.spatial.distance.pdist name for each metric
_SCIPY_METRICS = {
    DistanceMetric.CORR: "correlation",
    DistanceMetric.ABS_CORR: "correlation",
    DistanceMetric.EUCLIDEAN: "euclidean",
    DistanceMetric.CITYBLOCK: "cityblock",
    DistanceMetric.COSINE: "cosine",
    DistanceMetric.HAMMING: "hamming",
}


def resolve_distance_metric(metric: DistanceMetric | str) -> DistanceMetric:
    """Return the enum member for ``metric``, accepting a few legacy aliases."""
    if isinstance(metric, DistanceMetric):
        return metric
    if metric in _ALIASES:
        return _ALIASES[metric]
    try:
        return DistanceMetric(metric)
    except ValueError:
        supported = ", ".join(repr(m.value) for m in DistanceMetric)
        raise InvalidArgumentError(
            f"Unknown distance metric: {metric!r}. Supported metrics: {supported}"
        ) from None


def _correlation_to_distance(r: np.ndarray | float, metric: DistanceMetric):
    if metric is DistanceMetric.ABS_CORR:
        return 1.0 - np.abs(r)
    return 1.0 - r


def _complete_distances(values: np.ndarray, metric: DistanceMetric) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        distances = pdist(values, metric=_SCIPY_METRICS[metric])
    if metric.is_correlation:
        # pdist's correlation distance is 1 - r; recover r for the abs variant.
        r = np.clip(1.0 - distances, -1.0, 1.0)
        distances = _correlation_to_distance(r, metric)
    return distances


def _masked_pair_distance(
    x: np.ndarray, y: np.ndarray, metric: DistanceMetric
) -> float:
    shared = ~np.isnan(x) & ~np.isnan(y)
    xs = x[shared]
    ys = y[shared]

    if metric.is_correlation:
        if xs.size < 2:
            return np.nan
        xc = xs - xs.mean()
        yc = ys - ys.mean()
        denom = np.sqrt(np.dot(xc, xc) * np.dot(yc, yc))
        if denom == 0:
            return np.nan
        r = float(np.clip(np.dot(xc, yc) / denom, -1.0, 1.0))
        return float(_correlation_to_distance(r, metric))

    if xs.size == 0:
        return np.nan
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(pdist(np.vstack([xs, ys]), metric=_SCIPY_METRICS[metric])[0])


def pairwise_distances(
    data: Any,
    metric: DistanceMetric | str = config.DEFAULT_DISTANCE_METRIC,
    logger: logging.Logger | None = None,
) -> np.ndarray:
    """Condensed pairwise distances between the rows of ``data``.

    Parameters
    ----------
    data
        Feature matrix (rows are items); NaN marks a missing value.
    metric
        One of :class:`DistanceMetric`. ``'corr'`` is ``1 - r`` and
        ``'abscorr'`` is ``1 - |r|`` for the Pearson correlation ``r``.
    logger
        Receives the debug notice for the missing-value path; defaults to
        the module logger.

    Returns
    -------
    np.ndarray
        Condensed distance vector in :func:`scipy.spatial.distance.pdist`
        order. Entries are NaN where a pair could not be compared.
    """
    logger = logger or _default_logger()
    resolved = resolve_distance_metric(metric)
    values, _ = as_float_matrix(data)

    if not np.isnan(values).any():
        return _complete_distances(values, resolved)

    n_items = values.shape[0]
    logger.debug(
        "Computing %s distances for %d items on shared observations.",
        resolved.value,
        n_items,
    )
    distances = np.empty(n_items * (n_items - 1) // 2, dtype=np.float64)
    k = 0
    for i in range(n_items - 1):
        for j in range(i + 1, n_items):
            distances[k] = _masked_pair_distance(values[i], values[j], resolved)
            k += 1
    return distances
