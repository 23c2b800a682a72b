"""Normalization of feature matrices and clustering-based reordering of items.

Two independent entry points:

* :func:`normalize` transforms every column of a feature matrix with an
  outlier-robust transform, ignoring missing values.
* :func:`reorder` orders items (rows of a feature matrix, or the items of a
  distance matrix) by hierarchical clustering with optimal leaf ordering.
"""

from .distances import DistanceMetric, pairwise_distances, repair_distance_matrix
from .errors import InvalidArgumentError, InvariantViolationError
from .normalization import NormalizationMethod, normalize
from .ordering import reorder
from .tree import LinkageTree

__all__ = [
    "DistanceMetric",
    "InvalidArgumentError",
    "InvariantViolationError",
    "LinkageTree",
    "NormalizationMethod",
    "normalize",
    "pairwise_distances",
    "reorder",
    "repair_distance_matrix",
]
