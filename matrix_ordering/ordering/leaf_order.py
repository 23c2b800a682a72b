"""Leaf ordering of a linkage tree.

Optimal leaf ordering (Bar-Joseph et al. 2001) flips subtrees so that the
sum of distances between adjacent leaves is minimal while respecting the
merge structure. It is attempted for inputs below a size limit; if it is
skipped or fails, the tree's natural left-to-right dendrogram order is used
instead. Both paths read the final order from a :class:`LinkageTree`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from scipy.cluster.hierarchy import optimal_leaf_ordering

from .. import config
from ..tree.linkage_tree import LinkageTree


def _default_logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass
class LeafOrderResult:
    """Leaf order and the linkage matrix it was read from."""

    order: np.ndarray  # leaf indices, left to right
    linkage_matrix: np.ndarray  # reordered when optimal ordering succeeded
    optimal: bool  # False when the dendrogram fallback was used


def compute_leaf_order(
    linkage_matrix: np.ndarray,
    condensed_distances: np.ndarray,
    size_limit: float = config.OPTIMAL_LEAF_ORDER_LIMIT,
    logger: logging.Logger | None = None,
) -> LeafOrderResult:
    """Order the leaves of ``linkage_matrix``.

    Parameters
    ----------
    linkage_matrix
        ``(n-1, 4)`` SciPy linkage matrix.
    condensed_distances
        The condensed distances the linkage was computed from.
    size_limit
        Optimal leaf ordering is attempted only while
        ``sqrt(len(condensed_distances)) < size_limit``.
    logger
        Receives the diagnostics about which ordering was used.
    """
    logger = logger or _default_logger()
    n_items = linkage_matrix.shape[0] + 1

    if np.sqrt(condensed_distances.size) < size_limit:
        try:
            logger.debug("Trying optimal leaf ordering for %d items.", n_items)
            ordered = optimal_leaf_ordering(linkage_matrix, condensed_distances)
            tree = LinkageTree.from_linkage(ordered)
            logger.info("Used optimal leaf ordering for %d items.", n_items)
            return LeafOrderResult(tree.leaf_order(), ordered, optimal=True)
        except Exception as exc:
            logger.warning(
                "Optimal leaf ordering was not used (%s); "
                "falling back to the dendrogram order.",
                exc,
            )
    else:
        logger.warning(
            "Too many items (%d) for optimal leaf ordering; "
            "using the dendrogram order.",
            n_items,
        )

    tree = LinkageTree.from_linkage(linkage_matrix)
    return LeafOrderResult(tree.leaf_order(), linkage_matrix, optimal=False)
