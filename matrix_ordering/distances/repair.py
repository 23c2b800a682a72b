"""Removal of items with missing pairwise distances.

Linkage needs a complete distance matrix. Items are dropped greedily, worst
offender first: the item whose row holds the most missing entries is removed,
counts are recomputed on the remaining items, and the loop stops once no
missing entry is left. This is a heuristic; it does not guarantee the
smallest possible set of removed items (a minimum vertex cover of the
missing-entry graph).
"""

from __future__ import annotations

import logging
from typing import Any, Tuple

import numpy as np

from .representation import to_square


def _default_logger() -> logging.Logger:
    return logging.getLogger(__name__)


def repair_distance_matrix(
    distances: Any, logger: logging.Logger | None = None
) -> Tuple[np.ndarray, np.ndarray]:
    """Drop items until the distance matrix has no missing entries.

    Parameters
    ----------
    distances
        Square or condensed distance matrix; NaN marks a missing distance.
    logger
        Receives the removal diagnostic; defaults to the module logger.

    Returns
    -------
    repaired : np.ndarray
        Square distance matrix restricted to the kept items.
    keep : np.ndarray (bool)
        One entry per input item, True where the item was kept.
    """
    logger = logger or _default_logger()
    square = to_square(distances)
    n_items = square.shape[0]
    keep = np.ones(n_items, dtype=bool)

    missing = np.isnan(square)
    if not missing.any():
        return square, keep

    while keep.any():
        kept_idx = np.flatnonzero(keep)
        counts = missing[np.ix_(kept_idx, kept_idx)].sum(axis=0)
        if counts.max() == 0:
            break
        worst = kept_idx[int(np.argmax(counts))]
        logger.debug(
            "Removing item %d (%d missing distances).", worst, int(counts.max())
        )
        keep[worst] = False

    n_removed = int(n_items - keep.sum())
    logger.warning(
        "Removed %d of %d items with missing entries from the distance matrix.",
        n_removed,
        n_items,
    )
    return square[np.ix_(keep, keep)], keep
