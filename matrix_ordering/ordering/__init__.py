"""Hierarchical-clustering based reordering of items."""

from .cluster_reorder import PRECOMPUTED, reorder, resolve_linkage_method
from .leaf_order import LeafOrderResult, compute_leaf_order

__all__ = [
    "LeafOrderResult",
    "PRECOMPUTED",
    "compute_leaf_order",
    "reorder",
    "resolve_linkage_method",
]
