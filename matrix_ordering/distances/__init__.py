"""Distance matrix utilities: conversion, pairwise computation and repair."""

from .pairwise import DistanceMetric, pairwise_distances, resolve_distance_metric
from .repair import repair_distance_matrix
from .representation import (
    is_condensed,
    looks_like_distance_matrix,
    to_condensed,
    to_square,
)

__all__ = [
    "DistanceMetric",
    "is_condensed",
    "looks_like_distance_matrix",
    "pairwise_distances",
    "repair_distance_matrix",
    "resolve_distance_metric",
    "to_condensed",
    "to_square",
]
