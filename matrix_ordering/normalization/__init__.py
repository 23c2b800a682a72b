"""Column-wise normalization of feature matrices."""

from .methods import NormalizationMethod, resolve_normalization_method
from .normalize import normalize

__all__ = ["NormalizationMethod", "normalize", "resolve_normalization_method"]
