"""Low-level helpers shared by the normalization and ordering subpackages."""

from .data_utils import as_float_matrix, restore_container

__all__ = ["as_float_matrix", "restore_container"]
