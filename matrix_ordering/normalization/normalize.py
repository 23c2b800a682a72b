"""Column-wise normalization of feature matrices.

Each column of the feature matrix is transformed independently by one of the
:class:`NormalizationMethod` transforms. Missing values (NaN) are ignored when
fitting the transform parameters.

For train/test workflows the ``scaledSQzscore`` transform can learn its
location and scale on a subset of rows (``train_indices``) and apply them to
every row, so held-out rows never influence the fit.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import numpy as np

from .. import config
from ..core_utils.data_utils import as_float_matrix, restore_container
from ..errors import InvalidArgumentError
from .column_transforms import (
    ld_scaled_column,
    maxmin_column,
    mixed_sigmoid_column,
    qzscore_column,
    relmean_column,
    scaled_2ways_column,
    scaled_log_column,
    scaled_sigmoid_5q_column,
    scaled_sigmoid_column,
    scaled_sqzscore_column,
    sigmoid_column,
    sqzscore_column,
    zscore_column,
)
from .methods import NormalizationMethod, resolve_normalization_method


def _default_logger() -> logging.Logger:
    return logging.getLogger(__name__)


def _validate_train_indices(
    train_indices: Optional[Sequence[int]],
    n_rows: int,
    method: NormalizationMethod,
) -> Optional[np.ndarray]:
    """Check the training subset and return it as an integer array.

    ``None`` and an empty sequence both mean "fit on every row".
    """
    if train_indices is None:
        return None
    indices = np.asarray(train_indices)
    if indices.size == 0:
        return None
    if not method.supports_training_subset:
        raise InvalidArgumentError(
            f"Training indices are only supported for "
            f"'{NormalizationMethod.SCALED_SQZSCORE.value}', got {method.value!r}."
        )
    if indices.ndim != 1 or not np.issubdtype(indices.dtype, np.integer):
        raise InvalidArgumentError("Training indices must be a 1-D sequence of ints.")
    if np.unique(indices).size != indices.size:
        raise InvalidArgumentError("Training indices must not contain duplicates.")
    if indices.min() < 0 or indices.max() >= n_rows:
        raise InvalidArgumentError(
            f"Training indices must lie in [0, {n_rows}), "
            f"got range [{indices.min()}, {indices.max()}]."
        )
    return indices


def _transform_column(
    method: NormalizationMethod,
    column: np.ndarray,
    train_column: np.ndarray,
    column_index: int,
) -> np.ndarray:
    if method is NormalizationMethod.ZSCORE:
        return zscore_column(column)
    elif method is NormalizationMethod.QZSCORE:
        return qzscore_column(column)
    elif method is NormalizationMethod.SIGMOID:
        return sigmoid_column(column)
    elif method is NormalizationMethod.SQZSCORE:
        return sqzscore_column(column)
    elif method is NormalizationMethod.SCALED_SIGMOID:
        return scaled_sigmoid_column(column)
    elif method is NormalizationMethod.SCALED_SIGMOID_5Q:
        return scaled_sigmoid_5q_column(column)
    elif method is NormalizationMethod.SCALED_SQZSCORE:
        return scaled_sqzscore_column(column, train_column)
    elif method is NormalizationMethod.SCALED_2WAYS:
        return scaled_2ways_column(column)
    elif method is NormalizationMethod.MIXED_SIGMOID:
        return mixed_sigmoid_column(column)
    elif method is NormalizationMethod.LD_SCALED:
        return ld_scaled_column(column)
    elif method is NormalizationMethod.MAXMIN:
        return maxmin_column(column)
    elif method is NormalizationMethod.SCALED_LOG:
        return scaled_log_column(column, column_index=column_index)
    elif method is NormalizationMethod.RELMEAN:
        return relmean_column(column)
    else:  # pragma: no cover - every enum member is handled above
        raise InvalidArgumentError(f"Unhandled normalization method: {method!r}")


def normalize(
    matrix: Any,
    method: NormalizationMethod | str | None = None,
    train_indices: Optional[Sequence[int]] = None,
    logger: logging.Logger | None = None,
) -> Any:
    """Normalize every column of ``matrix`` with the requested transform.

    Parameters
    ----------
    matrix
        Feature matrix with observations in rows and features in columns.
        NumPy arrays (a 1-D array is one column) and pandas DataFrames are
        accepted. NaN marks a missing value.
    method
        Name or :class:`NormalizationMethod` member. ``None`` selects
        ``config.DEFAULT_NORMALIZATION`` (sigmoid) and logs a notice.
    train_indices
        Optional row indices on which to fit the transform parameters before
        applying them to all rows. Only valid for ``'scaledSQzscore'``.
    logger
        Logger for the default-method notice; defaults to the module logger.

    Returns
    -------
    Same type and shape as ``matrix``
        The normalized copy; the input is left untouched.

    Raises
    ------
    InvalidArgumentError
        Unknown method, malformed training indices, or training indices
        combined with a method other than ``'scaledSQzscore'``.
    InvariantViolationError
        If ``'scaledlog'`` produces a degenerate column.
    """
    logger = logger or _default_logger()
    if method is None:
        logger.info(
            "Normalizing using the %s transform by default.",
            config.DEFAULT_NORMALIZATION,
        )
        method = config.DEFAULT_NORMALIZATION
    resolved = resolve_normalization_method(method)

    values, template = as_float_matrix(matrix)
    n_rows, n_cols = values.shape
    train = _validate_train_indices(train_indices, n_rows, resolved)
    reference = values if train is None else values[train, :]

    out = np.empty_like(values)
    for i in range(n_cols):
        out[:, i] = _transform_column(resolved, values[:, i], reference[:, i], i)

    return restore_container(out, template)
