from __future__ import annotations

from typing import Any, Tuple

import numpy as np
import pandas as pd

from ..errors import InvalidArgumentError


def as_float_matrix(data: Any) -> Tuple[np.ndarray, Any]:
    """Copy ``data`` into a 2-D float64 array.

    Parameters
    ----------
    data
        NumPy array (1-D vectors are treated as a single column), pandas
        DataFrame/Series or any nested sequence accepted by ``np.asarray``.

    Returns
    -------
    tuple[np.ndarray, Any]
        The working matrix and a template describing the original container,
        to be handed back to :func:`restore_container`.

    Raises
    ------
    InvalidArgumentError
        If the input has more than two dimensions.
    """
    if isinstance(data, pd.DataFrame):
        matrix = data.to_numpy(dtype=np.float64, copy=True)
        return matrix, data
    if isinstance(data, pd.Series):
        matrix = data.to_numpy(dtype=np.float64, copy=True).reshape(-1, 1)
        return matrix, data

    array = np.array(data, dtype=np.float64, copy=True)
    if array.ndim == 1:
        return array.reshape(-1, 1), array.shape
    if array.ndim != 2:
        raise InvalidArgumentError(
            f"Expected a 1-D or 2-D matrix, got ndim={array.ndim}."
        )
    return array, array.shape


def restore_container(matrix: np.ndarray, template: Any) -> Any:
    """Wrap a working matrix back into the caller's container type."""
    if isinstance(template, pd.DataFrame):
        return pd.DataFrame(matrix, index=template.index, columns=template.columns)
    if isinstance(template, pd.Series):
        return pd.Series(matrix[:, 0], index=template.index, name=template.name)
    return matrix.reshape(template)
