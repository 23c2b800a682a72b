"""Single-column transforms used by :func:`normalize`.

Every transform receives one column as a 1-D float array that may contain
NaN. Statistics are computed on the non-missing entries only; unless stated
otherwise the missing entries stay missing in the output.

Degenerate columns follow fixed policies rather than raising:

* rescaling to the unit interval with a zero range yields NaN,
* a zero interquartile range in the quantile z-scores yields NaN,
* a zero standard deviation in the plain z-score centres the values.

Only :func:`scaled_log_column` raises, since a degenerate result there means
the input violated the positive-data assumption of the transform.
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np
from scipy.special import expit

from .. import config
from ..errors import InvariantViolationError

# =============================================================================
# Statistics on non-missing samples
# =============================================================================


def quantiles(values: np.ndarray, probabilities: Sequence[float]) -> np.ndarray:
    """Sample quantiles with the configured interpolation scheme."""
    return np.percentile(
        values, np.asarray(probabilities) * 100.0, method=config.QUANTILE_METHOD
    )


def interquartile_range(values: np.ndarray) -> float:
    if values.size == 0:
        return float("nan")
    q25, q75 = quantiles(values, (0.25, 0.75))
    return float(q75 - q25)


def sample_std(values: np.ndarray) -> float:
    """Sample standard deviation (n - 1); zero for fewer than two samples."""
    if values.size < 2:
        return 0.0
    return float(np.std(values, ddof=1))


def zscore(values: np.ndarray) -> np.ndarray:
    """Standardize ``values``; a zero standard deviation only centres them."""
    std = sample_std(values)
    if std == 0:
        std = 1.0
    return (values - np.mean(values)) / std


def robust_zscore(
    values: np.ndarray, reference: np.ndarray | None = None
) -> np.ndarray:
    """Quantile z-score: ``(x - median) / (IQR / 1.35)`` fit on ``reference``.

    The caller is responsible for checking that the reference IQR is non-zero.
    """
    if reference is None:
        reference = values
    scale = interquartile_range(reference) / config.IQR_SCALE
    return (values - np.median(reference)) / scale


def unity_rescale(values: np.ndarray) -> np.ndarray:
    """Linearly map ``values`` onto [0, 1]; NaN when the range is zero."""
    if values.size == 0:
        return values.copy()
    lo = np.min(values)
    span = np.max(values) - lo
    if not span > 0:
        return np.full_like(values, np.nan)
    return (values - lo) / span


def sigmoid(values: np.ndarray) -> np.ndarray:
    return expit(values)


# =============================================================================
# Helpers
# =============================================================================


def _apply_observed(
    column: np.ndarray, func: Callable[[np.ndarray], np.ndarray]
) -> np.ndarray:
    """Apply ``func`` to the non-missing entries of ``column``."""
    out = column.copy()
    observed = ~np.isnan(column)
    if observed.any():
        out[observed] = func(column[observed])
    return out


def _robust_sigmoid_or_nan(values: np.ndarray) -> np.ndarray:
    if interquartile_range(values) == 0:
        return np.full_like(values, np.nan)
    return sigmoid(robust_zscore(values))


def _scaled_two_ways(values: np.ndarray) -> np.ndarray:
    if interquartile_range(values) == 0:
        return unity_rescale(sigmoid(zscore(values)))
    return unity_rescale(sigmoid(robust_zscore(values)))


# =============================================================================
# Column transforms
# =============================================================================


def zscore_column(column: np.ndarray) -> np.ndarray:
    return _apply_observed(column, zscore)


def qzscore_column(column: np.ndarray) -> np.ndarray:
    """Quantile z-score; a zero IQR sets the observed entries to NaN."""

    def _transform(values: np.ndarray) -> np.ndarray:
        if interquartile_range(values) == 0:
            return np.full_like(values, np.nan)
        return robust_zscore(values)

    return _apply_observed(column, _transform)


def sigmoid_column(column: np.ndarray) -> np.ndarray:
    return _apply_observed(column, lambda values: sigmoid(zscore(values)))


def sqzscore_column(column: np.ndarray) -> np.ndarray:
    """Sigmoid of the quantile z-score."""
    return _apply_observed(column, _robust_sigmoid_or_nan)


def scaled_sigmoid_column(column: np.ndarray) -> np.ndarray:
    return _apply_observed(
        column, lambda values: unity_rescale(sigmoid(zscore(values)))
    )


def scaled_sigmoid_5q_column(column: np.ndarray) -> np.ndarray:
    """Scaled sigmoid with mean/std estimated inside the 5-95% quantile band."""

    def _transform(values: np.ndarray) -> np.ndarray:
        lo, hi = quantiles(values, config.QUANTILE_BAND)
        band = values[(values >= lo) & (values <= hi)]
        std = sample_std(band)
        if std == 0:
            return np.full_like(values, np.nan)
        return unity_rescale(sigmoid((values - np.mean(band)) / std))

    return _apply_observed(column, _transform)


def scaled_sqzscore_column(
    column: np.ndarray, train_column: np.ndarray | None = None
) -> np.ndarray:
    """Scaled sigmoid of the quantile z-score, fit on ``train_column``.

    Median and IQR come from the non-missing entries of ``train_column``
    (the full column when omitted) and are applied to every observed entry.
    A zero or undefined training IQR sets the whole column to NaN.
    """
    if train_column is None:
        train_column = column
    reference = train_column[~np.isnan(train_column)]
    iqr = interquartile_range(reference)
    if np.isnan(iqr) or iqr == 0:
        return np.full_like(column, np.nan)
    return _apply_observed(
        column,
        lambda values: unity_rescale(sigmoid(robust_zscore(values, reference))),
    )


def scaled_2ways_column(column: np.ndarray) -> np.ndarray:
    """Scaled sigmoid of the z-score (zero IQR) or of the quantile z-score."""
    return _apply_observed(column, _scaled_two_ways)


def mixed_sigmoid_column(column: np.ndarray) -> np.ndarray:
    """Like :func:`scaled_2ways_column`, but settles whole-column cases first.

    A constant column becomes zeros in every row (missing rows included) and
    an all-missing column stays missing.
    """
    observed = column[~np.isnan(column)]
    if observed.size == 0:
        return column.copy()
    if np.max(observed) == np.min(observed):
        return np.zeros_like(column)
    return _apply_observed(column, _scaled_two_ways)


def ld_scaled_column(column: np.ndarray) -> np.ndarray:
    """Linear rescale to [0, 1] followed by an outlier-aware sigmoid pass."""

    def _linear(values: np.ndarray) -> np.ndarray:
        if np.max(values) == np.min(values):
            return np.zeros_like(values)
        return unity_rescale(values)

    def _sigmoid_pass(values: np.ndarray) -> np.ndarray:
        if interquartile_range(values) == 0:
            if sample_std(values) == 0:
                return np.zeros_like(values)
            return unity_rescale(sigmoid(zscore(values)))
        return unity_rescale(sigmoid(robust_zscore(values)))

    return _apply_observed(_apply_observed(column, _linear), _sigmoid_pass)


def maxmin_column(column: np.ndarray) -> np.ndarray:
    return _apply_observed(column, unity_rescale)


def scaled_log_column(
    column: np.ndarray, column_index: int | None = None
) -> np.ndarray:
    """Unity-rescaled log of the strictly positive entries.

    Non-positive and missing entries are written as 0, the minimum of the
    output range. Intended for roughly log-normal positive data.

    Raises
    ------
    InvariantViolationError
        If the output contains NaN or has zero range (e.g. fewer than two
        distinct positive values).
    """
    out = np.zeros_like(column)
    if column.size == 0:
        return out
    positive = np.nan_to_num(column, nan=0.0) > 0
    out[positive] = unity_rescale(np.log(column[positive]))

    value_range = float(np.max(out) - np.min(out))
    if np.isnan(value_range) or value_range == 0:
        where = f" in column {column_index}" if column_index is not None else ""
        raise InvariantViolationError(
            f"scaledlog produced a degenerate output{where}: "
            f"range={value_range}, "
            f"positive_entries={int(positive.sum())}",
            column=column_index,
            value_range=value_range,
        )
    return out


def relmean_column(column: np.ndarray) -> np.ndarray:
    """Express each entry as a proportion of the column mean."""
    observed = column[~np.isnan(column)]
    if observed.size == 0:
        return column.copy()
    with np.errstate(divide="ignore", invalid="ignore"):
        return column / np.mean(observed)
