"""Closed set of column normalization methods."""

from __future__ import annotations

from enum import Enum

from ..errors import InvalidArgumentError


class NormalizationMethod(str, Enum):
    """Named column transforms.

    Member values are the public method names, so ``NormalizationMethod("Qzscore")``
    and plain string comparisons both work.
    """

    ZSCORE = "zscore"
    QZSCORE = "Qzscore"
    SIGMOID = "sigmoid"
    SQZSCORE = "SQzscore"
    SCALED_SIGMOID = "scaledsigmoid"
    SCALED_SIGMOID_5Q = "scaledsigmoid5q"
    SCALED_SQZSCORE = "scaledSQzscore"
    SCALED_2WAYS = "scaled2ways"
    MIXED_SIGMOID = "MixedSigmoid"
    LD_SCALED = "LDscaled"
    MAXMIN = "maxmin"
    SCALED_LOG = "scaledlog"
    RELMEAN = "relmean"

    @property
    def supports_training_subset(self) -> bool:
        """Whether parameters may be fit on a row subset and applied to all rows."""
        return self is NormalizationMethod.SCALED_SQZSCORE


def resolve_normalization_method(
    method: NormalizationMethod | str,
) -> NormalizationMethod:
    """Return the enum member for ``method``.

    Raises
    ------
    InvalidArgumentError
        If ``method`` does not name a known transform (names are case-sensitive).
    """
    if isinstance(method, NormalizationMethod):
        return method
    try:
        return NormalizationMethod(method)
    except ValueError:
        supported = ", ".join(repr(m.value) for m in NormalizationMethod)
        raise InvalidArgumentError(
            f"Invalid normalization method {method!r}. Supported methods: {supported}"
        ) from None
