"""Exception types raised by the normalization and reordering routines."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Unknown method/metric name or an incompatible argument combination."""


class InvariantViolationError(RuntimeError):
    """A transform produced a degenerate result that should never occur.

    Attributes
    ----------
    column
        Index of the offending column, when the failure is column specific.
    value_range
        Range (max - min) of the offending output, if it could be computed.
    """

    def __init__(
        self,
        message: str,
        column: int | None = None,
        value_range: float | None = None,
    ) -> None:
        super().__init__(message)
        self.column = column
        self.value_range = value_range
