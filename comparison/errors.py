"""
comparison/errors.py

Exceptions raised while resolving comparison windows and extracting
comparison figures.
"""

from __future__ import annotations


class PopKPIError(Exception):
    """Base exception for period-over-period KPI failures."""


class MetricNotFoundError(PopKPIError, LookupError):
    """
    Raised when the selected metric index does not resolve to a column in
    the current or previous result set.

    Fatal to the render: the caller shows a visible error placeholder.
    """

    def __init__(self, message: str, *, metric_index: int, result_set: str) -> None:
        super().__init__(message)
        self.metric_index = metric_index
        self.result_set = result_set


class EmptyResultSetError(PopKPIError, ValueError):
    """
    Raised when a result set holds zero rows where one aggregate row is
    expected.

    Not fatal: the caller renders placeholders for every figure.
    """

    def __init__(self, message: str, *, result_set: str) -> None:
        super().__init__(message)
        self.result_set = result_set


class UnresolvedCustomWindowError(PopKPIError, ValueError):
    """Raised when custom comparison mode is chosen without a window."""


class InvalidTimeRangeError(PopKPIError, ValueError):
    """Raised when a time range does not satisfy ``start < end``."""
