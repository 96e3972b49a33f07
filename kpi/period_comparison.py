"""
kpi/period_comparison.py

Period-over-period comparison formula.

Expected inputs
---------------
current : float | None
    Metric value for the current period.
previous : float | None
    Metric value for the comparison period.

Formulas
--------
Absolute Delta = current - previous
Percent Delta  = (current - previous) / previous

A missing operand yields None for every figure that depends on it.
A zero previous value yields None for the percent delta.
A figure that overflows to infinity yields None.
"""

from __future__ import annotations

import math
from typing import Any

_SENTINEL = None  # value stored when a figure cannot be computed


class PeriodComparisonFormula:
    """
    Deterministic comparison of two period values with safe handling of
    missing operands and division by zero.

    Stateless; no I/O or logging happens inside :meth:`calculate`.
    """

    def calculate(self, inputs: dict[str, Any]) -> dict[str, float | None]:
        """
        Compute the absolute and percent delta between two periods.

        Returns
        -------
        dict
            Keys: ``current``, ``previous``, ``absolute_delta``,
            ``percent_delta``.
        """
        current: float | None = inputs["current"]
        previous: float | None = inputs["previous"]

        return {
            "current": current,
            "previous": previous,
            "absolute_delta": _absolute_delta(current, previous),
            "percent_delta": _percent_delta(current, previous),
        }


# ---------------------------------------------------------------------------
# Pure formula functions
# ---------------------------------------------------------------------------


def _absolute_delta(current: float | None, previous: float | None) -> float | None:
    """Absolute Delta = current - previous, None when either is missing or it overflows."""
    if current is None or previous is None:
        return _SENTINEL
    delta = current - previous
    return delta if math.isfinite(delta) else _SENTINEL


def _percent_delta(current: float | None, previous: float | None) -> float | None:
    """
    Percent Delta = (current - previous) / previous, as a fraction.

    Returns None when either value is missing, previous is zero, or the
    ratio overflows (a subnormal previous value).
    """
    if current is None or previous is None or previous == 0.0:
        return _SENTINEL
    ratio = (current - previous) / previous
    return ratio if math.isfinite(ratio) else _SENTINEL
