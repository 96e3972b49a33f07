"""
comparison/extraction.py

Metric extraction for the period-over-period KPI chart.

Reduces the current and previous result sets to one metric's current
value, previous value, absolute delta, and percent delta.

Policy
------
- Only the first row of each result set is read. A single aggregate row
  is expected; trailing rows are ignored and never aggregated.
- Only the metric at ``metric_index`` is displayed; other metrics are
  ignored.
- Null, boolean, non-numeric, and non-finite cells become ``None``.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any

from comparison.errors import EmptyResultSetError, MetricNotFoundError
from kpi.period_comparison import PeriodComparisonFormula

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]

_FORMULA = PeriodComparisonFormula()


@dataclass(frozen=True)
class ComparisonFigures:
    """
    The four figures shown by the chart.

    ``percent_delta`` is a fraction (``0.15`` means +15 %).
    Any figure is ``None`` when it cannot be computed.
    """

    current: float | None
    previous: float | None
    absolute_delta: float | None
    percent_delta: float | None

    @classmethod
    def empty(cls) -> "ComparisonFigures":
        return cls(current=None, previous=None, absolute_delta=None, percent_delta=None)

    def to_dict(self) -> dict[str, float | None]:
        return asdict(self)


def extract(
    current_rows: Sequence[Row],
    previous_rows: Sequence[Row],
    metric_index: int,
    metric_names: Sequence[str] | None = None,
) -> ComparisonFigures:
    """
    Derive :class:`ComparisonFigures` for the metric at *metric_index*.

    Parameters
    ----------
    current_rows:
        Result set for the current period.
    previous_rows:
        Result set for the comparison period.
    metric_index:
        Zero-based position of the displayed metric.
    metric_names:
        Selected metric names in display order. When omitted, the keys of
        each result set's first row are used in order.

    Raises
    ------
    EmptyResultSetError
        If either result set has no rows.
    MetricNotFoundError
        If *metric_index* does not resolve to a column present in both
        result sets.
    """
    if not current_rows:
        raise EmptyResultSetError("Current result set has no rows.", result_set="current")
    if not previous_rows:
        raise EmptyResultSetError("Previous result set has no rows.", result_set="previous")

    current_row = current_rows[0]
    previous_row = previous_rows[0]
    metric = _resolve_metric(
        metric_index,
        metric_names,
        {"current": current_row, "previous": previous_row},
    )

    figures = _FORMULA.calculate(
        {
            "current": _to_number(current_row[metric]),
            "previous": _to_number(previous_row[metric]),
        }
    )
    logger.debug(
        "Comparison figures metric=%r current=%s previous=%s ignored_rows=%d/%d",
        metric,
        figures["current"],
        figures["previous"],
        len(current_rows) - 1,
        len(previous_rows) - 1,
    )
    return ComparisonFigures(**figures)


def _resolve_metric(
    metric_index: int,
    metric_names: Sequence[str] | None,
    rows: Mapping[str, Row],
) -> str:
    """
    Return the column selected by *metric_index*, checked against the
    first row of every result set in *rows*.
    """
    for result_set, row in rows.items():
        columns = list(metric_names) if metric_names is not None else list(row.keys())
        if metric_index < 0 or metric_index >= len(columns):
            raise MetricNotFoundError(
                f"Metric index {metric_index} is out of range for the {result_set} "
                f"result set ({len(columns)} metric column(s)).",
                metric_index=metric_index,
                result_set=result_set,
            )

    first_row = next(iter(rows.values()))
    columns = list(metric_names) if metric_names is not None else list(first_row.keys())
    name = columns[metric_index]
    for result_set, row in rows.items():
        if name not in row:
            raise MetricNotFoundError(
                f"Metric {name!r} is missing from the {result_set} result set.",
                metric_index=metric_index,
                result_set=result_set,
            )
    return name


def _to_number(value: Any) -> float | None:
    """Coerce a result-set cell to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (numbers.Real, Decimal)):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
