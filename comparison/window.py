"""
comparison/window.py

Previous-period window resolution.

Runs before query execution: the host query pipeline uses the returned
window to fetch the "previous" result set.

Modes
-----
YEAR   shift both endpoints back one calendar year
MONTH  shift both endpoints back one calendar month
WEEK   shift both endpoints back seven days
RANGE  the contiguous window of equal duration ending at the primary start
CUSTOM the caller-supplied window

Calendar shifts clamp the day to the last day of the target month, so
2024-02-29 shifted back one year becomes 2023-02-28 and 2024-03-31
shifted back one month becomes 2024-02-29. When clamping collapses a
window, its end is placed one primary duration after the shifted start.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from comparison.errors import InvalidTimeRangeError, UnresolvedCustomWindowError


class ComparisonMode(str, Enum):
    """
    Comparison range choices.

    Values are the codes persisted by the control panel's
    ``time_comparison`` field.
    """

    YEAR = "y"
    WEEK = "w"
    MONTH = "m"
    RANGE = "r"
    CUSTOM = "c"


@dataclass(frozen=True)
class TimeRange:
    """
    Half-open time window ``[start, end)``.

    ``start`` and ``end`` are both ``date`` or both ``datetime``.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if type(self.start) is not type(self.end):
            raise InvalidTimeRangeError(
                "start and end must be of the same type; "
                f"got {type(self.start).__name__} and {type(self.end).__name__}"
            )
        try:
            ordered = self.start < self.end
        except TypeError as exc:
            # naive and timezone-aware datetimes
            raise InvalidTimeRangeError(f"start and end are not comparable: {exc}") from exc
        if not ordered:
            raise InvalidTimeRangeError(
                f"start must be before end; "
                f"got {self.start.isoformat()} >= {self.end.isoformat()}"
            )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


def resolve_comparison_window(
    mode: ComparisonMode | str,
    primary_range: TimeRange,
    custom: TimeRange | None = None,
) -> TimeRange:
    """
    Return the previous-period window for *primary_range* under *mode*.

    Parameters
    ----------
    mode:
        A :class:`ComparisonMode` or its persisted code (``"y"``, ``"w"``,
        ``"m"``, ``"r"``, ``"c"``).
    primary_range:
        Window of the current-period query.
    custom:
        Explicit previous window; required for ``CUSTOM`` and ignored
        otherwise.

    Raises
    ------
    UnresolvedCustomWindowError
        If *mode* is ``CUSTOM`` and *custom* is ``None``.
    ValueError
        If *mode* is not a recognised code.
    """
    mode = ComparisonMode(mode)

    if mode is ComparisonMode.YEAR:
        return _shift_window(primary_range, -12)
    if mode is ComparisonMode.MONTH:
        return _shift_window(primary_range, -1)
    if mode is ComparisonMode.WEEK:
        week = timedelta(days=7)
        return TimeRange(start=primary_range.start - week, end=primary_range.end - week)
    if mode is ComparisonMode.RANGE:
        return TimeRange(
            start=primary_range.start - primary_range.duration,
            end=primary_range.start,
        )

    if custom is None:
        raise UnresolvedCustomWindowError(
            "Custom comparison mode requires an explicit previous-period window."
        )
    return custom


def _shift_window(window: TimeRange, months: int) -> TimeRange:
    start = _shift_months(window.start, months)
    end = _shift_months(window.end, months)
    if end <= start:
        # both endpoints clamped onto the same month end
        end = start + window.duration
    return TimeRange(start=start, end=end)


def _shift_months(value: date, months: int) -> date:
    """Shift *value* by whole calendar months, clamping the day of month."""
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)
