"""
tests/test_comparison_window.py

Pytest unit tests for previous-period window resolution.

Coverage
--------
- Year / month / week calendar shifts, including leap days and
  month-end clamping
- Range mode: contiguous window of equal duration
- Custom mode with and without an explicit window
- Persisted mode codes and unknown codes
- TimeRange construction rules
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from comparison.errors import InvalidTimeRangeError, UnresolvedCustomWindowError
from comparison.window import ComparisonMode, TimeRange, resolve_comparison_window


def _range(start: date, end: date) -> TimeRange:
    return TimeRange(start=start, end=end)


class TestYearMode:
    def test_shifts_back_one_calendar_year(self) -> None:
        primary = _range(date(2024, 1, 1), date(2024, 2, 1))
        previous = resolve_comparison_window(ComparisonMode.YEAR, primary)
        assert previous == _range(date(2023, 1, 1), date(2023, 2, 1))

    def test_leap_day_clamps_to_february_28(self) -> None:
        primary = _range(date(2024, 2, 29), date(2024, 3, 1))
        previous = resolve_comparison_window(ComparisonMode.YEAR, primary)
        assert previous == _range(date(2023, 2, 28), date(2023, 3, 1))

    def test_window_ending_on_leap_day_keeps_duration(self) -> None:
        primary = _range(date(2024, 2, 28), date(2024, 2, 29))
        previous = resolve_comparison_window(ComparisonMode.YEAR, primary)
        assert previous == _range(date(2023, 2, 28), date(2023, 3, 1))

    def test_preserves_time_of_day(self) -> None:
        primary = _range(datetime(2024, 6, 1, 9, 30), datetime(2024, 6, 2, 9, 30))
        previous = resolve_comparison_window(ComparisonMode.YEAR, primary)
        assert previous == _range(datetime(2023, 6, 1, 9, 30), datetime(2023, 6, 2, 9, 30))


class TestMonthMode:
    def test_shifts_back_one_calendar_month(self) -> None:
        primary = _range(date(2024, 5, 1), date(2024, 6, 1))
        previous = resolve_comparison_window(ComparisonMode.MONTH, primary)
        assert previous == _range(date(2024, 4, 1), date(2024, 5, 1))

    def test_month_end_clamps_to_shorter_month(self) -> None:
        primary = _range(date(2024, 3, 31), date(2024, 4, 30))
        previous = resolve_comparison_window(ComparisonMode.MONTH, primary)
        assert previous == _range(date(2024, 2, 29), date(2024, 3, 30))

    def test_crosses_year_boundary(self) -> None:
        primary = _range(date(2024, 1, 15), date(2024, 2, 15))
        previous = resolve_comparison_window(ComparisonMode.MONTH, primary)
        assert previous == _range(date(2023, 12, 15), date(2024, 1, 15))

    def test_collapsed_window_keeps_primary_duration(self) -> None:
        primary = _range(date(2024, 3, 30), date(2024, 3, 31))
        previous = resolve_comparison_window(ComparisonMode.MONTH, primary)
        assert previous == _range(date(2024, 2, 29), date(2024, 3, 1))


class TestWeekMode:
    def test_shifts_back_seven_days(self) -> None:
        primary = _range(date(2024, 1, 8), date(2024, 1, 15))
        previous = resolve_comparison_window(ComparisonMode.WEEK, primary)
        assert previous == _range(date(2024, 1, 1), date(2024, 1, 8))


class TestRangeMode:
    def test_previous_window_ends_at_primary_start(self) -> None:
        primary = _range(date(2024, 3, 10), date(2024, 3, 20))
        previous = resolve_comparison_window(ComparisonMode.RANGE, primary)
        assert previous == _range(date(2024, 2, 29), date(2024, 3, 10))
        assert previous.duration == timedelta(days=10)

    def test_sub_day_durations_are_preserved(self) -> None:
        primary = _range(datetime(2024, 3, 10, 12), datetime(2024, 3, 10, 18))
        previous = resolve_comparison_window(ComparisonMode.RANGE, primary)
        assert previous == _range(datetime(2024, 3, 10, 6), datetime(2024, 3, 10, 12))


class TestCustomMode:
    def test_returns_supplied_window(self) -> None:
        primary = _range(date(2024, 3, 1), date(2024, 4, 1))
        custom = _range(date(2023, 11, 1), date(2023, 11, 15))
        assert resolve_comparison_window(ComparisonMode.CUSTOM, primary, custom) == custom

    def test_missing_window_raises(self) -> None:
        primary = _range(date(2024, 3, 1), date(2024, 4, 1))
        with pytest.raises(UnresolvedCustomWindowError):
            resolve_comparison_window(ComparisonMode.CUSTOM, primary)

    def test_custom_window_is_ignored_by_other_modes(self) -> None:
        primary = _range(date(2024, 1, 1), date(2024, 2, 1))
        custom = _range(date(2020, 1, 1), date(2020, 1, 2))
        previous = resolve_comparison_window(ComparisonMode.YEAR, primary, custom)
        assert previous == _range(date(2023, 1, 1), date(2023, 2, 1))


class TestModeCodes:
    @pytest.mark.parametrize(
        "code, expected",
        [
            ("y", ComparisonMode.YEAR),
            ("w", ComparisonMode.WEEK),
            ("m", ComparisonMode.MONTH),
            ("r", ComparisonMode.RANGE),
            ("c", ComparisonMode.CUSTOM),
        ],
    )
    def test_persisted_codes_map_to_modes(self, code: str, expected: ComparisonMode) -> None:
        assert ComparisonMode(code) is expected

    def test_code_string_is_accepted(self) -> None:
        primary = _range(date(2024, 1, 1), date(2024, 2, 1))
        assert resolve_comparison_window("y", primary) == _range(date(2023, 1, 1), date(2023, 2, 1))

    def test_unknown_code_raises_value_error(self) -> None:
        primary = _range(date(2024, 1, 1), date(2024, 2, 1))
        with pytest.raises(ValueError):
            resolve_comparison_window("q", primary)


class TestTimeRange:
    def test_start_must_precede_end(self) -> None:
        with pytest.raises(InvalidTimeRangeError):
            TimeRange(start=date(2024, 1, 2), end=date(2024, 1, 1))

    def test_empty_range_is_rejected(self) -> None:
        with pytest.raises(InvalidTimeRangeError):
            TimeRange(start=date(2024, 1, 1), end=date(2024, 1, 1))

    def test_mixed_date_and_datetime_is_rejected(self) -> None:
        with pytest.raises(InvalidTimeRangeError):
            TimeRange(start=date(2024, 1, 1), end=datetime(2024, 1, 2))

    def test_naive_and_aware_datetimes_are_rejected(self) -> None:
        with pytest.raises(InvalidTimeRangeError):
            TimeRange(
                start=datetime(2024, 1, 1),
                end=datetime(2024, 1, 2, tzinfo=timezone.utc),
            )

    def test_is_frozen(self) -> None:
        window = TimeRange(start=date(2024, 1, 1), end=date(2024, 1, 2))
        with pytest.raises((AttributeError, TypeError)):
            window.start = date(2023, 1, 1)  # type: ignore[misc]
