"""
tests/test_text_fit.py

Pytest unit tests for the text-fit sizing engine.

The fixed-ratio measurer from conftest makes every size computable by
hand: ``n`` characters at size ``s`` are ``0.6 * n * s`` wide and
``1.2 * s`` high.
"""

from __future__ import annotations

import pytest

from sizing.measure import PillowTextMeasurer, TextExtent
from sizing.text_fit import FontBounds, TextBox, fit_font_size

BOUNDS = FontBounds(min=8, max=240)


def _fit(text: str, width: float, height: float, measurer, bounds: FontBounds = BOUNDS) -> int:
    return fit_font_size(text, TextBox(max_width=width, max_height=height), "Inter", "normal", bounds, measurer)


class TestFitFontSize:
    def test_height_bound(self, measurer) -> None:
        # 3 chars: width allows 166, height allows 66
        assert _fit("120", 300, 80, measurer) == 66

    def test_width_bound(self, measurer) -> None:
        # 8 chars: width allows floor(100 / 4.8) = 20
        assert _fit("%: 20.0%", 100, 30, measurer) == 20

    def test_result_fits_and_next_size_does_not(self, measurer) -> None:
        size = _fit("1,234,567", 250, 90, measurer)
        fits = measurer.measure("1,234,567", "Inter", "normal", size)
        too_big = measurer.measure("1,234,567", "Inter", "normal", size + 1)
        assert fits.width <= 250 and fits.height <= 90
        assert too_big.width > 250 or too_big.height > 90

    @pytest.mark.parametrize("text", ["1", "42.5k", "-$1,234.50", "Δ: 1.23M"])
    def test_monotonic_in_box_size(self, measurer, text: str) -> None:
        sizes = [_fit(text, width, width / 2, measurer) for width in (800, 400, 200, 100, 50, 10)]
        assert sizes == sorted(sizes, reverse=True)

    @pytest.mark.parametrize("width, height", [(1, 1), (50, 5), (1000, 1000), (400, 30)])
    def test_result_within_bounds(self, measurer, width: float, height: float) -> None:
        size = _fit("12,345", width, height, measurer)
        assert BOUNDS.min <= size <= BOUNDS.max

    def test_large_box_hits_max(self, measurer) -> None:
        assert _fit("1", 10_000, 10_000, measurer) == 240

    def test_infeasible_returns_min(self, measurer) -> None:
        assert _fit("a long string that cannot fit", 10, 5, measurer) == 8

    def test_empty_text_returns_max_without_measuring(self, measurer) -> None:
        assert _fit("", 100, 100, measurer) == 240
        assert measurer.calls == []

    @pytest.mark.parametrize("width, height", [(0, 100), (100, 0), (-5, 100)])
    def test_degenerate_box_returns_min(self, measurer, width: float, height: float) -> None:
        assert _fit("120", width, height, measurer) == 8
        assert measurer.calls == []

    def test_inverted_bounds_collapse_to_min(self, measurer) -> None:
        assert _fit("1", 10_000, 10_000, measurer, FontBounds(min=20, max=10)) == 20

    def test_max_caps_result(self, measurer) -> None:
        assert _fit("1", 10_000, 10_000, measurer, FontBounds(min=8, max=26)) == 26

    def test_deterministic(self, measurer) -> None:
        first = _fit("Δ: 20", 100, 30, measurer)
        second = _fit("Δ: 20", 100, 30, measurer)
        assert first == second

    def test_measures_logarithmically(self, measurer) -> None:
        _fit("120", 300, 80, measurer)
        assert len(measurer.calls) <= 9

    def test_passes_font_through_to_measurer(self, measurer) -> None:
        fit_font_size("1", TextBox(100, 100), "Roboto", "bold", BOUNDS, measurer)
        assert {(family, weight) for _, family, weight, _ in measurer.calls} == {("Roboto", "bold")}


class TestPillowTextMeasurer:
    def test_default_font_measures_positive_extent(self) -> None:
        extent = PillowTextMeasurer().measure("12,345", "Inter", "normal", 24)
        assert isinstance(extent, TextExtent)
        assert extent.width > 0
        assert extent.height > 0

    def test_wider_text_measures_wider(self) -> None:
        measurer = PillowTextMeasurer()
        short = measurer.measure("1", "Inter", "normal", 24)
        long = measurer.measure("1111111111", "Inter", "normal", 24)
        assert long.width > short.width

    def test_larger_size_measures_larger(self) -> None:
        measurer = PillowTextMeasurer()
        small = measurer.measure("120", "Inter", "normal", 12)
        large = measurer.measure("120", "Inter", "normal", 48)
        assert large.width > small.width

    def test_missing_font_file_falls_back(self, tmp_path) -> None:
        measurer = PillowTextMeasurer({("Inter", "normal"): str(tmp_path / "missing.ttf")})
        extent = measurer.measure("120", "Inter", "bold", 20)
        assert extent.width > 0
