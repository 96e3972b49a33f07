"""
tests/test_form_data_mapper.py

Pytest unit tests for control-panel form data → chart options.
"""

from __future__ import annotations

import pytest

from app.mappers.form_data_mapper import chart_config_from_form_data, comparison_mode_from_form_data
from comparison.window import ComparisonMode
from layout.config import ChartConfig, CurrencyFormat


class TestChartConfigFromFormData:
    def test_empty_form_data_gives_defaults(self) -> None:
        assert chart_config_from_form_data({}) == ChartConfig()

    def test_pixel_choice_caps_font_size(self) -> None:
        config = chart_config_from_form_data({"header_font_size": 32, "subheader_font_size": 16})
        assert config.header_max_font_size == 32
        assert config.subheader_max_font_size == 16
        assert config.header_font_size_budget == 0.4
        assert config.subheader_font_size_budget == 0.15

    def test_fraction_sets_height_budget(self) -> None:
        config = chart_config_from_form_data({"header_font_size": 0.3, "subheader_font_size": "0.1"})
        assert config.header_font_size_budget == 0.3
        assert config.subheader_font_size_budget == 0.1
        assert config.header_max_font_size is None

    @pytest.mark.parametrize("size", [None, 0, -4, "big", float("nan"), True])
    def test_unusable_sizes_are_ignored(self, size: object) -> None:
        config = chart_config_from_form_data({"header_font_size": size})
        assert config.header_font_size_budget == 0.4
        assert config.header_max_font_size is None

    def test_formats(self) -> None:
        config = chart_config_from_form_data({"y_axis_format": " ,.2f ", "percent_format": "+.1%"})
        assert config.number_format == ",.2f"
        assert config.percent_format == "+.1%"

    def test_blank_format_keeps_default(self) -> None:
        assert chart_config_from_form_data({"y_axis_format": "  "}).number_format == "SMART_NUMBER"

    def test_currency_camel_case(self) -> None:
        config = chart_config_from_form_data(
            {"currency_format": {"symbol": "EUR", "symbolPosition": "suffix"}}
        )
        assert config.currency_format == CurrencyFormat(symbol="EUR", symbol_position="suffix")

    def test_currency_snake_case(self) -> None:
        config = chart_config_from_form_data(
            {"currency_format": {"symbol": "USD", "symbol_position": "prefix"}}
        )
        assert config.currency_format == CurrencyFormat(symbol="USD")

    def test_currency_bad_position_defaults_to_prefix(self) -> None:
        config = chart_config_from_form_data(
            {"currency_format": {"symbol": "USD", "symbolPosition": "middle"}}
        )
        assert config.currency_format.symbol_position == "prefix"

    @pytest.mark.parametrize("currency", [None, "USD", {}, {"symbol": ""}])
    def test_unusable_currency_is_ignored(self, currency: object) -> None:
        assert chart_config_from_form_data({"currency_format": currency}).currency_format is None

    @pytest.mark.parametrize(
        "raw, expected",
        [(True, True), (False, False), ("true", True), ("off", False), ("maybe", False), (None, False)],
    )
    def test_bold_text(self, raw: object, expected: bool) -> None:
        assert chart_config_from_form_data({"bold_text": raw}).bold_header is expected

    def test_clip_overflow_defaults_on(self) -> None:
        assert chart_config_from_form_data({}).clip_overflow is True
        assert chart_config_from_form_data({"clip_overflow": "no"}).clip_overflow is False

    def test_unrelated_keys_are_ignored(self) -> None:
        config = chart_config_from_form_data({"metrics": ["count"], "row_limit": 10000})
        assert config == ChartConfig()


class TestComparisonModeFromFormData:
    @pytest.mark.parametrize(
        "code, expected",
        [
            ("y", ComparisonMode.YEAR),
            ("W", ComparisonMode.WEEK),
            ("m", ComparisonMode.MONTH),
            ("r", ComparisonMode.RANGE),
            ("c", ComparisonMode.CUSTOM),
        ],
    )
    def test_codes(self, code: str, expected: ComparisonMode) -> None:
        assert comparison_mode_from_form_data({"time_comparison": code}) is expected

    def test_missing_defaults_to_year(self) -> None:
        assert comparison_mode_from_form_data({}) is ComparisonMode.YEAR

    def test_unknown_defaults_to_year(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING"):
            assert comparison_mode_from_form_data({"time_comparison": "q"}) is ComparisonMode.YEAR
        assert "Unknown time_comparison" in caplog.text
