"""
app/mappers/form_data_mapper.py

Mapping from persisted control-panel form data to chart options.

Form data comes from the host configuration layer and is not validated
here: unusable values fall back to the chart defaults.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from comparison.window import ComparisonMode
from layout.config import ChartConfig, CurrencyFormat

logger = logging.getLogger(__name__)

_DEFAULT_COMPARISON_MODE = ComparisonMode.YEAR


def chart_config_from_form_data(form_data: Mapping[str, Any]) -> ChartConfig:
    """
    Build a :class:`ChartConfig` from control-panel form data.

    ``header_font_size`` and ``subheader_font_size`` accept either a
    pixel choice (16, 20, 26, 32, 40), which caps the font size, or a
    fraction in ``(0, 1]``, which sets the height budget.
    """

    options: dict[str, Any] = {}

    for key, budget_field, cap_field in (
        ("header_font_size", "header_font_size_budget", "header_max_font_size"),
        ("subheader_font_size", "subheader_font_size_budget", "subheader_max_font_size"),
    ):
        size = _optional_float(form_data.get(key))
        if size is None or not math.isfinite(size) or size <= 0:
            continue
        if size <= 1:
            options[budget_field] = size
        else:
            options[cap_field] = int(size)

    number_format = _optional_str(form_data.get("y_axis_format"))
    if number_format is not None:
        options["number_format"] = number_format

    percent_format = _optional_str(form_data.get("percent_format"))
    if percent_format is not None:
        options["percent_format"] = percent_format

    currency = _currency_format(form_data.get("currency_format"))
    if currency is not None:
        options["currency_format"] = currency

    options["bold_header"] = _optional_bool(form_data.get("bold_text"), False)
    options["clip_overflow"] = _optional_bool(form_data.get("clip_overflow"), True)

    return ChartConfig(**options)


def comparison_mode_from_form_data(form_data: Mapping[str, Any]) -> ComparisonMode:
    """
    Return the comparison mode persisted under ``time_comparison``.

    Missing or unknown codes fall back to year-over-year.
    """

    raw = _optional_str(form_data.get("time_comparison"))
    if raw is None:
        return _DEFAULT_COMPARISON_MODE
    try:
        return ComparisonMode(raw.lower())
    except ValueError:
        logger.warning(
            "Unknown time_comparison %r; falling back to %s",
            raw,
            _DEFAULT_COMPARISON_MODE.name,
        )
        return _DEFAULT_COMPARISON_MODE


def _currency_format(value: object) -> CurrencyFormat | None:
    if not isinstance(value, Mapping):
        return None
    symbol = _optional_str(value.get("symbol"))
    if symbol is None:
        return None
    position = _optional_str(value.get("symbolPosition", value.get("symbol_position")))
    if position not in {"prefix", "suffix"}:
        position = "prefix"
    return CurrencyFormat(symbol=symbol, symbol_position=position)


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _optional_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _optional_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    return default
