"""
layout/config.py

Chart display options consumed by the layout composer.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CurrencyFormat(BaseModel):
    """Currency decoration applied around formatted numbers."""

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    symbol: str = Field(min_length=1)
    symbol_position: Literal["prefix", "suffix"] = "prefix"


class ChartConfig(BaseModel):
    """
    Recognised display options.

    ``header_font_size_budget`` and ``subheader_font_size_budget`` are the
    fractions of the container height given to the big number and to the
    comparison row. The optional ``*_max_font_size`` values cap the font
    size search.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    header_font_size_budget: float = Field(default=0.4, gt=0.0, le=1.0)
    subheader_font_size_budget: float = Field(default=0.15, gt=0.0, le=1.0)
    bold_header: bool = False
    number_format: str = "SMART_NUMBER"
    percent_format: str = ".1%"
    currency_format: CurrencyFormat | None = None
    header_max_font_size: int | None = Field(default=None, ge=1)
    subheader_max_font_size: int | None = Field(default=None, ge=1)
    placeholder: str = "—"
    clip_overflow: bool = True
