"""
layout/composer.py

Layout composer for the period-over-period KPI chart.

Arranges the big current value above a three-column comparison row
(previous value, absolute delta, percent delta) and sizes both rows to
the container with the text-fit sizing engine.

Layout
------
Region A  big number   box.width       x box.height * header budget
Region B  three cells  box.width / 3   x box.height * subheader budget

The three cells always split the width equally. Cell text that still
overflows at the minimum font size is clipped when ``clip_overflow`` is
set; this is a known limitation of the chart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from comparison.extraction import ComparisonFigures
from layout.config import ChartConfig
from layout.formatting import format_number, format_percent
from layout.render_tree import RenderNode, node
from layout.theme import Theme
from sizing.measure import PillowTextMeasurer, TextMeasurer
from sizing.text_fit import FontBounds, TextBox, fit_font_size

logger = logging.getLogger(__name__)

_ERROR_FONT_BUDGET = 0.15


@dataclass(frozen=True)
class BoxDimensions:
    """Container size in pixels, supplied by the host on every layout pass."""

    width: float
    height: float


def compose(
    figures: ComparisonFigures,
    box: BoxDimensions,
    config: ChartConfig | None = None,
    theme: Theme | None = None,
    measurer: TextMeasurer | None = None,
) -> RenderNode:
    """
    Build the render tree for *figures* inside *box*.

    No state is kept between calls; identical arguments produce equal
    trees.
    """
    config = config or ChartConfig()
    theme = theme or Theme()
    measurer = measurer or PillowTextMeasurer()

    big_value = format_number(
        figures.current,
        config.number_format,
        config.currency_format,
        config.placeholder,
    )
    cell_texts = (
        ("previous", f"#: {_format_value(figures.previous, config)}"),
        ("absolute_delta", f"Δ: {_format_value(figures.absolute_delta, config)}"),
        (
            "percent_delta",
            f"%: {format_percent(figures.percent_delta, config.percent_format, config.placeholder)}",
        ),
    )

    header_weight = theme.weight_bold if config.bold_header else theme.weight_normal
    header_size = fit_font_size(
        big_value,
        TextBox(max_width=box.width, max_height=box.height * config.header_font_size_budget),
        theme.font_family,
        header_weight,
        FontBounds(
            min=theme.min_font_size,
            max=config.header_max_font_size or theme.max_font_size,
        ),
        measurer,
    )

    cell_width = box.width / 3
    cell_box = TextBox(
        max_width=cell_width,
        max_height=box.height * config.subheader_font_size_budget,
    )
    cell_bounds = FontBounds(
        min=theme.min_font_size,
        max=config.subheader_max_font_size or theme.max_font_size,
    )
    subheader_size = min(
        fit_font_size(text, cell_box, theme.font_family, theme.weight_light, cell_bounds, measurer)
        for _, text in cell_texts
    )
    logger.debug(
        "Composed PopKPI box=%.0fx%.0f header_size=%d subheader_size=%d",
        box.width,
        box.height,
        header_size,
        subheader_size,
    )

    overflow = "hidden" if config.clip_overflow else "visible"
    cells = [
        node(
            "comparison_value",
            text=text,
            key=key,
            display="table-cell",
            width=cell_width,
            font_size=subheader_size,
            font_weight=theme.weight_light,
            text_align="center",
            white_space="nowrap",
            overflow=overflow,
        )
        for key, text in cell_texts
    ]

    return _container(
        box,
        theme,
        node(
            "big_value",
            text=big_value,
            key="current",
            font_size=header_size,
            font_weight=header_weight,
            text_align="center",
        ),
        node(
            "comparison_table",
            node("comparison_row", *cells, display="table-row"),
            width="100%",
            display="table",
        ),
    )


def compose_error(
    message: str,
    box: BoxDimensions,
    theme: Theme | None = None,
    measurer: TextMeasurer | None = None,
) -> RenderNode:
    """
    Build a render tree that shows *message* in place of the chart.
    """
    theme = theme or Theme()
    measurer = measurer or PillowTextMeasurer()

    size = fit_font_size(
        message,
        TextBox(max_width=box.width, max_height=box.height * _ERROR_FONT_BUDGET),
        theme.font_family,
        theme.weight_normal,
        FontBounds(min=theme.min_font_size, max=theme.max_font_size),
        measurer,
    )
    return _container(
        box,
        theme,
        node(
            "error",
            text=message,
            font_size=size,
            font_weight=theme.weight_normal,
            color=theme.error_color,
            text_align="center",
            overflow="hidden",
        ),
    )


def _format_value(value: float | None, config: ChartConfig) -> str:
    return format_number(value, config.number_format, config.currency_format, config.placeholder)


def _container(box: BoxDimensions, theme: Theme, *children: RenderNode) -> RenderNode:
    return node(
        "container",
        *children,
        font_family=theme.font_family,
        position="relative",
        display="flex",
        flex_direction="column",
        justify_content="center",
        padding=theme.padding,
        border_radius=theme.border_radius,
        width=box.width,
        height=box.height,
    )
