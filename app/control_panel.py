"""
app/control_panel.py

Control-panel manifest for the period-over-period KPI chart.

The manifest is static data validated once at load time. It is consumed
by the host configuration UI only; the chart core never reads it.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from app.schemas.control_panel import ControlPanel

FONT_SIZE_OPTIONS: tuple[dict[str, Any], ...] = (
    {"label": "Tiny", "value": 16},
    {"label": "Small", "value": 20},
    {"label": "Normal", "value": 26},
    {"label": "Large", "value": 32},
    {"label": "Huge", "value": 40},
)

COMPARISON_CHOICES: tuple[tuple[str, str], ...] = (
    ("y", "Year"),
    ("w", "Week"),
    ("m", "Month"),
    ("r", "Range"),
    ("c", "Custom"),
)

_MANIFEST: dict[str, Any] = {
    "sections": [
        {
            "label": "Time",
            "rows": [
                [
                    {
                        "name": "granularity_sqla",
                        "type": "SelectControl",
                        "label": "Time Column",
                        "description": "Temporal column the time range filters on.",
                    }
                ],
                [
                    {
                        "name": "time_range",
                        "type": "DateFilterControl",
                        "label": "Time Range",
                        "default": "No filter",
                    }
                ],
            ],
        },
        {
            "label": "Query",
            "rows": [
                [
                    {
                        "name": "cols",
                        "type": "SelectControl",
                        "label": "Columns",
                        "description": "Columns to group by",
                        "multi": True,
                    }
                ],
                [
                    {
                        "name": "metrics",
                        "type": "MetricsControl",
                        "label": "Metrics",
                        "description": "Only the first metric is displayed.",
                        "multi": True,
                        "validators": ["non_empty"],
                    }
                ],
                [
                    {
                        "name": "adhoc_filters",
                        "type": "AdhocFilterControl",
                        "label": "Filters",
                    }
                ],
                [
                    {
                        "name": "time_comparison",
                        "type": "SelectControl",
                        "label": "Range for Comparison",
                        "default": "y",
                        "choices": COMPARISON_CHOICES,
                        "clearable": False,
                    }
                ],
                [
                    {
                        "name": "row_limit",
                        "type": "SelectControl",
                        "label": "Row limit",
                        "default": 10000,
                        "validators": ["integer"],
                    }
                ],
            ],
        },
        {
            "label": "Custom Time Range",
            "rows": [
                [
                    {
                        "name": "adhoc_custom",
                        "type": "AdhocFilterControl",
                        "label": "Filters (only used with Custom selection)",
                        "description": "Time filter that defines the custom comparison window.",
                    }
                ],
            ],
        },
        {
            "label": "Chart Options",
            "rows": [
                [
                    {
                        "name": "y_axis_format",
                        "type": "SelectControl",
                        "label": "Number format",
                        "default": "SMART_NUMBER",
                        "render_trigger": True,
                    }
                ],
                [
                    {
                        "name": "currency_format",
                        "type": "CurrencyControl",
                        "label": "Currency format",
                        "render_trigger": True,
                    }
                ],
                [
                    {
                        "name": "header_font_size",
                        "type": "SelectControl",
                        "label": "Big Number Font Size",
                        "description": "Leave empty to size the number from the available space.",
                        "options": FONT_SIZE_OPTIONS,
                        "render_trigger": True,
                    }
                ],
                [
                    {
                        "name": "subheader_font_size",
                        "type": "SelectControl",
                        "label": "Subheader Font Size",
                        "description": "Leave empty to size the comparison row from the available space.",
                        "options": FONT_SIZE_OPTIONS,
                        "render_trigger": True,
                    }
                ],
                [
                    {
                        "name": "bold_text",
                        "type": "CheckboxControl",
                        "label": "Bold big number",
                        "default": False,
                        "render_trigger": True,
                    }
                ],
            ],
        },
    ]
}


@lru_cache(maxsize=1)
def load_control_panel() -> ControlPanel:
    """
    Return the validated control-panel manifest.

    Raises pydantic ``ValidationError`` if the manifest is malformed.
    """

    return ControlPanel.model_validate(_MANIFEST)
