"""
layout/theme.py

Injected styling context for the chart.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """
    Host-supplied styling values.

    Passed explicitly to the layout composer instead of being read from
    ambient state, so a render can be reproduced without a live host.
    """

    font_family: str = "Inter"
    weight_light: str = "light"
    weight_normal: str = "normal"
    weight_bold: str = "bold"
    grid_unit: int = 4
    min_font_size: int = 8
    max_font_size: int = 240
    error_color: str = "#e04355"

    @property
    def padding(self) -> int:
        return self.grid_unit * 4

    @property
    def border_radius(self) -> int:
        return self.grid_unit * 2
