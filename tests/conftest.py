"""
Shared fixtures for chart tests.

Text measurement is replaced by a fixed-ratio fake so font sizes can be
computed by hand: a string of ``n`` characters at size ``s`` measures
``0.6 * n * s`` wide and ``1.2 * s`` high.
"""

from __future__ import annotations

import pytest

from sizing.measure import TextExtent


class FixedRatioMeasurer:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str, int]] = []

    def measure(self, text: str, font_family: str, font_weight: str, size: int) -> TextExtent:
        self.calls.append((text, font_family, font_weight, size))
        return TextExtent(width=len(text) * size * 0.6, height=size * 1.2)


@pytest.fixture()
def measurer() -> FixedRatioMeasurer:
    """Fresh fake measurer for each test."""
    return FixedRatioMeasurer()
