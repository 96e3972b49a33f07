"""
sizing/text_fit.py

Text-fit sizing engine.

Finds the largest integer font size at which a string's rendered
footprint stays inside a box. Dashboard tiles are resized live by the
host, so the search runs on every render and must never fail: an
infeasible fit degrades to the minimum size.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sizing.measure import TextMeasurer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextBox:
    """Space available to one text element, in pixels."""

    max_width: float
    max_height: float


@dataclass(frozen=True)
class FontBounds:
    """Inclusive integer font-size search range, in pixels."""

    min: int
    max: int


def fit_font_size(
    text: str,
    box: TextBox,
    font_family: str,
    font_weight: str,
    bounds: FontBounds,
    measurer: TextMeasurer,
) -> int:
    """
    Return the largest size in *bounds* at which *text* fits *box*.

    A size fits when the measured width is at most ``box.max_width`` and
    the measured height is at most ``box.max_height``.

    Edge cases
    ----------
    * Empty text returns ``bounds.max`` without measuring.
    * A non-positive box dimension returns ``bounds.min``.
    * No fitting size returns ``bounds.min``.
    * ``bounds.max < bounds.min`` collapses the range to ``bounds.min``.
    """
    low = bounds.min
    high = max(bounds.min, bounds.max)

    if not text:
        return high
    if box.max_width <= 0 or box.max_height <= 0:
        return low

    def fits(size: int) -> bool:
        extent = measurer.measure(text, font_family, font_weight, size)
        return extent.width <= box.max_width and extent.height <= box.max_height

    best: int | None = None
    while low <= high:
        mid = (low + high) // 2
        if fits(mid):
            best = mid
            low = mid + 1
        else:
            high = mid - 1

    if best is None:
        logger.debug(
            "No size in [%d, %d] fits %r in %.1fx%.1f; using the minimum",
            bounds.min,
            bounds.max,
            text,
            box.max_width,
            box.max_height,
        )
        return bounds.min
    return best
