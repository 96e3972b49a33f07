"""
sizing/measure.py

Text measurement backends for the text-fit sizing engine.

The sizing engine only decides; measuring rendered text is delegated to
a :class:`TextMeasurer`. :class:`PillowTextMeasurer` is the default
backend and measures with FreeType font metrics through Pillow.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

from PIL import ImageFont

logger = logging.getLogger(__name__)

_MEASURE_CACHE_SIZE = 4096


@dataclass(frozen=True)
class TextExtent:
    """Rendered footprint of a single line of text, in pixels."""

    width: float
    height: float


class TextMeasurer(Protocol):
    """
    Host text-measurement capability.

    Implementations must be side-effect free: the same arguments always
    produce the same extent.
    """

    def measure(
        self,
        text: str,
        font_family: str,
        font_weight: str,
        size: int,
    ) -> TextExtent:
        ...


class PillowTextMeasurer:
    """
    Measure text with Pillow font metrics.

    *font_files* maps ``(family, weight)`` to a TrueType/OpenType file.
    A family without a file for the requested weight falls back to its
    ``"normal"`` file, and an unknown family falls back to Pillow's
    bundled default font.

    Width is the advance length of the string; height is the font's line
    height (ascent + descent), so every string at one size has the same
    height.
    """

    def __init__(self, font_files: Mapping[tuple[str, str], str] | None = None) -> None:
        self._font_files = dict(font_files or {})

    def measure(
        self,
        text: str,
        font_family: str,
        font_weight: str,
        size: int,
    ) -> TextExtent:
        path = self._font_path(font_family, font_weight)
        return _measure(path, font_family, font_weight, size, text)

    def _font_path(self, font_family: str, font_weight: str) -> str | None:
        path = self._font_files.get((font_family, font_weight))
        if path is None:
            path = self._font_files.get((font_family, "normal"))
        return path


@lru_cache(maxsize=64)
def _load_font(path: str | None, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    if path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        logger.warning("Font file %r could not be loaded; using the default font", path)
        return ImageFont.load_default(size=size)


@lru_cache(maxsize=_MEASURE_CACHE_SIZE)
def _measure(
    path: str | None,
    font_family: str,
    font_weight: str,
    size: int,
    text: str,
) -> TextExtent:
    # family and weight are part of the cache key even when they resolve
    # to the same file
    font = _load_font(path, size)
    width = font.getlength(text)
    if isinstance(font, ImageFont.FreeTypeFont):
        ascent, descent = font.getmetrics()
        height = ascent + descent
    else:
        _, top, _, bottom = font.getbbox(text)
        height = bottom - top
    return TextExtent(width=float(width), height=float(height))
