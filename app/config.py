"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from layout.theme import Theme


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class ChartSettings:
    """
    Runtime settings for the period-over-period KPI chart.

    Font paths are optional; without them text is measured with Pillow's
    bundled default font.
    """

    font_family: str = "Inter"
    font_path: str | None = None
    bold_font_path: str | None = None
    light_font_path: str | None = None
    min_font_size: int = 8
    max_font_size: int = 240
    grid_unit: int = 4
    placeholder: str = "—"

    def font_files(self) -> dict[tuple[str, str], str]:
        """Map ``(family, weight)`` to font files for the text measurer."""
        files: dict[tuple[str, str], str] = {}
        for weight, path in (
            ("normal", self.font_path),
            ("bold", self.bold_font_path),
            ("light", self.light_font_path),
        ):
            if path:
                files[(self.font_family, weight)] = path
        return files


@lru_cache(maxsize=1)
def get_chart_settings() -> ChartSettings:
    """
    Return cached chart settings from environment variables.
    """

    min_font_size = max(1, _get_int_env("POP_KPI_MIN_FONT_SIZE", 8))
    return ChartSettings(
        font_family=_get_str_env("POP_KPI_FONT_FAMILY", "Inter"),
        font_path=_get_optional_str_env("POP_KPI_FONT_PATH"),
        bold_font_path=_get_optional_str_env("POP_KPI_BOLD_FONT_PATH"),
        light_font_path=_get_optional_str_env("POP_KPI_LIGHT_FONT_PATH"),
        min_font_size=min_font_size,
        max_font_size=max(min_font_size, _get_int_env("POP_KPI_MAX_FONT_SIZE", 240)),
        grid_unit=max(0, _get_int_env("POP_KPI_GRID_UNIT", 4)),
        placeholder=_get_str_env("POP_KPI_PLACEHOLDER", "—"),
    )


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """
    Return the chart theme derived from :func:`get_chart_settings`.
    """

    settings = get_chart_settings()
    return Theme(
        font_family=settings.font_family,
        grid_unit=settings.grid_unit,
        min_font_size=settings.min_font_size,
        max_font_size=settings.max_font_size,
    )
