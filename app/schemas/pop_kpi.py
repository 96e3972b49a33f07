"""
app/schemas/pop_kpi.py

Request and response contracts for the period-over-period KPI endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from comparison.window import ComparisonMode, TimeRange
from layout.config import ChartConfig


class TimeRangeModel(BaseModel):
    """Half-open window ``[start, end)``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: datetime
    end: datetime

    def to_time_range(self) -> TimeRange:
        return TimeRange(start=self.start, end=self.end)

    @classmethod
    def from_time_range(cls, window: TimeRange) -> "TimeRangeModel":
        return cls(start=window.start, end=window.end)


class ComparisonWindowRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    mode: ComparisonMode
    primary: TimeRangeModel
    custom: TimeRangeModel | None = None


class ComparisonWindowResponse(BaseModel):
    mode: ComparisonMode
    primary: TimeRangeModel
    previous: TimeRangeModel


class RenderRequest(BaseModel):
    """
    Rows for both periods plus the container size.

    ``config`` takes precedence over ``form_data`` when both are given.
    """

    model_config = ConfigDict(extra="forbid")

    current_rows: list[dict[str, Any]]
    previous_rows: list[dict[str, Any]]
    metric_index: int = 0
    metric_names: list[str] | None = None
    width: float = Field(ge=0)
    height: float = Field(ge=0)
    form_data: dict[str, Any] | None = None
    config: ChartConfig | None = None


class FiguresModel(BaseModel):
    current: float | None
    previous: float | None
    absolute_delta: float | None
    percent_delta: float | None


class RenderResponse(BaseModel):
    tree: dict[str, Any]
    html: str
    figures: FiguresModel
    error: str | None = None
    message: str | None = None
