"""
app/schemas package marker.
"""

from app.schemas.control_panel import ControlField, ControlOption, ControlPanel, ControlSection
from app.schemas.pop_kpi import (
    ComparisonWindowRequest,
    ComparisonWindowResponse,
    FiguresModel,
    RenderRequest,
    RenderResponse,
    TimeRangeModel,
)

__all__ = [
    "ComparisonWindowRequest",
    "ComparisonWindowResponse",
    "ControlField",
    "ControlOption",
    "ControlPanel",
    "ControlSection",
    "FiguresModel",
    "RenderRequest",
    "RenderResponse",
    "TimeRangeModel",
]
