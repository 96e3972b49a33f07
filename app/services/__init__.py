"""
app/services package marker.
"""

from app.services.pop_kpi_service import (
    PopKPIRenderResult,
    PopKPIService,
    get_pop_kpi_service,
)

__all__ = [
    "PopKPIRenderResult",
    "PopKPIService",
    "get_pop_kpi_service",
]
