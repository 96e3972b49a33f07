"""
app/api/routers package marker.
"""

from app.api.routers.pop_kpi_router import router as pop_kpi_router

__all__ = [
    "pop_kpi_router",
]
