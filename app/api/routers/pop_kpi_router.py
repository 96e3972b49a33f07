"""
app/api/routers/pop_kpi_router.py

Period-over-period KPI endpoints.

    POST /pop-kpi/render              rows + box → render tree and HTML
    POST /pop-kpi/comparison-window   comparison mode → previous window
    GET  /pop-kpi/control-panel       control-panel manifest

Render failures defined by the chart (empty result set, unknown metric)
are returned inside a 200 response; they never raise.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.control_panel import load_control_panel
from app.mappers.form_data_mapper import chart_config_from_form_data
from app.schemas.control_panel import ControlPanel
from app.schemas.pop_kpi import (
    ComparisonWindowRequest,
    ComparisonWindowResponse,
    FiguresModel,
    RenderRequest,
    RenderResponse,
    TimeRangeModel,
)
from app.services.pop_kpi_service import PopKPIService, get_pop_kpi_service
from comparison.errors import InvalidTimeRangeError, UnresolvedCustomWindowError
from layout.composer import BoxDimensions
from layout.html import render_html

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pop-kpi", tags=["pop-kpi"])


@router.post(
    "/render",
    response_model=RenderResponse,
    status_code=status.HTTP_200_OK,
)
def render_chart(
    body: RenderRequest,
    service: PopKPIService = Depends(get_pop_kpi_service),
) -> RenderResponse:
    """
    Render the chart for the supplied result sets and container size.
    """
    config = body.config
    if config is None and body.form_data is not None:
        config = chart_config_from_form_data(body.form_data)

    result = service.render(
        current_rows=body.current_rows,
        previous_rows=body.previous_rows,
        box=BoxDimensions(width=body.width, height=body.height),
        config=config,
        metric_index=body.metric_index,
        metric_names=body.metric_names,
    )
    return RenderResponse(
        tree=result.tree.to_dict(),
        html=render_html(result.tree),
        figures=FiguresModel(**result.figures.to_dict()),
        error=result.error,
        message=result.message,
    )


@router.post(
    "/comparison-window",
    response_model=ComparisonWindowResponse,
    status_code=status.HTTP_200_OK,
)
def resolve_window(
    body: ComparisonWindowRequest,
    service: PopKPIService = Depends(get_pop_kpi_service),
) -> ComparisonWindowResponse:
    """
    Resolve the previous-period window for a comparison mode.

    Raises HTTP 422 for a custom mode without a window or an empty range.
    """
    try:
        primary = body.primary.to_time_range()
        custom = body.custom.to_time_range() if body.custom is not None else None
        previous = service.resolve_window(body.mode, primary, custom)
    except (UnresolvedCustomWindowError, InvalidTimeRangeError) as exc:
        logger.info("Comparison window rejected mode=%s: %s", body.mode.name, exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    return ComparisonWindowResponse(
        mode=body.mode,
        primary=body.primary,
        previous=TimeRangeModel.from_time_range(previous),
    )


@router.get(
    "/control-panel",
    response_model=ControlPanel,
    status_code=status.HTTP_200_OK,
)
def get_control_panel() -> ControlPanel:
    """Return the control-panel manifest for the host configuration UI."""
    return load_control_panel()
