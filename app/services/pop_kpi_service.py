"""
app/services/pop_kpi_service.py

Period-over-period KPI render service.

Wires extraction → layout into a single render call and turns the chart's
defined failures into renderable output:

    EmptyResultSetError   – every figure renders as a placeholder
    MetricNotFoundError   – the chart body is replaced by an error message

Neither failure propagates to the caller, so a dashboard tile always has
something to show. Window resolution is exposed for the host query
pipeline, which runs before rendering; its errors do propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

from app.config import get_chart_settings, get_theme
from app.failure_codes import EMPTY_RESULT_SET, METRIC_NOT_FOUND
from app.logging_utils import log_render_event
from comparison.errors import EmptyResultSetError, MetricNotFoundError
from comparison.extraction import ComparisonFigures, Row, extract
from comparison.window import ComparisonMode, TimeRange, resolve_comparison_window
from layout.composer import BoxDimensions, compose, compose_error
from layout.config import ChartConfig
from layout.render_tree import RenderNode
from layout.theme import Theme
from sizing.measure import PillowTextMeasurer, TextMeasurer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PopKPIRenderResult:
    """
    Output of one render.

    ``error`` is one of :mod:`app.failure_codes` when the render was
    degraded, ``None`` otherwise. ``message`` carries the failure detail.
    """

    tree: RenderNode
    figures: ComparisonFigures
    error: str | None = None
    message: str | None = None


class PopKPIService:
    """
    Stateless render service.

    The theme and measurer are injected once; every call is independent
    of the previous one.
    """

    def __init__(
        self,
        *,
        theme: Theme | None = None,
        measurer: TextMeasurer | None = None,
        placeholder: str | None = None,
    ) -> None:
        self._theme = theme or Theme()
        self._measurer = measurer or PillowTextMeasurer()
        self._placeholder = placeholder

    def render(
        self,
        *,
        current_rows: Sequence[Row],
        previous_rows: Sequence[Row],
        box: BoxDimensions,
        config: ChartConfig | None = None,
        metric_index: int = 0,
        metric_names: Sequence[str] | None = None,
    ) -> PopKPIRenderResult:
        """
        Render the chart for two result sets inside *box*.

        Only the first row of each result set and the metric at
        *metric_index* are used.
        """
        config = self._with_placeholder(config or ChartConfig())

        try:
            figures = extract(current_rows, previous_rows, metric_index, metric_names)
        except EmptyResultSetError as exc:
            log_render_event(
                logger,
                logging.WARNING,
                "degraded",
                width=box.width,
                height=box.height,
                metric_index=metric_index,
                error=EMPTY_RESULT_SET,
                result_set=exc.result_set,
            )
            figures = ComparisonFigures.empty()
            tree = compose(figures, box, config, self._theme, self._measurer)
            return PopKPIRenderResult(
                tree=tree,
                figures=figures,
                error=EMPTY_RESULT_SET,
                message=str(exc),
            )
        except MetricNotFoundError as exc:
            log_render_event(
                logger,
                logging.WARNING,
                "failed",
                width=box.width,
                height=box.height,
                metric_index=exc.metric_index,
                error=METRIC_NOT_FOUND,
                result_set=exc.result_set,
            )
            return PopKPIRenderResult(
                tree=compose_error(str(exc), box, self._theme, self._measurer),
                figures=ComparisonFigures.empty(),
                error=METRIC_NOT_FOUND,
                message=str(exc),
            )

        tree = compose(figures, box, config, self._theme, self._measurer)
        log_render_event(
            logger,
            logging.DEBUG,
            "completed",
            width=box.width,
            height=box.height,
            metric_index=metric_index,
        )
        return PopKPIRenderResult(tree=tree, figures=figures)

    def resolve_window(
        self,
        mode: ComparisonMode | str,
        primary_range: TimeRange,
        custom: TimeRange | None = None,
    ) -> TimeRange:
        """
        Resolve the previous-period window for the host query pipeline.

        Raises
        ------
        UnresolvedCustomWindowError
            If custom mode is chosen without a window.
        """
        window = resolve_comparison_window(mode, primary_range, custom)
        logger.debug(
            "Comparison window mode=%s primary=[%s, %s) previous=[%s, %s)",
            ComparisonMode(mode).name,
            primary_range.start.isoformat(),
            primary_range.end.isoformat(),
            window.start.isoformat(),
            window.end.isoformat(),
        )
        return window

    def _with_placeholder(self, config: ChartConfig) -> ChartConfig:
        if self._placeholder is None or "placeholder" in config.model_fields_set:
            return config
        return config.model_copy(update={"placeholder": self._placeholder})


@lru_cache(maxsize=1)
def get_pop_kpi_service() -> PopKPIService:
    """
    Return the process-wide service configured from environment settings.
    """

    settings = get_chart_settings()
    return PopKPIService(
        theme=get_theme(),
        measurer=PillowTextMeasurer(settings.font_files()),
        placeholder=settings.placeholder,
    )
