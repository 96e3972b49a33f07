"""
Structured render logging for the period-over-period KPI chart.

Every render emits one JSON line ``{"event": "pop_kpi.render.<outcome>", ...}``
carrying the container size and the selected metric, so degraded tiles
can be traced back to the request that produced them.
"""

from __future__ import annotations

import json
import logging
from typing import Any

RENDER_EVENT_PREFIX = "pop_kpi.render"


def log_render_event(
    logger: logging.Logger,
    level: int,
    outcome: str,
    *,
    width: float,
    height: float,
    metric_index: int,
    **fields: Any,
) -> None:
    """
    Emit the render *outcome* (``completed``, ``degraded``, ``failed``).

    Skips serialisation entirely when *level* is disabled for *logger*.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {
        "event": f"{RENDER_EVENT_PREFIX}.{outcome}",
        "box": f"{width:.0f}x{height:.0f}",
        "metric_index": metric_index,
        **fields,
    }
    logger.log(level, json.dumps(payload, default=str, sort_keys=True, ensure_ascii=False))
