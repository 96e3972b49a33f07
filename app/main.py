from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from pydantic import ValidationError


def _validate_env() -> None:
    """
    Validate chart environment variables and the control panel at startup.

    Raises RuntimeError listing every invalid setting so the operator can
    fix all problems in one restart cycle.

    Rules:
    - Font paths, when set, must point at existing files.
    - POP_KPI_MIN_FONT_SIZE must not exceed POP_KPI_MAX_FONT_SIZE.
    - The control-panel manifest must validate.
    """

    from app.config import load_env_files

    load_env_files()

    errors: list[str] = []

    # --- Font files -----------------------------------------------------
    for name in ("POP_KPI_FONT_PATH", "POP_KPI_BOLD_FONT_PATH", "POP_KPI_LIGHT_FONT_PATH"):
        path = os.getenv(name, "").strip()
        if path and not os.path.isfile(path):
            errors.append(f"{name}='{path}' does not point at a font file.")

    # --- Font size bounds -----------------------------------------------
    sizes: dict[str, int] = {}
    for name in ("POP_KPI_MIN_FONT_SIZE", "POP_KPI_MAX_FONT_SIZE"):
        raw = os.getenv(name, "").strip()
        if not raw:
            continue
        try:
            sizes[name] = int(raw)
        except ValueError:
            errors.append(f"{name}='{raw}' is not an integer.")
    if (
        "POP_KPI_MIN_FONT_SIZE" in sizes
        and "POP_KPI_MAX_FONT_SIZE" in sizes
        and sizes["POP_KPI_MIN_FONT_SIZE"] > sizes["POP_KPI_MAX_FONT_SIZE"]
    ):
        errors.append("POP_KPI_MIN_FONT_SIZE must not exceed POP_KPI_MAX_FONT_SIZE.")

    # --- Control panel --------------------------------------------------
    from app.control_panel import load_control_panel

    try:
        load_control_panel()
    except ValidationError as exc:
        errors.append(f"Control panel manifest is invalid: {exc}")

    if errors:
        raise RuntimeError(
            "Startup validation failed — invalid settings:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="PopKPI API",
        version="1.0.0",
    )

    from app.api.routers import pop_kpi_router

    application.include_router(pop_kpi_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    logging.getLogger(__name__).info("PopKPI API configured")
    return application


app = create_app()
