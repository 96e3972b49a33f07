"""Streamlit preview for the period-over-period KPI chart."""

from __future__ import annotations

import io
from datetime import date, datetime, time, timedelta
from typing import Any

import pandas as pd
import streamlit as st

from app.control_panel import COMPARISON_CHOICES, FONT_SIZE_OPTIONS
from app.mappers.form_data_mapper import chart_config_from_form_data
from app.services.pop_kpi_service import PopKPIRenderResult, get_pop_kpi_service
from comparison.errors import InvalidTimeRangeError, UnresolvedCustomWindowError
from comparison.window import TimeRange
from layout.composer import BoxDimensions
from layout.html import render_html


@st.cache_data(show_spinner=False)
def _rows_from_csv(data: bytes) -> list[dict[str, Any]]:
    """Load CSV rows as dictionaries with empty cells mapped to None."""
    frame = pd.read_csv(io.BytesIO(data))
    frame = frame.astype(object).where(pd.notna(frame), None)
    return frame.to_dict(orient="records")


def build_preview(
    *,
    current_rows: list[dict[str, Any]],
    previous_rows: list[dict[str, Any]],
    metric_index: int,
    width: float,
    height: float,
    form_data: dict[str, Any],
) -> PopKPIRenderResult:
    """Render the chart exactly as the API would for the given inputs."""
    return get_pop_kpi_service().render(
        current_rows=current_rows,
        previous_rows=previous_rows,
        box=BoxDimensions(width=width, height=height),
        config=chart_config_from_form_data(form_data),
        metric_index=metric_index,
    )


def _day_range(start: date, end: date) -> TimeRange:
    return TimeRange(
        start=datetime.combine(start, time.min),
        end=datetime.combine(end, time.min),
    )


def _font_size_select(label: str) -> int | None:
    labels = ["Auto", *(option["label"] for option in FONT_SIZE_OPTIONS)]
    choice = st.selectbox(label, options=labels, index=0)
    for option in FONT_SIZE_OPTIONS:
        if option["label"] == choice:
            return option["value"]
    return None


def main() -> None:
    st.set_page_config(page_title="PopKPI", page_icon="Δ", layout="wide")
    service = get_pop_kpi_service()

    with st.sidebar:
        st.header("Chart Options")
        number_format = st.text_input("Number format", value="SMART_NUMBER")
        percent_format = st.text_input("Percent format", value=".1%")
        currency = st.selectbox("Currency", options=["None", "USD", "EUR", "GBP", "JPY"], index=0)
        header_font_size = _font_size_select("Big Number Font Size")
        subheader_font_size = _font_size_select("Subheader Font Size")
        bold_text = st.checkbox("Bold big number", value=False)
        clip_overflow = st.checkbox("Clip overflowing comparison text", value=True)

        st.header("Container")
        width = st.slider("Width (px)", min_value=0, max_value=1200, value=480, step=10)
        height = st.slider("Height (px)", min_value=0, max_value=800, value=240, step=10)

        st.header("Range for Comparison")
        labels = dict(COMPARISON_CHOICES)
        mode = st.selectbox(
            "Mode",
            options=list(labels),
            format_func=lambda code: labels[code],
            index=0,
        )
        today = date.today()
        primary_start = st.date_input("Primary start", value=today - timedelta(days=30))
        primary_end = st.date_input("Primary end", value=today)
        custom_range: TimeRange | None = None
        if mode == "c":
            custom_start = st.date_input("Previous start", value=today - timedelta(days=60))
            custom_end = st.date_input("Previous end", value=today - timedelta(days=30))
            try:
                custom_range = _day_range(custom_start, custom_end)
            except InvalidTimeRangeError as exc:
                st.error(str(exc))

        try:
            previous = service.resolve_window(
                mode, _day_range(primary_start, primary_end), custom_range
            )
            st.caption(
                f"Previous period: {previous.start.date().isoformat()} → "
                f"{previous.end.date().isoformat()} (end exclusive)"
            )
        except (InvalidTimeRangeError, UnresolvedCustomWindowError) as exc:
            st.error(str(exc))

    st.title("Period-over-Period KPI")

    left, right = st.columns(2)
    with left:
        current_file = st.file_uploader("Current period CSV", type=["csv"])
    with right:
        previous_file = st.file_uploader("Previous period CSV", type=["csv"])

    if current_file is None or previous_file is None:
        st.info("Upload both result sets to preview the chart.")
        return

    try:
        current_rows = _rows_from_csv(current_file.getvalue())
        previous_rows = _rows_from_csv(previous_file.getvalue())
    except (ValueError, pd.errors.ParserError) as exc:
        st.error(f"Could not load CSV: {exc}")
        return

    columns = list(current_rows[0].keys()) if current_rows else []
    metric_index = 0
    if columns:
        metric = st.selectbox("Metric", options=columns, index=0)
        metric_index = columns.index(metric)

    form_data: dict[str, Any] = {
        "y_axis_format": number_format,
        "percent_format": percent_format,
        "header_font_size": header_font_size,
        "subheader_font_size": subheader_font_size,
        "bold_text": bold_text,
        "clip_overflow": clip_overflow,
        "time_comparison": mode,
    }
    if currency != "None":
        form_data["currency_format"] = {"symbol": currency, "symbolPosition": "prefix"}

    result = build_preview(
        current_rows=current_rows,
        previous_rows=previous_rows,
        metric_index=metric_index,
        width=width,
        height=height,
        form_data=form_data,
    )
    if result.error:
        st.warning(f"{result.error}: {result.message}")

    st.markdown(render_html(result.tree), unsafe_allow_html=True)
    with st.expander("Comparison figures"):
        st.json(result.figures.to_dict())
    with st.expander("Render tree"):
        st.json(result.tree.to_dict())


if __name__ == "__main__":
    main()
