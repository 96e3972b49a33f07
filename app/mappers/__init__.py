"""
app/mappers package marker.
"""

from app.mappers.form_data_mapper import (
    chart_config_from_form_data,
    comparison_mode_from_form_data,
)

__all__ = [
    "chart_config_from_form_data",
    "comparison_mode_from_form_data",
]
