"""
Pathchart Charts - renderer-ready frames from validated rows.
"""
from .series import (
    build_chart_frame,
    display_name,
    label_value_frame,
    line_frame,
    pie_frame,
    role_frame,
    scatter_frame,
    to_numeric,
)

__all__ = [
    'build_chart_frame',
    'display_name',
    'label_value_frame',
    'line_frame',
    'pie_frame',
    'role_frame',
    'scatter_frame',
    'to_numeric',
]
