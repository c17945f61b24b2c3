"""
Pathchart Validation - dataset checks before chart rendering.

Reports why a flattened dataset cannot be charted as one readable message.
"""
from .validator import (
    CHART_REQUIREMENTS,
    NO_DATA_MESSAGE,
    NO_PARAMETERS_MESSAGE,
    ChartRequirement,
    DatasetValidator,
    ValidationResult,
    register_chart_requirement,
    validate_for_visualization,
)

__all__ = [
    'CHART_REQUIREMENTS',
    'NO_DATA_MESSAGE',
    'NO_PARAMETERS_MESSAGE',
    'ChartRequirement',
    'DatasetValidator',
    'ValidationResult',
    'register_chart_requirement',
    'validate_for_visualization',
]
