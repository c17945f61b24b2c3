"""
Dataset validation against chart requirements.

Turns missing data into exactly one user-facing message. Everything
upstream absorbs resolution misses as None; this is the only place they
surface.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from common.params import normalize_parameters

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data available for visualization"
NO_PARAMETERS_MESSAGE = "No parameters selected for visualization"


@dataclass
class ValidationResult:
    """Result of a validation operation."""
    success: bool
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)
        self.success = False

    @property
    def message(self) -> Optional[str]:
        """The first error, or None when the dataset can be rendered."""
        return self.errors[0] if self.errors else None


@dataclass(frozen=True)
class ChartRequirement:
    """
    Structural requirements of one graph type.

    roles name the parameters by position. When repeat_last is set every
    parameter past the named roles takes the last role (line y-series);
    optional_roles follow the required ones (scatter size and point label).
    """

    graph_type: str
    min_parameters: int
    roles: tuple = ()
    optional_roles: tuple = ()
    repeat_last: bool = False

    def role_of(self, index: int) -> Optional[str]:
        if index < len(self.roles):
            return self.roles[index]
        extra = index - len(self.roles)
        if extra < len(self.optional_roles):
            return self.optional_roles[extra]
        if self.repeat_last and self.roles:
            return self.roles[-1]
        return None

    def assign_roles(self, params: list) -> dict[str, list]:
        """
        Group parameters by the role their position gives them.

        Parameters past every role are dropped. Roles keep parameter order,
        so a repeated role (line y-series) lists its parameters in order.
        """
        assigned: dict[str, list] = {}
        for i, param in enumerate(params):
            role = self.role_of(i)
            if role is not None:
                assigned.setdefault(role, []).append(param)
        return assigned


CHART_REQUIREMENTS: dict[str, ChartRequirement] = {
    "pie": ChartRequirement("pie", 2, roles=("label", "value")),
    "bar": ChartRequirement("bar", 2, roles=("label", "value")),
    "line": ChartRequirement("line", 2, roles=("x", "y"), repeat_last=True),
    "scatter": ChartRequirement("scatter", 2, roles=("x", "y"), optional_roles=("size", "label")),
}


def register_chart_requirement(requirement: ChartRequirement) -> None:
    """Add or replace the requirement for a graph type."""
    CHART_REQUIREMENTS[requirement.graph_type] = requirement


class DatasetValidator:
    """
    Checks flattened rows against a graph type's requirements.

    Checks, in order: the dataset is non-empty, parameters were selected,
    the graph type's minimum parameter count is met, and every parameter
    has a column. Column presence is checked on the first row only, which
    stands in for the dataset; a column that exists with a None value is
    present (the field was chosen, its data is missing).

    Example:
        >>> validator = DatasetValidator()
        >>> validator.validate([], "pie", ["a", "b"])
        'No data available for visualization'
        >>> validator.validate([{"a": 1}], "pie", ["a"])
        'pie charts require at least 2 parameters'
    """

    def __init__(self, requirements: Optional[dict[str, ChartRequirement]] = None):
        self.requirements = requirements if requirements is not None else CHART_REQUIREMENTS
        self._last_result: Optional[ValidationResult] = None

    @property
    def last_result(self) -> Optional[ValidationResult]:
        """Get the result of the last validation operation."""
        return self._last_result

    def check(self, rows: Any, graph_type: str, params: Any) -> ValidationResult:
        """
        Validate a dataset, collecting errors and warnings.

        Args:
            rows: Flattened rows.
            graph_type: Chart kind, e.g. "bar".
            params: Selected parameter paths.

        Returns:
            ValidationResult; its message is the user-facing failure.
        """
        result = ValidationResult(success=True)
        self._last_result = result

        if not rows:
            result.add_error(NO_DATA_MESSAGE)
            return result

        names = normalize_parameters(params)
        if not names:
            result.add_error(NO_PARAMETERS_MESSAGE)
            return result

        requirement = (
            self.requirements.get(graph_type) if isinstance(graph_type, str) else None
        )
        if requirement is None:
            result.add_warning(
                f"Unknown graph type '{graph_type}'; no parameter minimum enforced"
            )
            logger.warning(f"Unknown graph type '{graph_type}'")
        elif len(names) < requirement.min_parameters:
            result.add_error(
                f"{graph_type} charts require at least "
                f"{requirement.min_parameters} parameters"
            )
            return result

        first = rows[0]
        columns = first.keys() if isinstance(first, dict) else ()
        missing = [name for name in names if name not in columns]
        if missing:
            result.add_error(f"Missing parameters in data: {', '.join(missing)}")
            return result

        for name in names:
            if all(not isinstance(row, dict) or row.get(name) is None for row in rows):
                result.add_warning(f"Column '{name}' has no values in any row")

        return result

    def validate(self, rows: Any, graph_type: str, params: Any) -> Optional[str]:
        """Return a single failure reason, or None if the rows can be charted."""
        return self.check(rows, graph_type, params).message


def validate_for_visualization(rows: Any, graph_type: str, params: Any) -> Optional[str]:
    """Module-level form of DatasetValidator.validate."""
    return DatasetValidator().validate(rows, graph_type, params)
