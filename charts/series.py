"""
Chart shaping: validated rows to renderer-ready DataFrames.

Parameters take the roles their graph type registers, by position:
    - bar/pie: label, value
    - line:    x, then every other parameter is a y-series
    - scatter: x, y, then an optional size and an optional point label
"""
import logging
import math
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd

from common.paths import parse_path
from validation.validator import CHART_REQUIREMENTS

logger = logging.getLogger(__name__)

DEFAULT_MAX_POINTS = 20
LABEL_LENGTH = 20
# Numbers above this on the x axis are read as epoch timestamps.
EPOCH_THRESHOLD = 1_000_000_000


def display_name(param: str, roots: Iterable = ()) -> str:
    """
    Short label for a parameter: its last segment below its root.

    Example:
        >>> display_name("data.items.price", [RootKey("items", "data.items")])
        'price'
    """
    for root in roots:
        anchor = root.parsed
        path = parse_path(param)
        if anchor.is_prefix_of(path) and len(path) > len(anchor):
            return str(path.relative_to(anchor).terminal)
    terminal = parse_path(param).terminal
    return str(terminal) if terminal is not None else str(param)


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return np.nan
    return np.nan


def to_numeric(series: pd.Series, default: float) -> pd.Series:
    """Numeric view of a column; anything non-numeric becomes default."""
    numeric = series.map(_to_number).astype("float64")
    return numeric.replace([np.inf, -np.inf], np.nan).fillna(default)


def _to_timestamp(value: Any):
    if not isinstance(value, str):
        return pd.NaT
    try:
        return pd.to_datetime(value, utc=True, format="ISO8601")
    except (ValueError, TypeError, OverflowError):
        return pd.NaT


def _column(rows: list, param: str) -> pd.Series:
    return pd.Series(
        [row.get(param) if isinstance(row, dict) else None for row in rows],
        dtype=object,
    )


def _label(value: Any, index: int, truncate: bool) -> Any:
    if value is None or value == "":
        return f"Item {index}"
    if isinstance(value, str):
        return value[:LABEL_LENGTH] if truncate else value
    return str(value)


def label_value_frame(rows: list, params: list, truncate: bool = True) -> pd.DataFrame:
    """name/value frame for bar charts (missing labels become 'Item <i>')."""
    labels = _column(rows, params[0])
    frame = pd.DataFrame({
        "name": [_label(v, i, truncate) for i, v in enumerate(labels)],
        "value": to_numeric(_column(rows, params[1]), 0.0),
    })
    frame["name"] = frame["name"].astype("string[pyarrow]")
    return frame


def pie_frame(rows: list, params: list) -> pd.DataFrame:
    """name/value frame for pie charts; slices without a label are dropped."""
    labels = _column(rows, params[0])
    frame = pd.DataFrame({
        "name": labels,
        "value": to_numeric(_column(rows, params[1]), 0.0),
    })
    frame = frame[frame["name"].notna()].reset_index(drop=True)
    frame["name"] = frame["name"].map(str).astype("string[pyarrow]")
    return frame


def line_frame(rows: list, params: list, max_points: int = DEFAULT_MAX_POINTS) -> pd.DataFrame:
    """
    x plus one numeric column per y-series, sorted along x.

    The x axis is sorted chronologically when it looks like time (ISO date
    strings or epoch numbers), lexically when every x is a string and
    numerically otherwise. Long series are thinned to at most max_points
    by keeping every ceil(n / max_points)-th point.
    """
    x = _column(rows, params[0])
    frame = pd.DataFrame({"x": x})
    for param in params[1:]:
        frame[param] = to_numeric(_column(rows, param), 0.0)

    timestamps = x.map(_to_timestamp)
    numbers = x.map(lambda v: _to_number(v) if not isinstance(v, str) else np.nan)
    is_time_axis = bool(timestamps.notna().any()) or bool((numbers > EPOCH_THRESHOLD).any())

    if is_time_axis:
        # Both sort keys in epoch seconds; Timestamp.value is nanoseconds.
        epoch_seconds = timestamps.map(lambda t: t.value / 1e9 if t is not pd.NaT else np.nan)
        sort_key = numbers.where(numbers.notna(), epoch_seconds.astype("float64"))
        frame["x"] = [t if t is not pd.NaT else v for t, v in zip(timestamps, x)]
        frame = frame.assign(_key=sort_key).sort_values(
            "_key", kind="stable", na_position="last"
        )
    elif len(x) and all(isinstance(v, str) for v in x):
        frame = frame.sort_values("x", kind="stable")
    else:
        frame = frame.assign(_key=numbers.fillna(0.0)).sort_values("_key", kind="stable")

    frame = frame.drop(columns="_key", errors="ignore").reset_index(drop=True)

    if len(frame) > max_points:
        step = math.ceil(len(frame) / max_points)
        frame = frame.iloc[np.arange(0, len(frame), step)].reset_index(drop=True)
    return frame

def scatter_frame(rows: list, params: list) -> pd.DataFrame:
    """
    x/y points with a name per point.

    params are x, y, then an optional size parameter (column z,
    non-numeric sizes become 1) and an optional label parameter naming
    each point. Points without a label are named 'Point <i+1>'. A None
    entry skips that optional column.
    """
    size = params[2] if len(params) > 2 else None
    label = params[3] if len(params) > 3 else None
    labels = _column(rows, label) if label is not None else [None] * len(rows)

    frame = pd.DataFrame({
        "x": to_numeric(_column(rows, params[0]), 0.0),
        "y": to_numeric(_column(rows, params[1]), 0.0),
        "name": [
            f"Point {i + 1}" if value is None or value == "" else str(value)
            for i, value in enumerate(labels)
        ],
    })
    if size is not None:
        frame["z"] = to_numeric(_column(rows, size), 1.0)
    return frame


def role_frame(rows: list, roles: dict) -> pd.DataFrame:
    """
    Raw columns for a registered graph type without a built-in layout.

    A role filled by one parameter becomes a column named after the role.
    A repeated role keeps one column per parameter, named by its path.
    """
    columns = {}
    for role, params in roles.items():
        if len(params) == 1:
            columns[role] = _column(rows, params[0])
        else:
            for param in params:
                columns[param] = _column(rows, param)
    return pd.DataFrame(columns)


def _first(roles: dict, role: str) -> Optional[str]:
    params = roles.get(role)
    return params[0] if params else None


def build_chart_frame(
    rows: list,
    graph_type: str,
    params: list,
    max_points: int = DEFAULT_MAX_POINTS,
    roots: Iterable = (),
    requirements: Optional[dict] = None,
) -> pd.DataFrame:
    """
    Shape validated rows for a graph type.

    Parameters are matched to the graph type's roles by position (see
    ChartRequirement.assign_roles). pie, bar, line and scatter get their
    renderer layouts; any other registered type gets one column per role;
    an unregistered type gets the plain parameter columns. Only call this
    once validation has passed.

    The frame's attrs["labels"] maps each column to the axis or series
    label shown for it: the parameter's last segment below its root.

    Args:
        rows: Flattened rows keyed by parameter path.
        graph_type: Registered graph type, e.g. "line".
        params: Parameter paths in positional order.
        max_points: Sampling limit for line charts.
        roots: RootKeys of the pane, for display labels.
        requirements: Requirement registry. Defaults to CHART_REQUIREMENTS.

    Returns:
        DataFrame in the renderer's column layout.
    """
    rows = list(rows)
    params = list(params)
    roots = list(roots)
    registry = requirements if requirements is not None else CHART_REQUIREMENTS
    requirement = registry.get(graph_type) if isinstance(graph_type, str) else None

    def label(param):
        return display_name(param, roots) if param is not None else None

    if requirement is None:
        logger.warning(f"No chart layout for graph type '{graph_type}', using raw columns")
        frame = pd.DataFrame({param: _column(rows, param) for param in params}, columns=params)
        frame.attrs["labels"] = {param: label(param) for param in params}
        return frame

    roles = requirement.assign_roles(params)

    if graph_type in ("bar", "pie"):
        name, value = _first(roles, "label"), _first(roles, "value")
        if graph_type == "bar":
            frame = label_value_frame(rows, [name, value])
        else:
            frame = pie_frame(rows, [name, value])
        labels = {"name": label(name), "value": label(value)}

    elif graph_type == "line":
        x = _first(roles, "x")
        series = list(dict.fromkeys(roles.get("y", [])))
        frame = line_frame(rows, [x] + series, max_points)
        labels = {"x": label(x), **{param: label(param) for param in series}}

    elif graph_type == "scatter":
        x, y = _first(roles, "x"), _first(roles, "y")
        size = _first(roles, "size")
        frame = scatter_frame(rows, [x, y, size, _first(roles, "label")])
        labels = {"x": label(x), "y": label(y)}
        if size is not None:
            labels["z"] = label(size)

    else:
        frame = role_frame(rows, roles)
        labels = {
            (role if len(role_params) == 1 else param): label(param)
            for role, role_params in roles.items()
            for param in role_params
        }

    frame.attrs["labels"] = labels
    return frame
