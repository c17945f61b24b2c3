"""
Pane processing: one fetched document to validated chart data.

Runs the whole pipeline for a dashboard pane. Roots are resolved and
merged into pre-rows, parameters flattened into columns, the rows checked
against the graph type and, when they pass, shaped for the renderer.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

import pandas as pd

from charts.series import build_chart_frame
from common.params import normalize_parameters
from validation import DatasetValidator

from .config import PaneConfig
from .flatten import ParameterFlattener
from .merge import merge
from .roots import RootKey, check_unique_labels, extract_by_roots, infer_roots

logger = logging.getLogger(__name__)


def transform_for_visualization(
    document: Any,
    roots: Iterable[Any] = (),
    params: Iterable[Any] = (),
) -> list[dict]:
    """
    Extract, merge and flatten a document into chart rows.

    Args:
        document: Parsed JSON document.
        roots: RootKeys (or stored root entries) in caller order.
        params: Parameter paths.

    Returns:
        One row per merged element, keyed by full parameter path. Never
        raises for missing or malformed paths; unresolved values are None.

    Raises:
        ValueError: If a root entry is unusable or two roots share a label.
    """
    roots = [RootKey.coerce(root) for root in roots]
    check_unique_labels(roots)
    names = normalize_parameters(params)

    if not roots and isinstance(document, dict):
        roots = infer_roots(document, names)

    extracted = extract_by_roots(document, roots)
    pre_rows = merge(extracted, document=document)
    return ParameterFlattener(roots, document).flatten(pre_rows, names)


def _cell(value: Any) -> Any:
    """Flatten container values for a tabular cell."""
    if isinstance(value, list):
        if all(isinstance(v, (str, int, float, bool)) or v is None for v in value):
            return ", ".join("" if v is None else str(v) for v in value)
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return value


@dataclass
class PaneResult:
    """Outcome of processing one document for one pane."""

    rows: list
    """Flattened rows keyed by parameter path."""

    error: Optional[str] = None
    """Validation failure shown in place of the chart."""

    frame: Optional[pd.DataFrame] = None
    """Chart-shaped data, present only when validation passed."""

    @property
    def ok(self) -> bool:
        return self.error is None


class PaneProcessor:
    """
    Processes fetched documents for one dashboard pane.

    Holds the pane configuration and the validator, and turns each document
    into a PaneResult: the flattened rows plus either the chart-shaped frame
    or the single reason the chart cannot be drawn.

    Example:
        >>> processor = PaneProcessor({
        ...     "graphType": "bar",
        ...     "parameters": ["items.name", "items.count"],
        ...     "rootKeys": ["items"],
        ... })
        >>> result = processor.process({"items": [{"name": "a", "count": 2}]})
        >>> list(result.frame["value"])
        [2.0]
    """

    def __init__(self, config: Any, validator: Optional[DatasetValidator] = None):
        """
        Initialize PaneProcessor.

        Args:
            config: PaneConfig or stored pane dict (graphType, parameters,
                    rootKeys, maxPoints).
            validator: Validator to use. Defaults to the built-in chart
                      requirements.

        Raises:
            ValueError: If config is malformed.
        """
        self.config = PaneConfig.from_dict(config)
        self.validator = validator or DatasetValidator()

    @property
    def parameters(self) -> list[str]:
        return self.config.parameters

    def transform(self, document: Any) -> list[dict]:
        return transform_for_visualization(
            document, self.config.root_keys, self.config.parameters
        )

    def validate(self, rows: list) -> Optional[str]:
        result = self.validator.check(rows, self.config.graph_type, self.config.parameters)
        for warn in result.warnings:
            logger.warning(f"Pane '{self.config.graph_type}': {warn}")
        return result.message

    def process(self, document: Any) -> PaneResult:
        """
        Run the whole pipeline for one fetched document.

        Returns:
            PaneResult with rows, and either the validation error or the
            chart-shaped frame.
        """
        rows = self.transform(document)
        error = self.validate(rows)
        if error is not None:
            logger.info(f"Pane not renderable: {error}")
            return PaneResult(rows=rows, error=error)

        frame = build_chart_frame(
            rows,
            self.config.graph_type,
            self.config.parameters,
            max_points=self.config.max_points,
            roots=self.config.root_keys,
            requirements=self.validator.requirements,
        )
        return PaneResult(rows=rows, frame=frame)

    def to_dataframe(self, rows: list) -> pd.DataFrame:
        """
        Tabular view of flattened rows, one column per parameter.

        Columns follow parameter order; container values are stringified
        and text columns use the pyarrow string dtype.
        """
        params = list(dict.fromkeys(self.config.parameters))
        df = pd.DataFrame(
            [{param: _cell(row.get(param)) for param in params} for row in rows],
            columns=params,
        )
        for col in params:
            values = df[col].dropna()
            if len(values) and all(isinstance(v, str) for v in values):
                df[col] = df[col].astype("string[pyarrow]")

        return df
