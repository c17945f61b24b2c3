"""
Pane configuration: what one dashboard pane extracts and how it charts it.
"""
from dataclasses import dataclass, field
from typing import Any

from common.params import parameter_name
from .roots import RootKey, check_unique_labels

DEFAULT_MAX_POINTS = 20


@dataclass
class PaneConfig:
    """
    Extraction settings for one chart.

    Loaded from the stored pane record:
        {
            "graphType": "bar",
            "parameters": ["items.name", {"parameter": "items.count"}],
            "rootKeys": [{"key": "items", "path": "data.items"}],
            "maxPoints": 20          # optional, line chart sampling
        }
    """

    graph_type: str
    parameters: list[str] = field(default_factory=list)
    root_keys: list[RootKey] = field(default_factory=list)
    max_points: int = DEFAULT_MAX_POINTS

    @classmethod
    def from_dict(cls, data: Any) -> "PaneConfig":
        """
        Validate and load a pane record.

        Raises:
            ValueError: If the record is malformed.
        """
        if isinstance(data, PaneConfig):
            return data
        if not isinstance(data, dict):
            raise ValueError(f"Pane config must be a dict, got {type(data).__name__}")

        graph_type = data.get("graphType", data.get("graph_type"))
        if not isinstance(graph_type, str) or not graph_type.strip():
            raise ValueError("Pane config requires a non-empty 'graphType'")

        raw_params = data.get("parameters") or []
        if not isinstance(raw_params, list):
            raise ValueError("'parameters' must be a list")
        parameters = []
        for param in raw_params:
            name = parameter_name(param)
            if name is None:
                raise ValueError(f"Invalid parameter entry: {param!r}")
            parameters.append(name)

        raw_roots = data.get("rootKeys", data.get("root_keys")) or []
        if not isinstance(raw_roots, list):
            raise ValueError("'rootKeys' must be a list")
        root_keys = [RootKey.coerce(root) for root in raw_roots]
        check_unique_labels(root_keys)

        max_points = data.get("maxPoints", data.get("max_points", DEFAULT_MAX_POINTS))
        if isinstance(max_points, bool) or not isinstance(max_points, int) or max_points < 1:
            raise ValueError(f"'maxPoints' must be a positive integer, got {max_points!r}")

        return cls(
            graph_type=graph_type.strip().lower(),
            parameters=parameters,
            root_keys=root_keys,
            max_points=max_points,
        )

    def to_dict(self) -> dict:
        return {
            "graphType": self.graph_type,
            "parameters": list(self.parameters),
            "rootKeys": [{"key": r.label, "path": r.path} for r in self.root_keys],
            "maxPoints": self.max_points,
        }
