"""
Structure analyzer for a single JSON document.

Builds the bounded views the preview chooser needs before any chart
exists: the skeleton, a flat node listing, the arrays that can serve as
roots and the leaf paths that can serve as parameters.
"""
from dataclasses import dataclass
from typing import Any, Optional

from common.paths import ROOT_LABEL, PathExtractor, join_path, parse_path
from common.resolver import NOT_FOUND, resolve
from .skeleton import extract_skeleton


def json_type(value: Any) -> str:
    """JSON type name of a parsed value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


@dataclass
class StructureNode:
    """One entry of the preview tree."""

    path: str
    """Full path of the node, usable as a root or parameter."""

    key: str
    """Last segment, shown as the node label."""

    type: str
    """JSON type: object, array, string, number, boolean or null."""

    depth: int
    """Nesting depth, 0 for top-level keys."""

    is_last_child: bool = False
    """Whether the node is the last sibling (drives tree connectors)."""

    size: Optional[int] = None
    """Element count for arrays, key count for objects."""

    def __repr__(self) -> str:
        size = f", size={self.size}" if self.size is not None else ""
        return f"StructureNode(path='{self.path}', type={self.type}{size})"


@dataclass
class RootCandidate:
    """An array in the document that can anchor extraction."""

    path: str
    length: int
    element_type: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"RootCandidate(path='{self.path}', length={self.length}, "
            f"element_type={self.element_type})"
        )


class StructureAnalyzer:
    """
    Analyzes the structure of one JSON document.

    Arrays are always sampled at their first element, so every view stays
    small even when the document holds thousands of records.

    Example:
        >>> analyzer = StructureAnalyzer()
        >>> doc = {"items": [{"a": 1, "b": 2}, {"a": 3, "b": 4}]}
        >>> analyzer.root_candidates(doc)
        [RootCandidate(path='items', length=2, element_type=object)]
        >>> analyzer.parameter_candidates(doc, "items")
        ['items.a', 'items.b']
    """

    def __init__(self, path_extractor: Optional[PathExtractor] = None):
        """
        Initialize StructureAnalyzer.

        Args:
            path_extractor: Extractor for leaf paths. Defaults to one that
                          treats arrays as transparent.
        """
        self.extractor = path_extractor or PathExtractor()

    def skeleton(self, document: Any) -> Any:
        return extract_skeleton(document)

    def nodes(self, document: Any) -> list[StructureNode]:
        """
        Flatten the document into preview nodes, parents before children.

        Array children are listed for the first element only, under its
        index segment (e.g. "items.0.name").
        """
        nodes: list[StructureNode] = []
        self._collect_nodes(document, "", 0, nodes)
        return nodes

    def _collect_nodes(self, data: Any, parent: str, depth: int, nodes: list) -> None:
        if isinstance(data, dict):
            entries = list(data.items())
        elif isinstance(data, list):
            entries = [(0, data[0])] if data else []
        else:
            return

        for i, (key, value) in enumerate(entries):
            path = join_path(parent, key)
            size = len(value) if isinstance(value, (dict, list)) else None
            nodes.append(StructureNode(
                path=path,
                key=str(key),
                type=json_type(value),
                depth=depth,
                is_last_child=i == len(entries) - 1,
                size=size,
            ))
            self._collect_nodes(value, path, depth + 1, nodes)

    def root_candidates(self, document: Any) -> list[RootCandidate]:
        """
        Find every array that can be selected as a root.

        When the document itself is an array it is offered first under the
        reserved "root" label. Arrays nested in the first element of an
        array of objects are offered with that element's index.
        """
        candidates: list[RootCandidate] = []
        if isinstance(document, list):
            candidates.append(self._candidate(ROOT_LABEL, document))
            if document and isinstance(document[0], dict):
                self._collect_roots(document[0], join_path(ROOT_LABEL, 0), candidates)
        else:
            self._collect_roots(document, "", candidates)
        return candidates

    def _candidate(self, path: str, value: list) -> RootCandidate:
        element_type = json_type(value[0]) if value else None
        return RootCandidate(path=path, length=len(value), element_type=element_type)

    def _collect_roots(self, data: Any, parent: str, candidates: list) -> None:
        if not isinstance(data, dict):
            return
        for key, value in data.items():
            path = join_path(parent, key)
            if isinstance(value, list):
                candidates.append(self._candidate(path, value))
                if value and isinstance(value[0], dict):
                    self._collect_roots(value[0], join_path(path, 0), candidates)
            elif isinstance(value, dict):
                self._collect_roots(value, path, candidates)

    def parameter_candidates(self, document: Any, root: Optional[str] = None) -> list[str]:
        """
        Leaf paths the user can pick as parameters.

        Args:
            document: Parsed JSON document.
            root: Root path text. When given, paths are listed under the
                  root's first element and prefixed with the root path.

        Returns:
            Parameter paths in document order.
        """
        if root is None:
            return self.extractor.extract(document)

        value = resolve(document, parse_path(root))
        if value is NOT_FOUND:
            return []
        sample = value[0] if isinstance(value, list) and value else value
        if not isinstance(sample, (dict, list)):
            return [root]
        return [f"{root}.{path}" for path in self.extractor.extract(sample)]

    def describe(self, document: Any, top_n: int = 5) -> str:
        """
        Generate a human-readable structure summary.

        Args:
            document: Parsed JSON document.
            top_n: Number of root candidates to show.

        Returns:
            Formatted string describing the structure.
        """
        nodes = self.nodes(document)
        lines = [
            f"Document type: {json_type(document)}",
            f"Nodes (sampled): {len(nodes)}",
            f"Leaf parameters: {len(self.extractor.extract(document))}",
            "",
        ]

        roots = sorted(self.root_candidates(document), key=lambda r: -r.length)
        if roots:
            lines.append("Candidate roots:")
            for i, candidate in enumerate(roots[:top_n]):
                marker = " <- LARGEST" if i == 0 else ""
                lines.append(
                    f"  {candidate.path} ({candidate.length} elements of "
                    f"{candidate.element_type or 'nothing'}){marker}"
                )
            if len(roots) > top_n:
                lines.append(f"  (+{len(roots) - top_n} more)")
        else:
            lines.append("No arrays found; the document is a single record.")

        return "\n".join(lines)
