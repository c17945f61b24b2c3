"""
Parameter flattening: one column per selected parameter path.
"""
import logging
from typing import Any, Iterable, Optional

from common.params import normalize_parameters
from common.paths import Path, parse_path
from common.resolver import NOT_FOUND, find_descendant, resolve
from .roots import RootKey

logger = logging.getLogger(__name__)


class ParameterFlattener:
    """
    Resolves parameters against pre-rows.

    For each pre-row and parameter, in order:
        1. If the parameter lies under a root (by root path or label),
           resolve the remainder against that root's element.
        2. Resolve the full path against the pre-row.
        3. For parameters under no root, resolve against the document.
        4. Search descendants for the path's last segment; a root-owned
           parameter only searches its root's element.
        5. Otherwise the value is None.

    Columns are keyed by the full parameter path, so "a.value" and
    "b.value" never share a column.

    Args:
        roots: Roots that produced the pre-rows.
        document: Source document for parameters outside every root.
    """

    def __init__(self, roots: Iterable[RootKey] = (), document: Any = NOT_FOUND):
        self.roots = list(roots)
        self.document = document
        self._anchors = []
        for root in self.roots:
            for anchor in (root.parsed, parse_path(root.label)):
                if anchor.valid:
                    self._anchors.append((root, anchor))

    def owner(self, path: Path) -> Optional[tuple[RootKey, Path]]:
        """Most specific root leading path, with the path relative to it."""
        best = None
        best_len = -1
        for root, anchor in self._anchors:
            if anchor.is_prefix_of(path) and len(anchor) > best_len:
                best = (root, path.relative_to(anchor))
                best_len = len(anchor)
        return best

    def resolve_value(self, row: dict, param: str) -> Any:
        path = parse_path(param)
        if not path.valid:
            return None

        owner = self.owner(path)
        if owner is not None:
            root, relative = owner
            if root.label in row:
                value = resolve(row[root.label], relative)
                if value is not NOT_FOUND:
                    return value

        value = resolve(row, path)
        if value is not NOT_FOUND:
            return value

        if owner is None and self.document is not NOT_FOUND:
            value = resolve(self.document, path)
            if value is not NOT_FOUND:
                return value

        if owner is not None:
            root, _ = owner
            if root.label not in row:
                return None
            scope = row[root.label]
        else:
            scope = row

        value = find_descendant(scope, path.terminal)
        if value is NOT_FOUND:
            return None
        logger.debug(f"Parameter '{param}' resolved by descendant search")
        return value

    def flatten(self, pre_rows: Iterable[dict], params: Iterable[Any]) -> list[dict]:
        """
        Build one flat row per pre-row.

        Args:
            pre_rows: Output of merge.
            params: Parameter paths; invalid entries are skipped.

        Returns:
            Rows keyed by full parameter path. Every row has every column.
        """
        names = normalize_parameters(params)
        return [
            {name: self.resolve_value(row, name) for name in names}
            for row in pre_rows
        ]


def flatten(
    pre_rows: Iterable[dict],
    params: Iterable[Any],
    roots: Iterable[RootKey] = (),
    document: Any = NOT_FOUND,
) -> list[dict]:
    """Convenience wrapper around ParameterFlattener.flatten."""
    return ParameterFlattener(roots, document).flatten(pre_rows, params)
