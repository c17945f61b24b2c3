"""
Path resolution against parsed JSON values.

Resolution is a total function: a miss is reported as NOT_FOUND, which is
distinct from a resolved JSON null (None).
"""
from typing import Any

from .paths import ROOT_LABEL, parse_path


class _NotFound:
    """Sentinel for a path that does not resolve."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __reduce__(self):
        return (_NotFound, ())


NOT_FOUND = _NotFound()


def resolve(value: Any, path: Any) -> Any:
    """
    Walk path through value.

    Objects are indexed by key (numeric segments by their text), arrays by
    non-negative integer index. Anything else with segments remaining is a
    miss. Against a document that is itself an array, a leading "root"
    segment stands for the document, so "root" is the array and
    "root.0.name" walks into its first element.

    Args:
        value: Parsed JSON value.
        path: A Path or path text.

    Returns:
        The value at path, or NOT_FOUND.
    """
    path = parse_path(path)
    if not path.valid:
        return NOT_FOUND
    segments = path.segments
    if segments and segments[0] == ROOT_LABEL and isinstance(value, list):
        segments = segments[1:]

    current = value
    for segment in segments:
        if isinstance(current, dict):
            key = str(segment) if isinstance(segment, int) else segment
            if key not in current:
                return NOT_FOUND
            current = current[key]
        elif isinstance(current, list):
            if not isinstance(segment, int) or segment >= len(current):
                return NOT_FOUND
            current = current[segment]
        else:
            return NOT_FOUND
    return current


def resolve_path(document: Any, path: str) -> Any:
    """Resolve path text against a document; see resolve."""
    return resolve(document, parse_path(path))


def is_found(value: Any) -> bool:
    return value is not NOT_FOUND


def find_descendant(value: Any, key: Any) -> Any:
    """
    Depth-first search for key anywhere at or below value.

    Traversal is pre-order over nodes: an object is checked for key before
    any of its children are visited, and children are visited in insertion
    (or array) order. The first match wins.

    Args:
        value: Parsed JSON value to search.
        key: Key to look for; non-string keys are compared by their text.

    Returns:
        The value stored under the first matching key, or NOT_FOUND.
    """
    if key is None:
        return NOT_FOUND
    if not isinstance(key, str):
        key = str(key)

    stack = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            if key in node:
                return node[key]
            stack.extend(reversed(list(node.values())))
        elif isinstance(node, list):
            stack.extend(reversed(node))
    return NOT_FOUND


__all__ = ["NOT_FOUND", "resolve", "resolve_path", "is_found", "find_descendant"]
