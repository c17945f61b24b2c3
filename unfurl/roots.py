"""
Root keys: the subtrees a user anchors extraction at.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from common.paths import Path, format_path, parse_path
from common.resolver import resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RootKey:
    """
    A labelled root path.

    The label keys the root's element in merged rows; the path locates the
    subtree in the document. An empty path means the label is the path.
    The reserved path "root" is the whole document when it is an array.
    """

    label: str
    path: str = ""

    def __post_init__(self):
        if not self.path:
            object.__setattr__(self, "path", self.label)

    @property
    def parsed(self) -> Path:
        return parse_path(self.path)

    @classmethod
    def coerce(cls, value: Any) -> "RootKey":
        """
        Build a RootKey from a stored root entry.

        Accepts a RootKey, a path string, or a mapping with "key" (or
        "label") and optional "path".

        Raises:
            ValueError: If the entry has no usable label.
        """
        if isinstance(value, RootKey):
            return value
        if isinstance(value, str) and value:
            return cls(label=value, path=value)
        if isinstance(value, dict):
            label = value.get("key", value.get("label"))
            path = value.get("path") or ""
            if isinstance(label, str) and label and isinstance(path, str):
                return cls(label=label, path=path)
        raise ValueError(f"Invalid root key: {value!r}")


def extract_by_roots(document: Any, roots: Iterable[RootKey]) -> dict[RootKey, Any]:
    """
    Slice the document into one subtree per root.

    Each root resolves independently; a root whose path misses maps to
    NOT_FOUND without affecting the others. No roots means no slicing: the
    caller uses the whole document as a single unnamed root.

    Args:
        document: Parsed JSON document.
        roots: Roots in caller order.

    Returns:
        Mapping of root to resolved value, in root order.
    """
    extracted: dict[RootKey, Any] = {}
    for root in roots:
        extracted[root] = resolve(document, root.parsed)
    return extracted


def infer_roots(document: Any, params: Iterable[str]) -> list[RootKey]:
    """
    Infer roots from parameters when none were selected.

    A parameter that walks into an array and continues with a key (as in
    "items.a" over {"items": [...]}) names every element of that array, so
    the array's path becomes an implicit root. Only the first array on
    each parameter's path counts.
    """
    roots: dict[str, RootKey] = {}
    for param in params:
        path = parse_path(param)
        if not path.valid:
            continue

        current = document
        for i, segment in enumerate(path.segments):
            if isinstance(current, list):
                if isinstance(segment, int):
                    if segment >= len(current):
                        break
                    current = current[segment]
                    continue
                prefix = format_path(path.segments[:i])
                if prefix and prefix not in roots:
                    roots[prefix] = RootKey(label=prefix, path=prefix)
                break
            if isinstance(current, dict):
                key = str(segment) if isinstance(segment, int) else segment
                if key not in current:
                    break
                current = current[key]
            else:
                break

    if roots:
        logger.debug(f"Inferred implicit roots: {list(roots)}")
    return list(roots.values())


def check_unique_labels(roots: Iterable[RootKey]) -> None:
    """
    Reject roots that share a label.

    Merged rows key each root's element by its label, so two roots with
    one label would interleave their elements in a single column.

    Raises:
        ValueError: If any label is used more than once.
    """
    labels = [root.label for root in roots]
    duplicates = sorted({label for label in labels if labels.count(label) > 1})
    if duplicates:
        raise ValueError(f"Duplicate root key labels: {duplicates}")
