"""
Multi-root merging: align per-root elements into pre-rows.

A pre-row is the object parameters are resolved against. With roots, it
maps each contributing root's label to that root's element. Without
roots, it is the document element itself.
"""
import logging
from typing import Any, Mapping

from common.resolver import NOT_FOUND
from .roots import RootKey

logger = logging.getLogger(__name__)

# Key that scalar elements are wrapped under when no root is selected.
VALUE_KEY = "value"


def root_elements(value: Any) -> list:
    """
    Reduce an extracted value to the elements it contributes.

    An array contributes its elements, a missing root nothing, and any
    other value exactly itself.
    """
    if value is NOT_FOUND:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def identity_rows(document: Any) -> list[dict]:
    """Pre-rows for the whole document: objects as-is, scalars wrapped."""
    return [
        element if isinstance(element, dict) else {VALUE_KEY: element}
        for element in root_elements(document)
    ]


def merge(extracted: Mapping[RootKey, Any], document: Any = NOT_FOUND) -> list[dict]:
    """
    Merge per-root values into pre-rows by index alignment.

    Row i holds, for every root with an i-th element, that element under
    the root's label. Roots with fewer elements are simply absent from the
    later rows, so the row count is the longest root's element count.
    A root whose label repeats an earlier root's label is ignored.

    Args:
        extracted: Root to value mapping from extract_by_roots.
        document: Whole document, used when extracted is empty.

    Returns:
        Pre-rows in element order.
    """
    if not extracted:
        return identity_rows(document)

    columns = {}
    for root, value in extracted.items():
        if root.label in columns:
            logger.warning(
                f"Root '{root.label}' ({root.path}) ignored: label already used by an earlier root"
            )
            continue
        if value is NOT_FOUND:
            logger.debug(f"Root '{root.label}' ({root.path}) did not resolve")
        columns[root.label] = root_elements(value)

    length = max(len(elements) for elements in columns.values())
    rows = []
    for i in range(length):
        rows.append({
            label: elements[i]
            for label, elements in columns.items()
            if i < len(elements)
        })
    return rows
