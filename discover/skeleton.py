"""Shape-only projection of a JSON document for the preview chooser."""
from typing import Any


def extract_skeleton(value: Any) -> Any:
    """
    Reduce a document to its shape.

    Objects keep every key, non-empty arrays collapse to their first
    element, empty arrays stay empty and every scalar becomes None. The
    result is bounded by the document's nesting, not by array lengths.

    Example:
        >>> extract_skeleton({"items": [{"a": 1}, {"a": 2}], "n": "x"})
        {'items': [{'a': None}], 'n': None}
    """
    if isinstance(value, dict):
        return {key: extract_skeleton(child) for key, child in value.items()}
    if isinstance(value, list):
        return [extract_skeleton(value[0])] if value else []
    return None
