"""
Pathchart Discover - structure preview for unknown JSON documents.

Produces the views a chooser UI needs to let a user pick roots and
parameters before any chart exists.

Example:
    >>> from discover import StructureAnalyzer, extract_skeleton
    >>>
    >>> extract_skeleton({"items": [{"a": 1}, {"a": 2}]})
    {'items': [{'a': None}]}
    >>> StructureAnalyzer().root_candidates(document)
    [RootCandidate(path='items', length=2, element_type=object)]
"""
from .analyzer import RootCandidate, StructureAnalyzer, StructureNode, json_type
from .skeleton import extract_skeleton

__all__ = [
    'RootCandidate',
    'StructureAnalyzer',
    'StructureNode',
    'extract_skeleton',
    'json_type',
]
