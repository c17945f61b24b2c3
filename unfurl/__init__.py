"""
Pathchart Unfurl - JSON documents to flat chart rows.

Pipeline: roots are resolved (extract_by_roots), their elements aligned
into pre-rows (merge), and every selected parameter flattened into a
column keyed by its full path (ParameterFlattener).

Example:
    >>> from unfurl import transform_for_visualization
    >>> doc = {"items": [{"a": 1, "b": 2}, {"a": 3, "b": 4}]}
    >>> transform_for_visualization(doc, [], ["items.a", "items.b"])
    [{'items.a': 1, 'items.b': 2}, {'items.a': 3, 'items.b': 4}]
"""
from .config import PaneConfig
from .flatten import ParameterFlattener, flatten
from .merge import VALUE_KEY, identity_rows, merge, root_elements
from .pane_processor import PaneProcessor, PaneResult, transform_for_visualization
from .roots import RootKey, check_unique_labels, extract_by_roots, infer_roots

__all__ = [
    'PaneConfig',
    'ParameterFlattener',
    'flatten',
    'VALUE_KEY',
    'identity_rows',
    'merge',
    'root_elements',
    'PaneProcessor',
    'PaneResult',
    'transform_for_visualization',
    'RootKey',
    'check_unique_labels',
    'extract_by_roots',
    'infer_roots',
]
