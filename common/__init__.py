"""Common utilities shared across pathchart modules."""
from .paths import (
    ROOT_LABEL,
    Path,
    PathExtractor,
    escape_path_segment,
    extract_paths,
    format_path,
    join_path,
    parse_path,
)
from .resolver import NOT_FOUND, find_descendant, is_found, resolve, resolve_path
from .params import normalize_parameters, parameter_name

__all__ = [
    'ROOT_LABEL',
    'Path',
    'PathExtractor',
    'escape_path_segment',
    'extract_paths',
    'format_path',
    'join_path',
    'parse_path',
    'NOT_FOUND',
    'find_descendant',
    'is_found',
    'resolve',
    'resolve_path',
    'normalize_parameters',
    'parameter_name',
]
