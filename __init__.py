"""
Pathchart - chart-ready tables from JSON of unknown shape.

Subpackages:
    - discover: Skeleton, node listing and root/parameter candidates for preview
    - unfurl: Root extraction, multi-root merging and parameter flattening
    - validation: Dataset checks against chart requirements
    - charts: Renderer-ready DataFrames per graph type
    - common: Path parsing and resolution

Example:
    >>> from discover import StructureAnalyzer
    >>> from unfurl import PaneProcessor, transform_for_visualization
    >>> from validation import validate_for_visualization
"""
__version__ = "0.1.0"
