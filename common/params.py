"""Normalisation of user-selected parameter entries."""
import logging
from typing import Any, Iterable, Optional

logger = logging.getLogger(__name__)


def parameter_name(param: Any) -> Optional[str]:
    """
    Return the path text of a parameter entry.

    Stored dashboards hold parameters either as plain path strings or as
    {"parameter": "<path>"} objects. Anything else has no name.
    """
    if isinstance(param, str):
        return param
    if isinstance(param, dict) and isinstance(param.get("parameter"), str):
        return param["parameter"]
    return None


def normalize_parameters(params: Optional[Iterable[Any]]) -> list[str]:
    """Parameter names in order, skipping (and logging) invalid entries."""
    names = []
    for param in params or []:
        name = parameter_name(param)
        if name is None:
            logger.warning(f"Invalid parameter entry ignored: {param!r}")
            continue
        names.append(name)
    return names
