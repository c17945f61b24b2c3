"""
Path parsing and path listing for JSON documents.

Paths use dot notation for nested objects and either a numeric segment or
brackets for array indices:
    - "header.action"        - nested object
    - "features.0.geometry"  - first element of an array
    - "features[0].geometry" - same path, bracket form
    - "models.gpt-3\\.5"      - key containing a literal dot

Parsing is total: malformed text produces an invalid Path which never
resolves, so callers never have to guard against parse errors.
"""
from dataclasses import dataclass
from typing import Any, Union

Segment = Union[str, int]

# Label of the whole document when the document itself is an array.
ROOT_LABEL = "root"

_ESCAPED = ("\\", ".", "[", "]")


@dataclass(frozen=True)
class Path:
    """An ordered sequence of key (str) and index (int) segments."""

    segments: tuple = ()
    valid: bool = True
    text: str = ""

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def terminal(self) -> Union[Segment, None]:
        """Last segment, or None for an empty or invalid path."""
        if not self.valid or not self.segments:
            return None
        return self.segments[-1]

    def is_prefix_of(self, other: "Path") -> bool:
        """True if every segment of self leads other (a path is its own prefix)."""
        if not (self.valid and other.valid and self.segments):
            return False
        n = len(self.segments)
        return other.segments[:n] == self.segments

    def relative_to(self, prefix: "Path") -> "Path":
        """Path of self below prefix; invalid if prefix does not lead self."""
        if not prefix.is_prefix_of(self):
            return Path((), valid=False, text=self.text)
        rest = self.segments[len(prefix.segments):]
        return Path(rest, valid=True, text=format_path(rest))


def escape_path_segment(segment: Any) -> str:
    """Escape a key so it stays one segment (dots, brackets, backslashes)."""
    text = segment if isinstance(segment, str) else str(segment)
    for ch in _ESCAPED:
        text = text.replace(ch, "\\" + ch)
    return text


def format_path(segments) -> str:
    """Render segments back to text; the inverse of parse_path."""
    return ".".join(
        str(s) if isinstance(s, int) else escape_path_segment(s)
        for s in segments
    )


def _invalid(text: Any) -> Path:
    return Path((), valid=False, text=text if isinstance(text, str) else "")


def _to_segment(chars: list, escaped: bool) -> Segment:
    text = "".join(chars)
    if not escaped and text.isascii() and text.isdigit():
        return int(text)
    return text


def parse_path(path: Any) -> Path:
    """
    Parse a textual path into a Path.

    Args:
        path: Path text such as "items.0.name" or "items[0].name". A Path is
              returned unchanged.

    Returns:
        The parsed Path. Empty segments, unclosed or non-numeric brackets,
        and non-string input all produce an invalid Path.
    """
    if isinstance(path, Path):
        return path
    if not isinstance(path, str) or not path:
        return _invalid(path)

    segments: list = []
    buf: list = []
    escaped = False
    after_bracket = False
    i = 0
    n = len(path)

    while i < n:
        ch = path[i]

        if ch == "\\":
            if after_bracket:
                return _invalid(path)
            # A trailing backslash is kept as a literal character.
            buf.append(path[i + 1] if i + 1 < n else "\\")
            escaped = True
            i += 2
            continue

        if ch == ".":
            if buf:
                segments.append(_to_segment(buf, escaped))
                buf, escaped = [], False
            elif not after_bracket:
                return _invalid(path)
            after_bracket = False
            i += 1
            if i == n:
                return _invalid(path)
            continue

        if ch == "[":
            close = path.find("]", i)
            if close == -1:
                return _invalid(path)
            if buf:
                segments.append(_to_segment(buf, escaped))
                buf, escaped = [], False
            elif i > 0 and path[i - 1] == ".":
                return _invalid(path)
            index = path[i + 1:close].strip()
            if not (index.isascii() and index.isdigit()):
                return _invalid(path)
            segments.append(int(index))
            after_bracket = True
            i = close + 1
            continue

        if ch == "]" or after_bracket:
            return _invalid(path)

        buf.append(ch)
        i += 1

    if buf:
        segments.append(_to_segment(buf, escaped))

    if not segments:
        return _invalid(path)
    return Path(tuple(segments), valid=True, text=path)


def join_path(prefix: str, segment: Segment) -> str:
    """Append one raw segment to an already formatted path."""
    part = str(segment) if isinstance(segment, int) else escape_path_segment(segment)
    return f"{prefix}.{part}" if prefix else part


class PathExtractor:
    """
    Lists the leaf paths of a JSON document, in document order.

    By default arrays are transparent: "items.sku" names the sku of every
    element of items, which is how parameters are chosen before any root
    is selected. With include_array_indices each element gets its own
    index segment ("items.0.sku", "items.1.sku").

    Example:
        >>> extractor = PathExtractor()
        >>> extractor.extract({"header": {"action": "x"}, "items": [{"sku": "A"}]})
        ['header.action', 'items.sku']
    """

    def __init__(self, include_array_indices: bool = False):
        self.include_array_indices = include_array_indices

    def extract(self, document: Any) -> list[str]:
        """
        Extract all leaf paths from a JSON document.

        Args:
            document: Parsed JSON value.

        Returns:
            Unique leaf paths, first occurrence order.
        """
        paths: dict[str, None] = {}
        self._extract_recursive(document, "", paths)
        return list(paths)

    def _extract_recursive(self, data: Any, current_path: str, paths: dict) -> None:
        if isinstance(data, dict):
            for key, value in data.items():
                new_path = join_path(current_path, key)
                if isinstance(value, (dict, list)):
                    self._extract_recursive(value, new_path, paths)
                else:
                    paths[new_path] = None

        elif isinstance(data, list):
            if not data:
                # Empty array - still record the path
                if current_path:
                    paths[current_path] = None
                return

            for i, item in enumerate(data):
                item_path = (
                    join_path(current_path, i) if self.include_array_indices
                    else current_path
                )
                if isinstance(item, (dict, list)):
                    self._extract_recursive(item, item_path, paths)
                elif item_path:
                    paths[item_path] = None

        elif current_path:
            paths[current_path] = None


def extract_paths(document: Any, include_array_indices: bool = False) -> list[str]:
    """Convenience wrapper around PathExtractor.extract."""
    return PathExtractor(include_array_indices=include_array_indices).extract(document)
