"""Path parser for dotted/bracketed path strings."""

import logging
import re
from functools import lru_cache
from typing import List, Optional, Union

from .models.path import Field, Index, Path, PathElement
from .types import MalformedPathError


_INDEX_TOKEN = re.compile(r"[0-9]+")


class PathParser:
    """
    Parser turning path strings such as ``items[1].name`` into ``Path`` objects.

    Segments are separated by ``.``; a segment is ``name``, ``[n]``,
    ``name[n]`` or ``name[n][m]``. The empty string is the root path.
    Field names containing ``.`` or ``[`` cannot be expressed.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the path parser.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, path: Union[str, Path]) -> Path:
        """
        Parse a path string.

        Args:
            path: Path string, or an already parsed Path

        Returns:
            Parsed Path

        Raises:
            MalformedPathError: If the path string is invalid
        """
        if isinstance(path, Path):
            return path
        if not isinstance(path, str):
            raise MalformedPathError(
                f"Path must be a string, got {type(path).__name__}", path=repr(path)
            )

        parsed = _parse_cached(path)
        self.logger.debug(f"Parsed path '{path}' into {len(parsed)} elements")
        return parsed

    def is_valid(self, path: str) -> bool:
        """Check path syntax without raising."""
        try:
            self.parse(path)
            return True
        except MalformedPathError:
            return False


@lru_cache(maxsize=1024)
def _parse_cached(text: str) -> Path:
    if text == "":
        return Path((), "")

    elements: List[PathElement] = []
    for segment in text.split("."):
        if not segment:
            raise MalformedPathError("Empty path segment", path=text)
        elements.extend(_parse_segment(segment, text))

    return Path(tuple(elements), text)


def _parse_segment(segment: str, text: str) -> List[PathElement]:
    bracket = segment.find("[")
    if bracket == -1:
        if "]" in segment:
            raise MalformedPathError("Unbalanced ']' in path segment", path=text)
        return [Field(segment)]

    name, rest = segment[:bracket], segment[bracket:]
    if "]" in name:
        raise MalformedPathError("Unbalanced ']' in path segment", path=text)

    elements: List[PathElement] = [Field(name)] if name else []
    pos = 0
    while pos < len(rest):
        if rest[pos] != "[":
            raise MalformedPathError(
                f"Unexpected text '{rest[pos:]}' after array index", path=text
            )
        close = rest.find("]", pos)
        if close == -1:
            raise MalformedPathError("Unbalanced '[' in path segment", path=text)

        token = rest[pos + 1:close]
        if "[" in token:
            raise MalformedPathError("Nested '[' in array index", path=text)
        if token.startswith("-") and _INDEX_TOKEN.fullmatch(token[1:]):
            raise MalformedPathError(f"Negative array index '{token}'", path=text)
        if not _INDEX_TOKEN.fullmatch(token):
            raise MalformedPathError(f"Non-numeric array index '{token}'", path=text)

        elements.append(Index(int(token)))
        pos = close + 1

    return elements


_default_parser = PathParser()


def parse_path(path: Union[str, Path]) -> Path:
    """Parse a path with the shared module parser."""
    return _default_parser.parse(path)
