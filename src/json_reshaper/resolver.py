"""Path resolution against JSON values."""

import logging
from typing import Any, Optional, Sequence, Union

from .models.path import Field, Index, Path, PathElement
from .path_parser import PathParser
from .types import MalformedPathError, TypeMismatchError
from .value import ABSENT, is_array, is_object, json_equal


class PathResolver:
    """
    Resolves parsed paths against plain JSON data.

    Resolution never raises for a well-formed path: a missing member, an
    out-of-range index or an accessor applied to the wrong kind of value all
    yield ``ABSENT``.
    """

    def __init__(self, parser: Optional[PathParser] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the resolver.

        Args:
            parser: Optional PathParser instance
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.parser = parser or PathParser(self.logger)

    def resolve(self, node: Any, path: Union[str, Path], broadcast: bool = False) -> Any:
        """
        Resolve a path against a value.

        Args:
            node: Root value
            path: Path string or parsed Path
            broadcast: Apply a field accessor met at an array to every element

        Returns:
            The located value, or ABSENT
        """
        parsed = self.parser.parse(path)
        return self._walk(node, parsed.elements, broadcast)

    def _walk(self, node: Any, elements: Sequence[PathElement], broadcast: bool) -> Any:
        current = node
        for position, element in enumerate(elements):
            if current is ABSENT:
                return ABSENT

            if isinstance(element, Field):
                if is_object(current):
                    current = current.get(element.name, ABSENT)
                elif broadcast and is_array(current):
                    return self._broadcast(current, elements[position:])
                else:
                    return ABSENT
            elif isinstance(element, Index):
                if is_array(current) and element.position < len(current):
                    current = current[element.position]
                else:
                    return ABSENT
            else:
                raise TypeError(f"Unknown path element: {element!r}")

        return current

    def _broadcast(self, items: Sequence[Any], rest: Sequence[PathElement]) -> Any:
        results = []
        for item in items:
            value = self._walk(item, rest, True)
            if value is not ABSENT:
                results.append(value)

        if items and not results:
            return ABSENT
        return results

    def exists(self, node: Any, path: Union[str, Path] = "") -> bool:
        """Check whether a path resolves to a value (null included)."""
        return self.resolve(node, path) is not ABSENT

    def is_null(self, node: Any, path: Union[str, Path] = "") -> bool:
        """Check whether a path resolves to an explicit null."""
        return self.resolve(node, path) is None

    def contains(self, node: Any, expected: Any, path: Union[str, Path] = "") -> bool:
        """
        Check whether the value at a path equals or holds the expected value.

        Args:
            node: Root value
            expected: Value to look for
            path: Path string or parsed Path

        Returns:
            True if the resolved value equals ``expected`` or is an array with
            an element equal to it
        """
        try:
            found = self.resolve(node, path)
            if found is ABSENT:
                return False
            if json_equal(found, expected):
                return True
            if is_array(found):
                return any(json_equal(item, expected) for item in found)
            return False
        except TypeMismatchError:
            return False

    def write(self, target: Any, path: Union[str, Path], value: Any) -> Any:
        """
        Write a value into a mutable output tree, creating intermediates.

        Args:
            target: Output tree being built (dict or list)
            path: Destination path
            value: Value to store

        Returns:
            The target, for chaining

        Raises:
            MalformedPathError: If the path is the root path
            TypeMismatchError: If an index cannot be written
        """
        parsed = self.parser.parse(path)
        if parsed.is_root():
            raise MalformedPathError("Cannot write to the root path", path=str(parsed))

        current = target
        elements = parsed.elements
        for position, element in enumerate(elements):
            last = position == len(elements) - 1
            if last:
                self._store(current, element, value, parsed)
                break

            following = elements[position + 1]
            existing = self._fetch(current, element)
            if isinstance(following, Field) and not is_object(existing):
                if existing is not ABSENT:
                    self.logger.debug(f"Replacing {type(existing).__name__} at '{parsed}' with an object")
                existing = {}
                self._store(current, element, existing, parsed)
            elif isinstance(following, Index) and not isinstance(existing, list):
                existing = []
                self._store(current, element, existing, parsed)
            current = existing

        return target

    @staticmethod
    def _fetch(container: Any, element: PathElement) -> Any:
        if isinstance(element, Field):
            return container.get(element.name, ABSENT) if isinstance(container, dict) else ABSENT
        if isinstance(container, list) and element.position < len(container):
            return container[element.position]
        return ABSENT

    @staticmethod
    def _store(container: Any, element: PathElement, value: Any, path: Path) -> None:
        if isinstance(element, Field):
            if not isinstance(container, dict):
                raise TypeMismatchError("Cannot write a field into a non-object", path=str(path))
            container[element.name] = value
            return

        if not isinstance(container, list):
            raise TypeMismatchError("Cannot write an index into a non-array", path=str(path))
        if element.position < len(container):
            container[element.position] = value
        elif element.position == len(container):
            container.append(value)
        else:
            raise TypeMismatchError(
                f"Index {element.position} is past the end of an array of length {len(container)}",
                path=str(path),
            )
