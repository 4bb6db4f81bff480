"""Typed extraction built on path resolution."""

import logging
from typing import Any, Callable, List, Optional, Union

from . import decoders
from .models.path import Path
from .resolver import PathResolver
from .types import (
    ExtractResult,
    PathNotFoundError,
    ReshapeError,
    TypeMismatchError,
)
from .value import ABSENT, clone, is_array


class Extractor:
    """
    Typed retrieval of values by path.

    Strict methods raise ``PathNotFoundError`` when nothing is found and
    ``TypeMismatchError`` when the value cannot be decoded. ``*_try`` methods
    return an ``ExtractResult`` instead of raising, ``*_optional`` methods
    return None for a missing path.

    Extraction resolves with broadcasting: a field name applied to an array
    is applied to each element, so ``items.sale`` over an array of items
    yields the list of their ``sale`` values.
    """

    def __init__(self, resolver: Optional[PathResolver] = None,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = resolver or PathResolver(logger=self.logger)

    def extract(self, node: Any, path: Union[str, Path],
                decoder: Optional[Callable[[Any], Any]] = None) -> Any:
        """
        Extract a value, optionally decoding it.

        Args:
            node: Root value
            path: Path string or parsed Path
            decoder: Callable turning the resolved node into a Python value

        Returns:
            Decoded value, or a deep copy of the node when no decoder is given

        Raises:
            PathNotFoundError: If the path resolves to nothing
            TypeMismatchError: If the decoder rejects the value
        """
        found = self.resolver.resolve(node, path, broadcast=True)
        if found is ABSENT:
            raise PathNotFoundError("Path does not exist", path=str(path))
        if decoder is None:
            return clone(found)
        return self._decode(found, decoder, path)

    def extract_list(self, node: Any, path: Union[str, Path],
                     decoder: Optional[Callable[[Any], Any]] = None) -> List[Any]:
        """Extract an array, decoding each element."""
        found = self.resolver.resolve(node, path, broadcast=True)
        if found is ABSENT:
            raise PathNotFoundError("Path does not exist", path=str(path))
        if not is_array(found):
            raise TypeMismatchError(f"Expected array, got {type(found).__name__}", path=str(path))
        if decoder is None:
            return [clone(item) for item in found]
        return [self._decode(item, decoder, path) for item in found]

    def extract_try(self, node: Any, path: Union[str, Path],
                    decoder: Optional[Callable[[Any], Any]] = None) -> ExtractResult:
        return self._attempt(self.extract, node, path, decoder)

    def extract_list_try(self, node: Any, path: Union[str, Path],
                         decoder: Optional[Callable[[Any], Any]] = None) -> ExtractResult:
        return self._attempt(self.extract_list, node, path, decoder)

    def extract_optional(self, node: Any, path: Union[str, Path],
                         decoder: Optional[Callable[[Any], Any]] = None) -> Any:
        """Like extract, but a missing path yields None."""
        try:
            return self.extract(node, path, decoder)
        except PathNotFoundError:
            return None

    # Typed shortcuts

    def extract_string(self, node: Any, path: Union[str, Path]) -> str:
        return self.extract(node, path, decoders.as_string)

    def extract_int(self, node: Any, path: Union[str, Path]) -> int:
        return self.extract(node, path, decoders.as_int)

    def extract_float(self, node: Any, path: Union[str, Path]) -> float:
        return self.extract(node, path, decoders.as_float)

    def extract_bool(self, node: Any, path: Union[str, Path]) -> bool:
        return self.extract(node, path, decoders.as_bool)

    def extract_string_try(self, node: Any, path: Union[str, Path]) -> ExtractResult:
        return self.extract_try(node, path, decoders.as_string)

    def extract_int_try(self, node: Any, path: Union[str, Path]) -> ExtractResult:
        return self.extract_try(node, path, decoders.as_int)

    def extract_float_try(self, node: Any, path: Union[str, Path]) -> ExtractResult:
        return self.extract_try(node, path, decoders.as_float)

    def extract_bool_try(self, node: Any, path: Union[str, Path]) -> ExtractResult:
        return self.extract_try(node, path, decoders.as_bool)

    def extract_string_optional(self, node: Any, path: Union[str, Path]) -> Optional[str]:
        return self.extract_optional(node, path, decoders.as_string)

    def extract_int_optional(self, node: Any, path: Union[str, Path]) -> Optional[int]:
        return self.extract_optional(node, path, decoders.as_int)

    def extract_float_optional(self, node: Any, path: Union[str, Path]) -> Optional[float]:
        return self.extract_optional(node, path, decoders.as_float)

    def extract_bool_optional(self, node: Any, path: Union[str, Path]) -> Optional[bool]:
        return self.extract_optional(node, path, decoders.as_bool)

    def _decode(self, found: Any, decoder: Callable[[Any], Any], path: Union[str, Path]) -> Any:
        try:
            return decoder(clone(found))
        except ReshapeError:
            raise
        except (TypeError, ValueError, KeyError) as e:
            raise TypeMismatchError(f"Cannot decode value: {e}", path=str(path)) from e

    def _attempt(self, operation, node, path, decoder) -> ExtractResult:
        try:
            return ExtractResult.ok(operation(node, path, decoder))
        except (PathNotFoundError, TypeMismatchError) as e:
            self.logger.debug(f"Extraction of '{path}' failed: {e}")
            return ExtractResult.failed(e)
