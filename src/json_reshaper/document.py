"""Json facade: one immutable JSON value plus every query and rewrite on it."""

import logging
from typing import Any, Callable, Iterable, List, Optional, Union

from .extractor import Extractor
from .models.path import Path
from .models.rules import TransformationConfig
from .parser import JSONParser
from .processors import FilterProcessor, TransformProcessor, TranslateProcessor
from .resolver import PathResolver
from .types import ExtractResult, ValueKind
from .value import ABSENT, clone, json_equal, kind_of


PathLike = Union[str, Path]

logger = logging.getLogger(__name__)

# Processors hold no per-call state and are shared by every document
_resolver = PathResolver(logger=logger)
_extractor = Extractor(_resolver, logger)
_transformer = TransformProcessor(_resolver, logger)
_translator = TranslateProcessor(_transformer, logger)
_filter = FilterProcessor(logger)
_parser = JSONParser(logger=logger)


class Json:
    """
    Immutable JSON value.

    Wraps plain JSON data (or ``ABSENT``) and never mutates it: indexing,
    ``transform``, ``translate`` and ``only`` all return new documents.

    Example:
        >>> doc = Json.parse('{"location": {"city": "Vilnius"}}')
        >>> doc.extract_string("location.city")
        'Vilnius'
        >>> doc["location.postCode"].exists()
        False
    """

    __slots__ = ("_node",)

    def __init__(self, node: Any = ABSENT):
        kind_of(node)
        self._node = node

    @classmethod
    def parse(cls, json_string: str) -> "Json":
        """Parse JSON text. Raises ValueError on invalid input."""
        return cls(_parser.parse(json_string))

    @property
    def node(self) -> Any:
        """The wrapped value. Treat it as read-only."""
        return self._node

    @property
    def kind(self) -> ValueKind:
        return kind_of(self._node)

    def to_python(self) -> Any:
        """Deep copy of the wrapped value, safe to mutate."""
        return clone(self._node)

    def to_json(self, pretty: bool = False) -> str:
        return _parser.serialize(self._node, pretty)

    # Navigation and inspection

    def at(self, path: PathLike) -> "Json":
        """Document at ``path``; absent when nothing is there."""
        return Json(_resolver.resolve(self._node, path))

    def __getitem__(self, path: PathLike) -> "Json":
        return self.at(path)

    def exists(self, path: PathLike = "") -> bool:
        return _resolver.exists(self._node, path)

    def is_null(self, path: PathLike = "") -> bool:
        return _resolver.is_null(self._node, path)

    def contains(self, expected: Any, path: PathLike = "") -> bool:
        if isinstance(expected, Json):
            expected = expected.node
        return _resolver.contains(self._node, expected, path)

    # Extraction

    def extract(self, path: PathLike = "", decoder: Optional[Callable[[Any], Any]] = None) -> Any:
        return _extractor.extract(self._node, path, decoder)

    def extract_list(self, path: PathLike = "",
                     decoder: Optional[Callable[[Any], Any]] = None) -> List[Any]:
        return _extractor.extract_list(self._node, path, decoder)

    def extract_try(self, path: PathLike = "",
                    decoder: Optional[Callable[[Any], Any]] = None) -> ExtractResult:
        return _extractor.extract_try(self._node, path, decoder)

    def extract_list_try(self, path: PathLike = "",
                         decoder: Optional[Callable[[Any], Any]] = None) -> ExtractResult:
        return _extractor.extract_list_try(self._node, path, decoder)

    def extract_optional(self, path: PathLike = "",
                         decoder: Optional[Callable[[Any], Any]] = None) -> Any:
        return _extractor.extract_optional(self._node, path, decoder)

    def extract_string(self, path: PathLike = "") -> str:
        return _extractor.extract_string(self._node, path)

    def extract_int(self, path: PathLike = "") -> int:
        return _extractor.extract_int(self._node, path)

    def extract_float(self, path: PathLike = "") -> float:
        return _extractor.extract_float(self._node, path)

    def extract_bool(self, path: PathLike = "") -> bool:
        return _extractor.extract_bool(self._node, path)

    def extract_string_try(self, path: PathLike = "") -> ExtractResult:
        return _extractor.extract_string_try(self._node, path)

    def extract_int_try(self, path: PathLike = "") -> ExtractResult:
        return _extractor.extract_int_try(self._node, path)

    def extract_float_try(self, path: PathLike = "") -> ExtractResult:
        return _extractor.extract_float_try(self._node, path)

    def extract_bool_try(self, path: PathLike = "") -> ExtractResult:
        return _extractor.extract_bool_try(self._node, path)

    def extract_string_optional(self, path: PathLike = "") -> Optional[str]:
        return _extractor.extract_string_optional(self._node, path)

    def extract_int_optional(self, path: PathLike = "") -> Optional[int]:
        return _extractor.extract_int_optional(self._node, path)

    def extract_float_optional(self, path: PathLike = "") -> Optional[float]:
        return _extractor.extract_float_optional(self._node, path)

    def extract_bool_optional(self, path: PathLike = "") -> Optional[bool]:
        return _extractor.extract_bool_optional(self._node, path)

    # Rewriting

    def transform(self, config: TransformationConfig) -> "Json":
        """Build a new document by applying ``config`` to this one."""
        return Json(_transformer.process(self._node, config))

    def translate(self, overrides: Union["Json", Any],
                  config: Optional[TransformationConfig] = None) -> "Json":
        """Overlay ``overrides`` onto this document, reshaped by ``config`` if given."""
        if isinstance(overrides, Json):
            overrides = overrides.node
        return Json(_translator.process(self._node, overrides, config))

    def only(self, keep_fields: Iterable[str]) -> "Json":
        """Keep only the named top-level fields."""
        return Json(_filter.only(self._node, keep_fields))

    # Comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Json):
            return NotImplemented
        return json_equal(self._node, other._node)

    __hash__ = None

    def __repr__(self) -> str:
        if self._node is ABSENT:
            return "Json(ABSENT)"
        return f"Json({self.to_json()})"
