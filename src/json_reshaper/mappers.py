"""Value mappers applied by copy rules before a value is written."""

from typing import Any, Callable, Dict, Optional

from .types import MapperInterface


class PrefixMapper(MapperInterface):
    """
    Prepends a prefix to string values.

    Non-string values pass through unchanged. With ``skip_if_present`` a
    string already starting with the prefix is left alone.
    """

    name = "prefix"

    def __init__(self, prefix: str, skip_if_present: bool = False):
        if not isinstance(prefix, str):
            raise ValueError("prefix must be a string")
        self.prefix = prefix
        self.skip_if_present = skip_if_present

    def map(self, node: Any) -> Any:
        if not isinstance(node, str):
            return node
        if self.skip_if_present and node.startswith(self.prefix):
            return node
        return self.prefix + node


class LowercaseMapper(MapperInterface):
    name = "lowercase"

    def map(self, node: Any) -> Any:
        return node.lower() if isinstance(node, str) else node


class UppercaseMapper(MapperInterface):
    name = "uppercase"

    def map(self, node: Any) -> Any:
        return node.upper() if isinstance(node, str) else node


class StripMapper(MapperInterface):
    name = "strip"

    def map(self, node: Any) -> Any:
        return node.strip() if isinstance(node, str) else node


class FunctionMapper(MapperInterface):
    """Wraps a plain callable taking and returning a JSON value."""

    def __init__(self, func: Callable[[Any], Any], name: Optional[str] = None):
        self.func = func
        self.name = name or getattr(func, "__name__", "function")

    def map(self, node: Any) -> Any:
        return self.func(node)


HttpsAppender = PrefixMapper("https:")

MAPPERS: Dict[str, Callable[..., MapperInterface]] = {
    "prefix": PrefixMapper,
    "lowercase": LowercaseMapper,
    "uppercase": UppercaseMapper,
    "strip": StripMapper,
}


def get_mapper(name: str, **options: Any) -> MapperInterface:
    """Build a built-in mapper by name with keyword options."""
    try:
        factory = MAPPERS[name]
    except KeyError:
        raise KeyError(f"Unknown mapper '{name}'. Known: {', '.join(sorted(MAPPERS))}") from None
    return factory(**options)
