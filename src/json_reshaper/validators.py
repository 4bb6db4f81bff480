"""Field validators applied by copy rules before a value is written."""

from typing import Any, Callable, Dict, Optional

from .types import ValidatorInterface
from .value import ABSENT, is_array


class NonEmptyStringValidator(ValidatorInterface):
    """Accepts strings with at least one non-whitespace character."""

    name = "non_empty_string"

    def validate(self, node: Any, path: str) -> bool:
        return isinstance(node, str) and bool(node.strip())


class RequiredValidator(ValidatorInterface):
    """Rejects a missing source value instead of letting the rule skip it."""

    name = "required"
    requires_presence = True

    def validate(self, node: Any, path: str) -> bool:
        return node is not ABSENT


class NotNullValidator(ValidatorInterface):
    name = "not_null"

    def validate(self, node: Any, path: str) -> bool:
        return node is not None


class StringValidator(ValidatorInterface):
    name = "string"

    def validate(self, node: Any, path: str) -> bool:
        return isinstance(node, str)


class NumberValidator(ValidatorInterface):
    name = "number"

    def validate(self, node: Any, path: str) -> bool:
        return isinstance(node, (int, float)) and not isinstance(node, bool)


class BooleanValidator(ValidatorInterface):
    name = "boolean"

    def validate(self, node: Any, path: str) -> bool:
        return isinstance(node, bool)


class ObjectValidator(ValidatorInterface):
    name = "object"

    def validate(self, node: Any, path: str) -> bool:
        return isinstance(node, dict)


class ArrayValidator(ValidatorInterface):
    name = "array"

    def validate(self, node: Any, path: str) -> bool:
        return is_array(node)


class FunctionValidator(ValidatorInterface):
    """
    Wraps a plain callable.

    The callable receives the resolved value and its path and returns a
    truthy value to accept it.
    """

    def __init__(self, func: Callable[[Any, str], bool], name: Optional[str] = None,
                 requires_presence: bool = False):
        self.func = func
        self.name = name or getattr(func, "__name__", "function")
        self.requires_presence = requires_presence

    def validate(self, node: Any, path: str) -> bool:
        return bool(self.func(node, path))


NonEmptyString = NonEmptyStringValidator()
Required = RequiredValidator()

VALIDATORS: Dict[str, Callable[[], ValidatorInterface]] = {
    "non_empty_string": NonEmptyStringValidator,
    "required": RequiredValidator,
    "not_null": NotNullValidator,
    "string": StringValidator,
    "number": NumberValidator,
    "boolean": BooleanValidator,
    "object": ObjectValidator,
    "array": ArrayValidator,
}


def get_validator(name: str) -> ValidatorInterface:
    """Look up a built-in validator by name."""
    try:
        return VALIDATORS[name]()
    except KeyError:
        raise KeyError(f"Unknown validator '{name}'. Known: {', '.join(sorted(VALIDATORS))}") from None
