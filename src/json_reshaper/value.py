"""Value model helpers: kinds, the absent sentinel and strict equality."""

import copy
from typing import Any, Hashable

from .types import TypeMismatchError, ValueKind


class _Absent:
    """Result of a failed resolution. Never part of a serialized document."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


def kind_of(node: Any) -> ValueKind:
    """
    Classify a node into exactly one value kind.

    Args:
        node: Plain JSON data or ABSENT

    Returns:
        ValueKind of the node

    Raises:
        TypeMismatchError: If the node is not JSON data
    """
    if node is ABSENT:
        return ValueKind.ABSENT
    elif node is None:
        return ValueKind.NULL
    elif isinstance(node, bool):
        return ValueKind.BOOLEAN
    elif isinstance(node, (int, float)):
        return ValueKind.NUMBER
    elif isinstance(node, str):
        return ValueKind.STRING
    elif isinstance(node, dict):
        return ValueKind.OBJECT
    elif isinstance(node, (list, tuple)):
        return ValueKind.ARRAY
    else:
        raise TypeMismatchError(f"Unsupported value type: {type(node).__name__}")


def is_object(node: Any) -> bool:
    return isinstance(node, dict)


def is_array(node: Any) -> bool:
    return isinstance(node, (list, tuple))


def json_equal(left: Any, right: Any) -> bool:
    """
    Strict JSON equality.

    Booleans never equal numbers, object comparison ignores field order and
    array comparison does not.
    """
    left_kind = kind_of(left)
    if left_kind != kind_of(right):
        return False

    if left_kind == ValueKind.OBJECT:
        if left.keys() != right.keys():
            return False
        return all(json_equal(left[key], right[key]) for key in left)
    elif left_kind == ValueKind.ARRAY:
        if len(left) != len(right):
            return False
        return all(json_equal(a, b) for a, b in zip(left, right))
    elif left_kind in (ValueKind.NULL, ValueKind.ABSENT):
        return True
    else:
        return left == right


def identity_key(node: Any) -> Hashable:
    """Hashable key with the same equality as json_equal."""
    kind = kind_of(node)
    if kind == ValueKind.OBJECT:
        return (kind.value, frozenset((key, identity_key(value)) for key, value in node.items()))
    if kind == ValueKind.ARRAY:
        return (kind.value, tuple(identity_key(item) for item in node))
    if kind == ValueKind.NUMBER and isinstance(node, float) and node.is_integer():
        # 1 and 1.0 are the same JSON number
        return (kind.value, int(node))
    if kind in (ValueKind.NULL, ValueKind.ABSENT):
        return (kind.value,)
    return (kind.value, node)


def clone(node: Any) -> Any:
    """Deep copy so outputs never alias their inputs."""
    if isinstance(node, (dict, list, tuple)):
        return copy.deepcopy(node)
    return node


def describe(node: Any) -> str:
    """Short human readable kind name for error messages."""
    try:
        return kind_of(node).value
    except TypeMismatchError:
        return type(node).__name__
