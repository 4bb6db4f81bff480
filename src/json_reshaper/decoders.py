"""Scalar decoders used by typed extraction.

A decoder takes a resolved node and returns a Python value, raising
``TypeError`` or ``ValueError`` when the node cannot be coerced.
"""

from typing import Any, Callable, Dict, List, TypeVar

from .value import describe


T = TypeVar("T")
Decoder = Callable[[Any], T]


def as_string(node: Any) -> str:
    if not isinstance(node, str):
        raise TypeError(f"Expected string, got {describe(node)}")
    return node


def as_int(node: Any) -> int:
    if isinstance(node, bool) or not isinstance(node, (int, float)):
        raise TypeError(f"Expected integer, got {describe(node)}")
    if isinstance(node, float):
        if not node.is_integer():
            raise ValueError(f"Expected integer, got non-integral number {node}")
        return int(node)
    return node


def as_float(node: Any) -> float:
    if isinstance(node, bool) or not isinstance(node, (int, float)):
        raise TypeError(f"Expected number, got {describe(node)}")
    return float(node)


def as_bool(node: Any) -> bool:
    if not isinstance(node, bool):
        raise TypeError(f"Expected boolean, got {describe(node)}")
    return node


def as_object(node: Any) -> Dict[str, Any]:
    if not isinstance(node, dict):
        raise TypeError(f"Expected object, got {describe(node)}")
    return node


def as_list(node: Any) -> List[Any]:
    if not isinstance(node, (list, tuple)):
        raise TypeError(f"Expected array, got {describe(node)}")
    return list(node)


def list_of(decoder: Decoder) -> Decoder:
    """Build a decoder for an array whose elements use ``decoder``."""
    def decode(node: Any) -> List[Any]:
        return [decoder(item) for item in as_list(node)]
    return decode
