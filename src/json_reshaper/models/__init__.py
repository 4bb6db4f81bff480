"""Data models for the JSON Reshaper."""

from .path import Field, Index, Path, PathElement
from .rules import (
    ArrayReconcile,
    FieldCopy,
    FieldsCopy,
    ObjectMerge,
    Rule,
    SubtreeCopy,
    TransformationConfig,
)

__all__ = [
    "Field",
    "Index",
    "Path",
    "PathElement",
    "ArrayReconcile",
    "FieldCopy",
    "FieldsCopy",
    "ObjectMerge",
    "Rule",
    "SubtreeCopy",
    "TransformationConfig",
]
