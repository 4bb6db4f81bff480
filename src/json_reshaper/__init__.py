"""
JSON Reshaper - declarative JSON lookups, extraction and rewriting.

Resolves dotted/bracketed paths against JSON documents, extracts typed
values, and builds new documents from ordered copy/merge rules, including
merging a translated document into a base one.
"""

from .document import Json
from .models import Field, Index, Path, TransformationConfig
from .models.rules import (
    ArrayReconcile,
    FieldCopy,
    FieldsCopy,
    ObjectMerge,
    SubtreeCopy,
    copy,
    copy_array_of_objects,
    copy_field,
    copy_fields,
    merge_object,
)
from .path_parser import parse_path
from .types import (
    ConfigError,
    ExtractResult,
    MalformedPathError,
    PathNotFoundError,
    ReshapeError,
    TypeMismatchError,
    ValidationError,
    ValueKind,
)
from .value import ABSENT

__version__ = "1.0.0"
__all__ = [
    "Json",
    "Field",
    "Index",
    "Path",
    "TransformationConfig",
    "ArrayReconcile",
    "FieldCopy",
    "FieldsCopy",
    "ObjectMerge",
    "SubtreeCopy",
    "copy",
    "copy_array_of_objects",
    "copy_field",
    "copy_fields",
    "merge_object",
    "parse_path",
    "ConfigError",
    "ExtractResult",
    "MalformedPathError",
    "PathNotFoundError",
    "ReshapeError",
    "TypeMismatchError",
    "ValidationError",
    "ValueKind",
    "ABSENT",
]
