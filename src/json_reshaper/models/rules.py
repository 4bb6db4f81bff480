"""Copy/merge rules and the transformation configuration that orders them."""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple, Union

from .. import path_parser
from ..types import MapperInterface, ValidatorInterface
from .path import Path


@dataclass(frozen=True)
class FieldCopy:
    """Copy one value from ``source`` to ``dest``."""

    source: Path
    dest: Path
    validators: Tuple[ValidatorInterface, ...] = ()
    mapper: Optional[MapperInterface] = None

    def __post_init__(self):
        if self.source.is_root() or self.dest.is_root():
            raise ValueError("FieldCopy source and dest must not be the root path")

    def with_validators(self, *validators: ValidatorInterface) -> "FieldCopy":
        return replace(self, validators=self.validators + tuple(validators))

    def with_mapper(self, mapper: MapperInterface) -> "FieldCopy":
        return replace(self, mapper=mapper)

    def requires_presence(self) -> bool:
        return any(getattr(v, "requires_presence", False) for v in self.validators)


@dataclass(frozen=True)
class FieldsCopy:
    """Copy several fields under their own names."""

    names: Tuple[str, ...]

    def __post_init__(self):
        if not self.names:
            raise ValueError("FieldsCopy needs at least one field name")

    def expand(self) -> Tuple[FieldCopy, ...]:
        copies = []
        for name in self.names:
            path = path_parser.parse_path(name)
            copies.append(FieldCopy(path, path))
        return tuple(copies)


@dataclass(frozen=True)
class SubtreeCopy:
    """Copy the value at ``path`` unchanged."""

    path: Path

    def __post_init__(self):
        if self.path.is_root():
            raise ValueError("SubtreeCopy path must not be the root path")


@dataclass(frozen=True)
class ObjectMerge:
    """Copy every field of the object at ``path`` into the output root."""

    path: Path


@dataclass(frozen=True)
class ArrayReconcile:
    """
    Copy an array of objects element by element.

    Elements are identified by ``id_field``: a transform re-copies each
    element through ``config``; a translation matches base and override
    elements on equal ids.
    """

    path: Path
    config: "TransformationConfig"
    id_field: str

    def __post_init__(self):
        if self.path.is_root():
            raise ValueError("ArrayReconcile path must not be the root path")
        if not isinstance(self.id_field, str) or not self.id_field:
            raise ValueError("ArrayReconcile id_field must be a non-empty string")


Rule = Union[FieldCopy, FieldsCopy, SubtreeCopy, ObjectMerge, ArrayReconcile]
RULE_TYPES = (FieldCopy, FieldsCopy, SubtreeCopy, ObjectMerge, ArrayReconcile)


@dataclass(frozen=True)
class TransformationConfig:
    """Ordered, immutable list of rules. ``add`` returns a new config."""

    rules: Tuple[Rule, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for rule in self.rules:
            if not isinstance(rule, RULE_TYPES):
                raise TypeError(f"Unsupported rule type: {type(rule).__name__}")

    def add(self, rule: Rule) -> "TransformationConfig":
        return TransformationConfig(self.rules + (rule,))

    def extend(self, rules: Iterable[Rule]) -> "TransformationConfig":
        return TransformationConfig(self.rules + tuple(rules))

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)


# Factories

def copy_field(source: Union[str, Path], dest: Union[str, Path, None] = None) -> FieldCopy:
    """Copy ``source`` to ``dest`` (defaults to the same path)."""
    source_path = path_parser.parse_path(source)
    dest_path = source_path if dest is None else path_parser.parse_path(dest)
    return FieldCopy(source_path, dest_path)


def copy_fields(*names: str) -> FieldsCopy:
    """Copy each named field under the same name, in the given order."""
    ordered = []
    for name in names:
        path_parser.parse_path(name)
        if name not in ordered:
            ordered.append(name)
    return FieldsCopy(tuple(ordered))


def copy(path: Union[str, Path]) -> SubtreeCopy:
    return SubtreeCopy(path_parser.parse_path(path))


def merge_object(path: Union[str, Path]) -> ObjectMerge:
    return ObjectMerge(path_parser.parse_path(path))


def copy_array_of_objects(path: Union[str, Path], config: TransformationConfig,
                          id_field: str) -> ArrayReconcile:
    return ArrayReconcile(path_parser.parse_path(path), config, id_field)
