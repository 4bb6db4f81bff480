"""Path model: ordered field-name and array-index accessors."""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Field:
    """Accessor selecting an object member by name."""

    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Field name must be a non-empty string")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Index:
    """Accessor selecting an array element by zero-based position."""

    position: int

    def __post_init__(self):
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise ValueError("Index position must be an integer")
        if self.position < 0:
            raise ValueError("Index position must be non-negative")

    def __str__(self) -> str:
        return f"[{self.position}]"


PathElement = Union[Field, Index]


@dataclass(frozen=True)
class Path:
    """
    Parsed path.

    Holds the accessor sequence plus the text it came from so errors can
    report the path the caller actually wrote.
    """

    elements: Tuple[PathElement, ...] = ()
    raw: str = ""

    def __str__(self) -> str:
        return self.raw or self.render()

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    def is_root(self) -> bool:
        return not self.elements

    def render(self) -> str:
        """Render elements back into path syntax."""
        out = []
        for element in self.elements:
            if isinstance(element, Index):
                out.append(str(element))
            else:
                if out:
                    out.append(".")
                out.append(element.name)
        return "".join(out)

    def field_names(self) -> Tuple[str, ...]:
        """Names of all field accessors, in order."""
        return tuple(e.name for e in self.elements if isinstance(e, Field))

    def has_index(self) -> bool:
        return any(isinstance(e, Index) for e in self.elements)
