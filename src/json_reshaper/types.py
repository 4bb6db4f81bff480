"""Core type definitions for the JSON Reshaper."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, List, Optional, Tuple, TypeVar


T = TypeVar("T")


class ValueKind(Enum):
    """Enumeration of JSON value kinds."""
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ABSENT = "absent"


class ErrorType(Enum):
    """Enumeration of error types."""
    MALFORMED_PATH = "malformed_path"
    PATH_NOT_FOUND = "path_not_found"
    TYPE_MISMATCH = "type_mismatch"
    VALIDATION = "validation"
    CONFIG = "config"
    SYNTAX = "syntax"


class ReshapeError(Exception):
    """
    Base exception for every failure surfaced to callers.

    ``rule_index`` is the index of the failing top-level rule; ``rule_path``
    holds the indexes from the top-level rule down to the innermost one when
    the failure happened inside a nested configuration.
    """

    error_type = ErrorType.CONFIG

    def __init__(self, message: str, path: Optional[str] = None,
                 rule_index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.rule_index = rule_index
        self.rule_path: Tuple[int, ...] = () if rule_index is None else (rule_index,)

    def __str__(self) -> str:
        details = []
        if self.path is not None:
            details.append(f"path '{self.path}'")
        if self.rule_index is not None:
            details.append(f"rule #{'.'.join(str(i) for i in self.rule_path) or self.rule_index}")
        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class MalformedPathError(ReshapeError):
    """Raised when a path string cannot be parsed."""
    error_type = ErrorType.MALFORMED_PATH


class PathNotFoundError(ReshapeError):
    """Raised when strict extraction resolves to nothing."""
    error_type = ErrorType.PATH_NOT_FOUND


class TypeMismatchError(ReshapeError):
    """Raised when a resolved value has the wrong kind for an operation."""
    error_type = ErrorType.TYPE_MISMATCH


class ValidationError(ReshapeError):
    """Raised when a field validator rejects a value during a transform."""
    error_type = ErrorType.VALIDATION

    def __init__(self, message: str, path: Optional[str] = None,
                 rule_index: Optional[int] = None,
                 validator: Optional[str] = None):
        super().__init__(message, path, rule_index)
        self.validator = validator


class ConfigError(ReshapeError):
    """Raised when a rule document cannot be turned into a configuration."""
    error_type = ErrorType.CONFIG


@dataclass
class ExtractResult(Generic[T]):
    """Result of a non-throwing extraction."""
    success: bool
    value: Optional[T] = None
    error: Optional[ReshapeError] = None

    @classmethod
    def ok(cls, value: T) -> "ExtractResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, error: ReshapeError) -> "ExtractResult[T]":
        return cls(success=False, error=error)

    def get(self) -> T:
        """Return the extracted value or raise the carried error."""
        if not self.success:
            raise self.error
        return self.value

    def get_or(self, default: T) -> T:
        return self.value if self.success else default


@dataclass
class ConfigIssue:
    """A single problem found while validating input or a rule document."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input or configuration validation."""
    is_valid: bool
    errors: List[ConfigIssue]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    path: Optional[str] = None
    rule_index: Optional[int] = None
    rule_path: Tuple[int, ...] = ()


# Abstract base classes for interfaces

class ValidatorInterface(ABC):
    """Predicate over a resolved value plus its path."""

    name: str = "validator"
    requires_presence: bool = False

    @abstractmethod
    def validate(self, node: Any, path: str) -> bool:
        """Return True when the value is acceptable."""
        pass


class MapperInterface(ABC):
    """Pure function applied to a value before it is written."""

    name: str = "mapper"

    @abstractmethod
    def map(self, node: Any) -> Any:
        """Return the mapped value."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def validate_config(self, raw: Any) -> ValidationResult:
        """Validate a raw rule document."""
        pass

    @abstractmethod
    def handle_error(self, error: ReshapeError) -> ErrorResponse:
        """Handle a reshaping error."""
        pass
