"""JSON text boundary: parsing text into values and serializing them back."""

import json
import logging
from typing import Any, Optional

from .error_handler import ErrorHandler
from .types import TypeMismatchError
from .value import ABSENT


class JSONParser:
    """
    JSON parser with input validation.

    Produces the plain value tree the rest of the package operates on.
    Objects keep their field order.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.error_handler = error_handler or ErrorHandler()
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Any:
        """
        Parse a JSON string.

        Args:
            json_string: JSON string to parse

        Returns:
            Parsed value

        Raises:
            ValueError: If JSON is invalid
        """
        validation_result = self.error_handler.validate_input(json_string)
        if not validation_result.is_valid:
            error_messages = [error.message for error in validation_result.errors]
            raise ValueError(f"Invalid JSON input: {'; '.join(error_messages)}")

        for warning in validation_result.warnings:
            self.logger.warning(warning)

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ValueError(f"JSON parsing failed: {e.msg} at line {e.lineno}, column {e.colno}")

        self.logger.debug(f"Parsed JSON document of type {type(data).__name__}")
        return data

    def serialize(self, data: Any, pretty: bool = False) -> str:
        """
        Serialize a value to JSON text.

        Args:
            data: Value to serialize
            pretty: Indent output for reading

        Returns:
            JSON string

        Raises:
            TypeMismatchError: If the value is absent or not JSON data
        """
        if data is ABSENT:
            raise TypeMismatchError("An absent value cannot be serialized")
        try:
            return json.dumps(
                data,
                ensure_ascii=False,
                indent=2 if pretty else None,
                default=_reject_unserializable,
            )
        except ValueError as e:
            raise TypeMismatchError(f"Value is not JSON serializable: {e}") from e


def _reject_unserializable(value: Any) -> Any:
    if value is ABSENT:
        raise TypeMismatchError("An absent value cannot be serialized")
    raise TypeMismatchError(f"Value of type {type(value).__name__} is not JSON serializable")
