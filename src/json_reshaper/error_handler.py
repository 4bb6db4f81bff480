"""Error handling implementation for the JSON Reshaper."""

import logging
from typing import Any, Optional

from .types import (
    ConfigIssue,
    ErrorHandlerInterface,
    ErrorResponse,
    ErrorType,
    ReshapeError,
    ValidationResult,
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for JSON Reshaper operations.

    Validates raw inputs and rule documents before they reach the
    processors, and turns reshaping errors into actionable responses.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate input JSON string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        if not isinstance(input_data, str):
            return ValidationResult(
                is_valid=False,
                errors=[ConfigIssue(
                    type=ErrorType.SYNTAX,
                    message=f"Expected JSON text, got {type(input_data).__name__}",
                    location="input"
                )],
                warnings=[]
            )
        return ValidationUtils.validate_json_string(input_data)

    def validate_config(self, raw: Any) -> ValidationResult:
        """
        Validate a decoded rule document.

        Args:
            raw: Rule document as decoded from JSON

        Returns:
            ValidationResult with one error per broken rule
        """
        result = ValidationUtils.validate_rule_document(raw)
        for warning in result.warnings:
            self.logger.warning(warning)
        return result

    def handle_error(self, error: ReshapeError) -> ErrorResponse:
        """
        Handle reshaping errors and provide recovery suggestions.

        Args:
            error: ReshapeError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Reshaping error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.MALFORMED_PATH:
            action = ("Fix the path syntax: segments are separated by '.', "
                      "indexes are written as [n] with a non-negative integer.")
            can_recover = False
        elif error.error_type == ErrorType.PATH_NOT_FOUND:
            action = ("Check that the path exists in the document, or use the "
                      "try/optional extraction variants to treat absence as data.")
            can_recover = True
        elif error.error_type == ErrorType.TYPE_MISMATCH:
            action = "Check the kind of value at the path against the operation or decoder used."
            can_recover = False
        elif error.error_type == ErrorType.VALIDATION:
            action = ("Fix the input value rejected by the validator, or relax the "
                      "validators configured on the failing rule.")
            can_recover = False
        elif error.error_type == ErrorType.CONFIG:
            action = "Fix the rule document at the reported location."
            can_recover = False
        else:
            action = "Unknown error type. Please check logs and retry."
            can_recover = False

        return ErrorResponse(
            can_recover=can_recover,
            suggested_action=action,
            path=error.path,
            rule_index=error.rule_index,
            rule_path=error.rule_path
        )
