"""Validation utilities for input documents, paths and rule documents."""

import json
from typing import Any, List

from ..config_loader import build_rule
from ..path_parser import PathParser
from ..types import ConfigError, ConfigIssue, ErrorType, MalformedPathError, ValidationResult


class ValidationUtils:
    """Utility class for validating inputs before they are processed."""

    MAX_DEPTH_WARNING = 20

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not json_string.strip():
            errors.append(ConfigIssue(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ConfigIssue(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        max_depth = ValidationUtils._calculate_max_depth(data)
        if max_depth > ValidationUtils.MAX_DEPTH_WARNING:
            warnings.append(f"Deep nesting detected (depth: {max_depth}). This may impact performance.")

        return ValidationResult(is_valid=True, errors=errors, warnings=warnings)

    @staticmethod
    def validate_paths(paths: List[str]) -> ValidationResult:
        """Check the syntax of several path strings at once."""
        parser = PathParser()
        errors = []
        for path in paths:
            try:
                parser.parse(path)
            except MalformedPathError as e:
                errors.append(ConfigIssue(
                    type=ErrorType.MALFORMED_PATH,
                    message=e.message,
                    location=str(path)
                ))
        return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=[])

    @staticmethod
    def validate_rule_document(raw: Any) -> ValidationResult:
        """
        Validate a decoded rule document, reporting every broken rule.

        Args:
            raw: List of rule objects, or an object with a ``rules`` list

        Returns:
            ValidationResult with one error per rule that cannot be built
        """
        errors = []
        warnings = []

        if isinstance(raw, dict) and "rules" in raw:
            raw = raw["rules"]
        if not isinstance(raw, list):
            errors.append(ConfigIssue(
                type=ErrorType.CONFIG,
                message=f"Expected a list of rules, got {type(raw).__name__}",
                location="rules"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if not raw:
            warnings.append("Rule document is empty; transforms will produce an empty object.")

        for position, item in enumerate(raw):
            try:
                build_rule(item, f"rules[{position}]")
            except ConfigError as e:
                errors.append(ConfigIssue(
                    type=ErrorType.CONFIG,
                    message=e.message,
                    location=e.path
                ))

        duplicates = ValidationUtils._find_repeated_destinations(raw)
        for dest in duplicates:
            warnings.append(f"Destination '{dest}' is written by more than one rule; the last one wins.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _find_repeated_destinations(raw: List[Any]) -> List[str]:
        """Destinations written by more than one top-level rule."""
        seen = []
        duplicates = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            rule_type = item.get("type")
            if rule_type == "copy_field":
                targets = [item.get("to") or item.get("from")]
            elif rule_type == "copy_fields":
                targets = item.get("fields") if isinstance(item.get("fields"), list) else []
            elif rule_type in ("copy", "copy_array_of_objects"):
                targets = [item.get("path")]
            else:
                targets = []
            for target in targets:
                if not isinstance(target, str):
                    continue
                if target in seen and target not in duplicates:
                    duplicates.append(target)
                seen.append(target)
        return duplicates

    @staticmethod
    def _calculate_max_depth(data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth."""
        if not isinstance(data, (dict, list)):
            return current_depth

        max_child_depth = current_depth

        if isinstance(data, dict):
            for value in data.values():
                child_depth = ValidationUtils._calculate_max_depth(value, current_depth + 1)
                max_child_depth = max(max_child_depth, child_depth)
        else:  # list
            for item in data:
                child_depth = ValidationUtils._calculate_max_depth(item, current_depth + 1)
                max_child_depth = max(max_child_depth, child_depth)

        return max_child_depth
