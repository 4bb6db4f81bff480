"""Transformation executor: applies an ordered rule list to one source."""

import logging
from typing import Any, Dict, Optional

from ..models.rules import (
    ArrayReconcile,
    FieldCopy,
    FieldsCopy,
    ObjectMerge,
    SubtreeCopy,
    TransformationConfig,
)
from ..resolver import PathResolver
from ..types import ReshapeError, TypeMismatchError, ValidationError
from ..value import ABSENT, clone, describe, is_array, is_object


class TransformProcessor:
    """
    Processor building a new JSON object from a source and a rule list.

    Rules run in order against an initially empty object, so later rules
    overwrite what earlier ones wrote and output field order follows rule
    order. The first failing rule aborts the whole transform; the error
    carries the index of that rule.
    """

    def __init__(self, resolver: Optional[PathResolver] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the transform processor.

        Args:
            resolver: Optional PathResolver instance
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.resolver = resolver or PathResolver(logger=self.logger)

    def process(self, source: Any, config: TransformationConfig) -> Dict[str, Any]:
        """
        Transform a source value.

        Args:
            source: Source JSON value (never mutated)
            config: Ordered rules to apply

        Returns:
            Newly built output object

        Raises:
            ValidationError: If a validator rejects a value
            TypeMismatchError: If a rule meets a value of the wrong kind
        """
        if not isinstance(config, TransformationConfig):
            raise TypeError(f"Expected TransformationConfig, got {type(config).__name__}")

        self.logger.debug(f"Applying {len(config)} rules")
        try:
            return self._run(source, config)
        except ReshapeError as e:
            rule = config.rules[e.rule_index]
            self.logger.error(f"Rule #{e.rule_index} ({type(rule).__name__}) failed: {e}")
            raise

    def _run(self, source: Any, config: TransformationConfig) -> Dict[str, Any]:
        output: Dict[str, Any] = {}
        for index, rule in enumerate(config.rules):
            try:
                self._apply(rule, source, output, index)
            except ReshapeError as e:
                e.rule_path = (index,) + e.rule_path
                e.rule_index = index
                raise
        return output

    def _apply(self, rule, source: Any, output: Dict[str, Any], index: int) -> None:
        if isinstance(rule, FieldCopy):
            self._copy_field(rule, source, output, index)
        elif isinstance(rule, FieldsCopy):
            for field_copy in rule.expand():
                self._copy_field(field_copy, source, output, index)
        elif isinstance(rule, SubtreeCopy):
            self._copy_subtree(rule, source, output)
        elif isinstance(rule, ObjectMerge):
            self._merge_object(rule, source, output)
        elif isinstance(rule, ArrayReconcile):
            self._copy_array(rule, source, output)
        else:
            raise TypeError(f"Unsupported rule type: {type(rule).__name__}")

    def _copy_field(self, rule: FieldCopy, source: Any, output: Dict[str, Any], index: int) -> None:
        value = self.resolver.resolve(source, rule.source)
        path = str(rule.source)

        if value is ABSENT and not rule.requires_presence():
            self.logger.debug(f"Rule #{index}: '{path}' not found, skipping")
            return

        for validator in rule.validators:
            name = getattr(validator, "name", type(validator).__name__)
            try:
                accepted = validator.validate(value, path)
            except (TypeError, ValueError, KeyError) as e:
                raise ValidationError(
                    f"Validator '{name}' failed on field '{path}': {e}",
                    path=path,
                    validator=name,
                ) from e
            if not accepted:
                raise ValidationError(
                    f"Validator '{name}' rejected field '{path}'",
                    path=path,
                    validator=name,
                )

        if value is ABSENT:
            self.logger.debug(f"Rule #{index}: '{path}' not found, nothing to write")
            return

        value = clone(value)
        if rule.mapper is not None:
            try:
                value = rule.mapper.map(value)
            except (TypeError, ValueError, KeyError) as e:
                name = getattr(rule.mapper, "name", type(rule.mapper).__name__)
                raise TypeMismatchError(
                    f"Mapper '{name}' failed on field '{path}': {e}", path=path
                ) from e
        self.resolver.write(output, rule.dest, value)
        self.logger.debug(f"Rule #{index}: copied '{path}' to '{rule.dest}'")

    def _copy_subtree(self, rule: SubtreeCopy, source: Any, output: Dict[str, Any]) -> None:
        value = self.resolver.resolve(source, rule.path)
        if value is ABSENT:
            return
        self.resolver.write(output, rule.path, clone(value))

    def _merge_object(self, rule: ObjectMerge, source: Any, output: Dict[str, Any]) -> None:
        value = self.resolver.resolve(source, rule.path)
        if value is ABSENT:
            return
        if not is_object(value):
            raise TypeMismatchError(
                f"Cannot merge {describe(value)} into the output, expected object",
                path=str(rule.path),
            )
        for key, item in value.items():
            output[key] = clone(item)

    def _copy_array(self, rule: ArrayReconcile, source: Any, output: Dict[str, Any]) -> None:
        value = self.resolver.resolve(source, rule.path)
        if value is ABSENT:
            return
        if not is_array(value):
            raise TypeMismatchError(
                f"Expected array of objects, got {describe(value)}", path=str(rule.path)
            )

        items = []
        for position, element in enumerate(value):
            if not is_object(element):
                raise TypeMismatchError(
                    f"Expected object at element {position}, got {describe(element)}",
                    path=str(rule.path),
                )
            try:
                items.append(self.process_element(element, rule))
            except ReshapeError as e:
                location = f"{rule.path}[{position}]"
                if e.path is None:
                    e.path = location
                elif not e.path or e.path.startswith("["):
                    e.path = location + e.path
                else:
                    e.path = f"{location}.{e.path}"
                raise
        self.resolver.write(output, rule.path, items)

    def process_element(self, element: Dict[str, Any], rule: ArrayReconcile) -> Dict[str, Any]:
        """Transform one array element, keeping its identifier first."""
        shaped: Dict[str, Any] = {}
        if rule.id_field in element:
            shaped[rule.id_field] = clone(element[rule.id_field])
        shaped.update(self._run(element, rule.config))
        return shaped
