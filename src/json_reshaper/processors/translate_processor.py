"""Translation executor: overlays an override document onto a base document."""

import logging
from typing import Any, Dict, Optional, Tuple

from ..models.rules import ArrayReconcile, TransformationConfig
from ..value import clone, identity_key, is_array, is_object
from .transform_processor import TransformProcessor


# Location marker for "any element of the reconciled array above"
ELEMENT = "[]"

Location = Tuple[str, ...]


class TranslateProcessor:
    """
    Processor merging overrides (typically a translation) into a base document.

    Without a configuration the override document is deep-merged as is. With
    a configuration the override document is first reshaped by it, so rule
    sources address the override document and rule destinations address the
    base document; arrays named by ``ArrayReconcile`` rules are then merged
    element by element on their ``id_field``.
    """

    def __init__(self, transformer: Optional[TransformProcessor] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the translate processor.

        Args:
            transformer: Optional TransformProcessor used to reshape overrides
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.transformer = transformer or TransformProcessor(logger=self.logger)

    def process(self, base: Any, overrides: Any,
                config: Optional[TransformationConfig] = None) -> Any:
        """
        Translate a base document.

        Args:
            base: Base JSON value (never mutated)
            overrides: Override JSON value (never mutated)
            config: Optional rules shaping the overrides

        Returns:
            Newly built merged value
        """
        reconciled: Dict[Location, str] = {}
        if config is not None:
            overrides = self.transformer.process(overrides, config)
            reconciled = self.reconciled_locations(config)
            self.logger.debug(f"Reconciling arrays at {sorted(reconciled)}")

        return self.merge(base, overrides, reconciled)

    def reconciled_locations(self, config: TransformationConfig,
                             prefix: Location = ()) -> Dict[Location, str]:
        """
        Collect the id field of every array reconciled by a configuration.

        Nested rules are relative to an element of the enclosing array, so
        their locations continue below an ``ELEMENT`` marker.
        """
        locations: Dict[Location, str] = {}
        for rule in config.rules:
            if not isinstance(rule, ArrayReconcile):
                continue
            if rule.path.has_index():
                self.logger.debug(f"Array path '{rule.path}' uses an index, merged positionally")
                continue
            location = prefix + rule.path.field_names()
            locations[location] = rule.id_field
            locations.update(self.reconciled_locations(rule.config, location + (ELEMENT,)))
        return locations

    def merge(self, base: Any, override: Any, reconciled: Dict[Location, str],
              location: Location = ()) -> Any:
        """
        Deep merge ``override`` onto ``base``.

        Objects merge field by field keeping base order with override-only
        fields appended; reconciled arrays merge by id; anything else is
        replaced by the override.
        """
        if is_object(base) and is_object(override):
            merged: Dict[str, Any] = {}
            for key, value in base.items():
                if key in override:
                    merged[key] = self.merge(value, override[key], reconciled, location + (key,))
                else:
                    merged[key] = clone(value)
            for key, value in override.items():
                if key not in base:
                    merged[key] = clone(value)
            return merged

        id_field = reconciled.get(location)
        if id_field is not None and is_array(base) and is_array(override):
            return self._reconcile(base, override, id_field, reconciled, location)

        return clone(override)

    def _reconcile(self, base, override, id_field: str,
                   reconciled: Dict[Location, str], location: Location):
        # Index overrides by id so matching stays linear
        by_id: Dict[Any, int] = {}
        for position, element in enumerate(override):
            if is_object(element) and id_field in element:
                by_id.setdefault(identity_key(element[id_field]), position)

        matched = set()
        result = []
        for element in base:
            if not (is_object(element) and id_field in element):
                continue
            position = by_id.get(identity_key(element[id_field]))
            if position is None or position in matched:
                continue
            matched.add(position)
            result.append(
                self.merge(element, override[position], reconciled, location + (ELEMENT,))
            )

        dropped = len(base) - len(matched)
        appended = 0
        for position, element in enumerate(override):
            if position not in matched:
                result.append(clone(element))
                appended += 1

        self.logger.debug(
            f"Reconciled '{'.'.join(location)}' on '{id_field}': {len(matched)} matched, "
            f"{dropped} dropped, {appended} appended"
        )
        return result
