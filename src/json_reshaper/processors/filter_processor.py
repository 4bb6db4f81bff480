"""Field filtering for JSON objects."""

import logging
from typing import Any, Dict, Iterable, Optional

from ..types import TypeMismatchError
from ..value import clone, describe, is_object


class FilterProcessor:
    """Projects an object down to a keep-set of top-level fields."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def only(self, node: Any, keep_fields: Iterable[str]) -> Dict[str, Any]:
        """
        Keep only the named top-level fields, in source order.

        Args:
            node: Object to filter (never mutated)
            keep_fields: Names of fields to keep

        Returns:
            New object with the kept fields

        Raises:
            TypeMismatchError: If node is not an object
        """
        if not is_object(node):
            raise TypeMismatchError(f"Can only filter objects, got {describe(node)}")

        if isinstance(keep_fields, str):
            keep_fields = [keep_fields]
        keep = set(keep_fields)
        filtered = {key: clone(value) for key, value in node.items() if key in keep}
        self.logger.debug(f"Kept {len(filtered)} of {len(node)} fields")
        return filtered
