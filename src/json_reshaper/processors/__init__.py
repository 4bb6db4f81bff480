"""Rule executors for transformation, translation and filtering."""

from .transform_processor import TransformProcessor
from .translate_processor import TranslateProcessor
from .filter_processor import FilterProcessor

__all__ = ["TransformProcessor", "TranslateProcessor", "FilterProcessor"]
