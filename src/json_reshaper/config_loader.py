"""Build transformation configurations from JSON rule documents."""

import json
import logging
from pathlib import Path as FilePath
from typing import Any, Dict, List, Optional, Union

from .mappers import get_mapper
from .models.rules import (
    TransformationConfig,
    copy,
    copy_array_of_objects,
    copy_field,
    copy_fields,
    merge_object,
)
from .types import ConfigError, MalformedPathError, MapperInterface, ValidatorInterface
from .validators import get_validator


logger = logging.getLogger(__name__)

RULE_TYPES = ("copy_field", "copy_fields", "copy", "merge_object", "copy_array_of_objects")


def load_config(raw: Any) -> TransformationConfig:
    """
    Build a configuration from a decoded rule document.

    Args:
        raw: List of rule objects, or an object with a ``rules`` list

    Returns:
        TransformationConfig with the rules in document order

    Raises:
        ConfigError: If the document is malformed
    """
    rules = _rule_list(raw, "rules")
    config = TransformationConfig()
    for position, item in enumerate(rules):
        config = config.add(build_rule(item, f"rules[{position}]"))
    logger.debug(f"Loaded {len(config)} rules")
    return config


def load_config_file(file_path: Union[str, FilePath]) -> TransformationConfig:
    """Read a rule document from a JSON file."""
    file_path = FilePath(file_path)
    try:
        raw = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read rule file: {e}", path=str(file_path)) from e
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Rule file is not valid JSON: {e.msg} at line {e.lineno}, column {e.colno}",
            path=str(file_path),
        ) from e
    logger.info(f"Loading rules from {file_path}")
    return load_config(raw)


def build_rule(raw: Any, location: str):
    """Build one rule from its object form."""
    if not isinstance(raw, dict):
        raise ConfigError(f"Rule must be an object, got {type(raw).__name__}", path=location)

    rule_type = raw.get("type")
    if rule_type not in RULE_TYPES:
        raise ConfigError(
            f"Unknown rule type {rule_type!r}, expected one of {', '.join(RULE_TYPES)}",
            path=location,
        )

    try:
        if rule_type == "copy_field":
            rule = copy_field(_required(raw, "from", location), raw.get("to"))
            validators = [_validator(v, f"{location}.validators[{i}]")
                          for i, v in enumerate(_list(raw, "validators", location))]
            if validators:
                rule = rule.with_validators(*validators)
            if raw.get("mapper") is not None:
                rule = rule.with_mapper(_mapper(raw["mapper"], f"{location}.mapper"))
            return rule
        elif rule_type == "copy_fields":
            fields = _list(raw, "fields", location)
            if not fields or not all(isinstance(name, str) for name in fields):
                raise ConfigError("'fields' must be a non-empty list of names", path=location)
            return copy_fields(*fields)
        elif rule_type == "copy":
            return copy(_required(raw, "path", location))
        elif rule_type == "merge_object":
            return merge_object(raw.get("path", ""))
        else:
            nested = load_nested(raw, location)
            return copy_array_of_objects(
                _required(raw, "path", location), nested, _required(raw, "id_field", location)
            )
    except MalformedPathError as e:
        raise ConfigError(f"Invalid path: {e.message}", path=f"{location}: {e.path}") from e
    except ValueError as e:
        raise ConfigError(str(e), path=location) from e


def load_nested(raw: Dict[str, Any], location: str) -> TransformationConfig:
    rules = _rule_list(raw.get("rules", []), f"{location}.rules")
    config = TransformationConfig()
    for position, item in enumerate(rules):
        config = config.add(build_rule(item, f"{location}.rules[{position}]"))
    return config


def _rule_list(raw: Any, location: str) -> List[Any]:
    if isinstance(raw, dict) and "rules" in raw:
        raw = raw["rules"]
    if not isinstance(raw, list):
        raise ConfigError(f"Expected a list of rules, got {type(raw).__name__}", path=location)
    return raw


def _required(raw: Dict[str, Any], key: str, location: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise ConfigError(f"Missing or non-string '{key}'", path=location)
    return value


def _list(raw: Dict[str, Any], key: str, location: str) -> List[Any]:
    value = raw.get(key, [])
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list", path=location)
    return value


def _validator(raw: Any, location: str) -> ValidatorInterface:
    name = raw.get("name") if isinstance(raw, dict) else raw
    if not isinstance(name, str):
        raise ConfigError("Validator must be a name or an object with 'name'", path=location)
    try:
        return get_validator(name)
    except KeyError as e:
        raise ConfigError(e.args[0], path=location) from e


def _mapper(raw: Any, location: str) -> MapperInterface:
    options: Dict[str, Any] = {}
    if isinstance(raw, dict):
        options = {k: v for k, v in raw.items() if k != "name"}
        name: Optional[str] = raw.get("name")
    else:
        name = raw
    if not isinstance(name, str):
        raise ConfigError("Mapper must be a name or an object with 'name'", path=location)
    try:
        return get_mapper(name, **options)
    except KeyError as e:
        raise ConfigError(e.args[0], path=location) from e
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid options for mapper '{name}': {e}", path=location) from e
