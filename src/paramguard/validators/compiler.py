"""Compile raw schema descriptors into FieldRule objects."""

import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, FrozenSet, Optional, Union

from ..config import SUPPORTED_ARRAY_TYPES, SUPPORTED_TYPES
from .base import ArrayType, Constraint, FieldRule, FieldType, is_real_number

logger = logging.getLogger(__name__)

_CONSTRAINT_NAMES = {c.value: c for c in Constraint}


def _lookup(raw: Mapping, *keys: str) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def _compile_terminal(value: Any) -> Union[bool, FrozenSet[Constraint]]:
    if isinstance(value, bool):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        names = frozenset(
            _CONSTRAINT_NAMES[v]
            for v in value
            if isinstance(v, str) and v in _CONSTRAINT_NAMES
        )
        return names if names else False
    return False


def compile_rule(raw: Any) -> Optional[FieldRule]:
    """
    Turn a loosely-typed schema entry into a FieldRule.

    Entries without a supported ``type`` produce no rule. Any other property
    whose shape does not match is ignored and the default is kept, so a
    malformed schema degrades to weaker validation instead of failing.

    Args:
        raw: Schema entry for one field (usually a dict)

    Returns:
        FieldRule, or None when the entry should be skipped
    """
    if not isinstance(raw, Mapping):
        return None

    declared = raw.get("type")
    if not isinstance(declared, str) or declared not in SUPPORTED_TYPES:
        logger.debug("Skipping schema entry with unsupported type %r", declared)
        return None

    field_type = FieldType(declared)
    options: Dict[str, Any] = {
        "type": field_type,
        "min": 0 if field_type == FieldType.BOOLEAN else 1,
    }

    required = raw.get("required")
    if isinstance(required, bool):
        options["required"] = required

    for name in ("min", "max", "length"):
        value = raw.get(name)
        if is_real_number(value):
            options[name] = value

    array_type = _lookup(raw, "arrayType", "array_type")
    if isinstance(array_type, str) and array_type in SUPPORTED_ARRAY_TYPES:
        options["array_type"] = ArrayType(array_type)

    values = raw.get("values")
    if isinstance(values, (list, tuple)):
        options["values"] = tuple(values)

    regex = raw.get("regex")
    if isinstance(regex, re.Pattern):
        options["regex"] = regex

    fmt = raw.get("format")
    if callable(fmt):
        options["format"] = fmt

    if "terminal" in raw:
        options["terminal"] = _compile_terminal(raw["terminal"])

    return FieldRule(**options)
