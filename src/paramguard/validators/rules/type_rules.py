"""Type checks, coercion and array element type rules."""

import math
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional

from ..base import (
    ArrayType,
    BaseFieldCheck,
    CheckResult,
    Constraint,
    FieldRule,
    FieldType,
    is_defined,
    is_real_number,
)

_NUMERIC_REGEX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_REGEX = re.compile(r"^[+-]?\d+$")

# Below the interpreter's int-from-string digit limit (4300)
_MAX_NUMERIC_LENGTH = 4000

_BOOLEAN_STRINGS = {"0", "1", "false", "true"}
_TRUE_STRINGS = {"1", "true"}

# Formats tried before falling back to ISO 8601 parsing
_DATE_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d %B %Y",
    "%B %d, %Y",
]


def is_numeric(value: Any) -> bool:
    """True for finite real numbers and non-empty numeric strings."""
    if isinstance(value, int) and not isinstance(value, bool):
        return True
    if is_real_number(value):
        return math.isfinite(value)
    if isinstance(value, str):
        text = value.strip()
        if len(text) > _MAX_NUMERIC_LENGTH or not _NUMERIC_REGEX.match(text):
            return False
        return math.isfinite(float(text))
    return False


def to_integer(value: Any) -> int:
    """Truncate a numeric value (or numeric string) to an int."""
    if isinstance(value, str):
        value = value.strip()
        if _INTEGER_REGEX.match(value):
            return int(value)
        return int(float(value))
    return int(value)


def is_boolean_like(value: Any) -> bool:
    if isinstance(value, str):
        return value in _BOOLEAN_STRINGS
    if isinstance(value, bool):
        return True
    return isinstance(value, int) and value in (0, 1)


def to_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value in _TRUE_STRINGS
    return value == 1


def is_date_like(value: Any) -> bool:
    """True for values that can already report a point in time."""
    if isinstance(value, (datetime, date)):
        return True
    return callable(getattr(value, "timestamp", None))


def parse_date(value: str) -> Optional[datetime]:
    """
    Parse a date string.

    Tries a list of common formats, then ISO 8601 (a trailing ``Z`` is read
    as UTC).

    Returns:
        datetime, or None if the string is not a recognizable date
    """
    text = value.strip()
    if not text:
        return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


class TypeCheck(BaseFieldCheck):
    """Check the declared type and coerce the value on success."""

    @property
    def constraint(self) -> Constraint:
        return Constraint.TYPE

    def check(self, value: Any, rule: FieldRule) -> CheckResult:
        if not is_defined(value):
            return CheckResult(passed=True, value=value)

        field_type = rule.type

        if field_type in (FieldType.NUMERIC, FieldType.NUMBER):
            if not is_numeric(value):
                return CheckResult(passed=False, value=value)
            return CheckResult(passed=True, value=to_integer(value))

        if field_type == FieldType.BOOLEAN:
            if not is_boolean_like(value):
                return CheckResult(passed=False, value=value)
            return CheckResult(passed=True, value=to_boolean(value))

        if field_type == FieldType.DATE:
            if is_date_like(value):
                return CheckResult(passed=True, value=value)
            if isinstance(value, str):
                parsed = parse_date(value)
                if parsed is not None:
                    return CheckResult(passed=True, value=parsed)
            return CheckResult(passed=False, value=value)

        if field_type == FieldType.ARRAY:
            return CheckResult(passed=isinstance(value, list), value=value)

        if field_type == FieldType.STRING:
            return CheckResult(passed=isinstance(value, str), value=value)

        # object
        return CheckResult(passed=isinstance(value, (Mapping, list)), value=value)

    def describe(self, field_name: str, rule: FieldRule) -> str:
        return f"Param {field_name} has invalid type ({rule.type.value})"


class ArrayTypeCheck(BaseFieldCheck):
    """Check the type of every element of a list value."""

    @property
    def constraint(self) -> Constraint:
        return Constraint.ARRAY_TYPE

    def applies_to(self, rule: FieldRule) -> bool:
        return rule.array_type is not None

    def check(self, value: Any, rule: FieldRule) -> CheckResult:
        if not isinstance(value, list):
            return CheckResult(passed=True, value=value)
        passed = all(self._element_matches(item, rule.array_type) for item in value)
        return CheckResult(passed=passed, value=value)

    @staticmethod
    def _element_matches(item: Any, array_type: ArrayType) -> bool:
        if array_type == ArrayType.NUMERIC:
            return is_numeric(item)
        if array_type == ArrayType.NUMBER:
            return is_real_number(item)
        if array_type == ArrayType.BOOLEAN:
            return isinstance(item, bool)
        return isinstance(item, str)

    def describe(self, field_name: str, rule: FieldRule) -> str:
        return (
            f"Param {field_name} has invalid content type ({rule.array_type.value}[])"
        )
