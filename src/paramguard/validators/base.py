"""Base abstractions for field rules and constraint checks."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, FrozenSet, Optional, Tuple, Union


class _Missing:
    """Marker for a key that is absent from the input mapping."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class FieldType(str, Enum):
    """Declared type of a field."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    DATE = "date"
    ARRAY = "array"
    OBJECT = "object"


class ArrayType(str, Enum):
    """Element type allowed inside an array field."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NUMERIC = "numeric"


class Constraint(str, Enum):
    """Name of the check that produced an error."""

    REQUIRED = "required"
    TYPE = "type"
    ARRAY_TYPE = "arrayType"
    LENGTH = "length"
    MIN = "min"
    MAX = "max"
    VALUES = "values"
    REGEX = "regex"
    DISALLOW_EXTRA_FIELDS = "disallowExtraFields"


@dataclass(frozen=True)
class FieldRule:
    """Compiled constraint set for one schema field."""

    type: FieldType
    required: bool = False
    min: Optional[float] = 1
    max: Optional[float] = None
    length: Optional[float] = None
    array_type: Optional[ArrayType] = None
    values: Optional[Tuple[Any, ...]] = None
    regex: Optional[re.Pattern] = None
    format: Optional[Callable[[Any], Any]] = None
    terminal: Union[bool, FrozenSet[Constraint]] = False

    @property
    def is_terminal(self) -> bool:
        return bool(self.terminal)

    @property
    def terminal_constraints(self) -> FrozenSet[Constraint]:
        """Constraints that make this field terminal (empty for terminal=True/False)."""
        if isinstance(self.terminal, frozenset):
            return self.terminal
        return frozenset()


@dataclass
class ErrorRecord:
    """A single failed check on a field."""

    field: Optional[str]
    constraint: Constraint
    message: str
    is_custom: bool = False


@dataclass
class CheckResult:
    """Outcome of one check, carrying the (possibly coerced) value onwards."""

    passed: bool
    value: Any


def is_defined(value: Any) -> bool:
    """True when the value is present and not null."""
    return value is not MISSING and value is not None


def is_real_number(value: Any) -> bool:
    """True for int/float values; bool is not treated as a number."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def stringify(value: Any) -> str:
    """Render a value the way it appears in messages and regex tests."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(v) for v in value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class BaseFieldCheck(ABC):
    """Abstract base class for the per-field constraint checks."""

    @property
    @abstractmethod
    def constraint(self) -> Constraint:
        """Constraint name reported when this check fails."""
        ...

    def applies_to(self, rule: FieldRule) -> bool:
        """Check if this check is configured by the given rule."""
        return True

    @abstractmethod
    def check(self, value: Any, rule: FieldRule) -> CheckResult:
        """
        Run this check against one field value.

        Args:
            value: The current field value (MISSING when absent)
            rule: The compiled rule for the field

        Returns:
            CheckResult; value is the input value unless the check coerces it
        """
        ...

    @abstractmethod
    def describe(self, field_name: str, rule: FieldRule) -> str:
        """Default error message for a failure of this check."""
        ...
