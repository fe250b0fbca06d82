"""Length and min/max bound rules.

Numbers are compared by value, strings and lists by length. Any other value
(dates, mappings, booleans, absent values) passes.
"""

from typing import Any, Optional

from ..base import (
    BaseFieldCheck,
    CheckResult,
    Constraint,
    FieldRule,
    is_real_number,
    stringify,
)


def _measure(value: Any) -> Optional[float]:
    if is_real_number(value):
        return value
    if isinstance(value, (str, list)):
        return len(value)
    return None


class LengthCheck(BaseFieldCheck):
    """Exact length for strings and lists; numbers always pass."""

    @property
    def constraint(self) -> Constraint:
        return Constraint.LENGTH

    def applies_to(self, rule: FieldRule) -> bool:
        return rule.length is not None

    def check(self, value: Any, rule: FieldRule) -> CheckResult:
        if not isinstance(value, (str, list)):
            return CheckResult(passed=True, value=value)
        return CheckResult(passed=len(value) == rule.length, value=value)

    def describe(self, field_name: str, rule: FieldRule) -> str:
        return f"Param {field_name} must have a length of {stringify(rule.length)}"


class MinCheck(BaseFieldCheck):
    @property
    def constraint(self) -> Constraint:
        return Constraint.MIN

    def applies_to(self, rule: FieldRule) -> bool:
        return rule.min is not None

    def check(self, value: Any, rule: FieldRule) -> CheckResult:
        measured = _measure(value)
        if measured is None:
            return CheckResult(passed=True, value=value)
        return CheckResult(passed=measured >= rule.min, value=value)

    def describe(self, field_name: str, rule: FieldRule) -> str:
        return f"Param {field_name} must have a minimum length of {stringify(rule.min)}"


class MaxCheck(BaseFieldCheck):
    @property
    def constraint(self) -> Constraint:
        return Constraint.MAX

    def applies_to(self, rule: FieldRule) -> bool:
        return rule.max is not None

    def check(self, value: Any, rule: FieldRule) -> CheckResult:
        measured = _measure(value)
        if measured is None:
            return CheckResult(passed=True, value=value)
        return CheckResult(passed=measured <= rule.max, value=value)

    def describe(self, field_name: str, rule: FieldRule) -> str:
        return f"Param {field_name} must have a maximum length of {stringify(rule.max)}"
