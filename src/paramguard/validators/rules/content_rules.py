"""Allow-list and regex content rules."""

from typing import Any, Tuple

from ..base import (
    BaseFieldCheck,
    CheckResult,
    Constraint,
    FieldRule,
    is_defined,
    stringify,
)


def _same(a: Any, b: Any) -> bool:
    # bool never matches int (True == 1 in Python)
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return a == b


def _allowed(item: Any, values: Tuple[Any, ...]) -> bool:
    return any(_same(item, v) for v in values)


class ValuesCheck(BaseFieldCheck):
    """Value (or every list element) must belong to the allow-list."""

    @property
    def constraint(self) -> Constraint:
        return Constraint.VALUES

    def applies_to(self, rule: FieldRule) -> bool:
        return bool(rule.values)

    def check(self, value: Any, rule: FieldRule) -> CheckResult:
        if not is_defined(value):
            return CheckResult(passed=True, value=value)
        if isinstance(value, list):
            passed = all(_allowed(item, rule.values) for item in value)
        else:
            passed = _allowed(value, rule.values)
        return CheckResult(passed=passed, value=value)

    def describe(self, field_name: str, rule: FieldRule) -> str:
        return f"Param {field_name} must belong to [{stringify(rule.values)}]"


class RegexCheck(BaseFieldCheck):
    """Stringified value must contain a match for the pattern."""

    @property
    def constraint(self) -> Constraint:
        return Constraint.REGEX

    def applies_to(self, rule: FieldRule) -> bool:
        return rule.regex is not None

    def check(self, value: Any, rule: FieldRule) -> CheckResult:
        if not is_defined(value):
            return CheckResult(passed=True, value=value)
        return CheckResult(passed=bool(rule.regex.search(stringify(value))), value=value)

    def describe(self, field_name: str, rule: FieldRule) -> str:
        return f"Param {field_name} must match regex /{rule.regex.pattern}/"
