"""Presence rules."""

from typing import Any

from ..base import BaseFieldCheck, CheckResult, Constraint, FieldRule, is_defined


class RequiredCheck(BaseFieldCheck):
    """Fail when a required field is absent or null."""

    @property
    def constraint(self) -> Constraint:
        return Constraint.REQUIRED

    def applies_to(self, rule: FieldRule) -> bool:
        return rule.required

    def check(self, value: Any, rule: FieldRule) -> CheckResult:
        return CheckResult(passed=is_defined(value), value=value)

    def describe(self, field_name: str, rule: FieldRule) -> str:
        return f"Param {field_name} is required"
