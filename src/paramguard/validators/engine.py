"""Field evaluator that runs compiled rules against one request section."""

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, List, Optional, Tuple

from ..config import DEFAULT_MESSAGE_KEY, DISALLOW_EXTRA_FIELDS_KEY
from .base import (
    MISSING,
    BaseFieldCheck,
    Constraint,
    ErrorRecord,
    FieldRule,
    FieldType,
    is_defined,
)
from .compiler import compile_rule

logger = logging.getLogger(__name__)


def build_plan(section_schema: Mapping) -> List[Tuple[str, FieldRule]]:
    """
    Compile a section schema into an ordered evaluation plan.

    Terminal fields come first, ordinary fields after, each group keeping
    schema order. Entries that do not compile are left out.
    """
    terminal: List[Tuple[str, FieldRule]] = []
    ordinary: List[Tuple[str, FieldRule]] = []
    for name, raw in section_schema.items():
        if name == DISALLOW_EXTRA_FIELDS_KEY:
            continue
        rule = compile_rule(raw)
        if rule is None:
            continue
        (terminal if rule.is_terminal else ordinary).append((name, rule))
    return terminal + ordinary


def _custom_message(
    messages: Optional[Mapping], key: Optional[str], constraint: str
) -> Optional[str]:
    if not messages or key is None:
        return None
    entry = messages.get(key)
    if not isinstance(entry, Mapping):
        return None
    message = entry.get(constraint)
    return message if isinstance(message, str) else None


class FieldEvaluator:
    """
    Executes compiled field rules against an input mapping.

    Usage:
        evaluator = FieldEvaluator(fail_on_first_error=False)
        errors = evaluator.evaluate_section(request_query, schema, from_url=True)
    """

    def __init__(
        self,
        fail_on_first_error: bool = True,
        array_separator: str = ",",
        checks: Optional[List[BaseFieldCheck]] = None,
    ):
        self.fail_on_first_error = fail_on_first_error
        self.array_separator = array_separator
        self._checks: List[BaseFieldCheck] = (
            list(checks) if checks is not None else self._get_default_checks()
        )

    @staticmethod
    def _get_default_checks() -> List[BaseFieldCheck]:
        from .rules import get_all_default_checks

        return get_all_default_checks()

    @property
    def checks(self) -> List[BaseFieldCheck]:
        return list(self._checks)

    def evaluate_section(
        self,
        data: Optional[MutableMapping],
        section_schema: Optional[Mapping],
        from_url: bool,
        messages: Optional[Mapping] = None,
    ) -> List[ErrorRecord]:
        """
        Validate one section (url, query or body) and coerce its values.

        Coerced and formatted values are written back into ``data``.

        Args:
            data: Section input; None is treated as an empty mapping
            section_schema: Field name -> raw rule descriptor
            from_url: True for url/query sections (enables comma-split arrays)
            messages: Optional custom message table (field -> constraint -> text)

        Returns:
            Ordered list of ErrorRecord
        """
        if not isinstance(section_schema, Mapping) or not section_schema:
            return []
        if data is None:
            data = {}

        errors: List[ErrorRecord] = []

        if section_schema.get(DISALLOW_EXTRA_FIELDS_KEY) is True:
            extra = self._check_extra_fields(data, section_schema, messages)
            if extra is not None:
                errors.append(extra)
                if self.fail_on_first_error:
                    return errors

        for name, rule in build_plan(section_schema):
            value, field_errors = self.evaluate_field(
                name, data.get(name, MISSING), rule, from_url, messages
            )

            if value is MISSING:
                data.pop(name, None)
            elif name in data:
                data[name] = value

            stop = False
            if rule.terminal_constraints:
                selected = [
                    e for e in field_errors if e.constraint in rule.terminal_constraints
                ]
                if selected:
                    field_errors = selected
                    stop = True
            elif rule.terminal is True and field_errors:
                stop = True

            errors.extend(field_errors)

            if stop or (field_errors and self.fail_on_first_error):
                logger.debug("Stopping section evaluation at field %s", name)
                break

        return errors

    def evaluate_field(
        self,
        name: str,
        value: Any,
        rule: FieldRule,
        from_url: bool = False,
        messages: Optional[Mapping] = None,
    ) -> Tuple[Any, List[ErrorRecord]]:
        """
        Run every configured check on one field value.

        Checks are independent: a failure never stops the following checks.

        Args:
            name: Field name
            value: Raw value, or MISSING when the key is absent
            rule: Compiled rule for the field
            from_url: Whether string values for array fields are comma lists
            messages: Optional custom message table

        Returns:
            Tuple of (new value, errors); the new value is MISSING if absent
        """
        if rule.type == FieldType.ARRAY and from_url and isinstance(value, str):
            items = [item for item in value.split(self.array_separator) if item]
            value = items if items else MISSING

        field_errors: List[ErrorRecord] = []
        for check in self._checks:
            if not check.applies_to(rule):
                continue
            result = check.check(value, rule)
            value = result.value
            if not result.passed:
                field_errors.append(self._error(name, rule, check, messages))

        if rule.format is not None and is_defined(value):
            value = rule.format(value)

        return value, field_errors

    @staticmethod
    def _error(
        name: str,
        rule: FieldRule,
        check: BaseFieldCheck,
        messages: Optional[Mapping],
    ) -> ErrorRecord:
        custom = _custom_message(messages, name, check.constraint.value)
        if custom is not None:
            return ErrorRecord(
                field=name, constraint=check.constraint, message=custom, is_custom=True
            )
        return ErrorRecord(
            field=name,
            constraint=check.constraint,
            message=check.describe(name, rule),
        )

    @staticmethod
    def _check_extra_fields(
        data: Mapping,
        section_schema: Mapping,
        messages: Optional[Mapping],
    ) -> Optional[ErrorRecord]:
        extra = [
            key
            for key in data
            if key not in section_schema or key == DISALLOW_EXTRA_FIELDS_KEY
        ]
        if not extra:
            return None

        custom = _custom_message(messages, DISALLOW_EXTRA_FIELDS_KEY, DEFAULT_MESSAGE_KEY)
        if custom is not None:
            return ErrorRecord(
                field=None,
                constraint=Constraint.DISALLOW_EXTRA_FIELDS,
                message=custom,
                is_custom=True,
            )
        return ErrorRecord(
            field=None,
            constraint=Constraint.DISALLOW_EXTRA_FIELDS,
            message=f"Should not contain extra fields ({', '.join(map(str, extra))})",
        )
