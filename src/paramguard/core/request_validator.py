"""
Request validator: runs the field evaluator over url, query and body.

This is the primary public API for paramguard.
"""

import logging
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Type

from ..config import SECTION_LABELS, ValidatorSettings
from ..schemas.base import SectionReport, ValidationOutcome
from ..validators.engine import FieldEvaluator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Section:
    """Where a section's schema and input live on the request."""

    name: str
    sources: Tuple[str, ...]
    from_url: bool

    @property
    def label(self) -> str:
        return SECTION_LABELS[self.name]


# Evaluated and reported in this order
SECTIONS = (
    Section(name="url", sources=("params",), from_url=True),
    Section(name="query", sources=("query",), from_url=True),
    Section(name="body", sources=("body", "params"), from_url=False),
)


def _get(obj: Any, name: str) -> Any:
    """Read a key from a mapping or an attribute from an object."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _set(obj: Any, name: str, value: Any) -> None:
    if isinstance(obj, MutableMapping):
        obj[name] = value
    elif not isinstance(obj, Mapping):
        setattr(obj, name, value)


class RequestValidator:
    """
    Validates a request against the schema attached to its route.

    Features:
    - Per-section validation of url params, query string and body
    - In-place coercion of validated values
    - Custom per-field messages
    - Fail-first (default) or fail-slow error aggregation

    Usage:
        validator = RequestValidator()
        validator.validate(request, next_)

        # Collect every error instead of only the first:
        validator.disable_fail_on_first_error()
    """

    def __init__(
        self,
        error_handler: Type[BaseException] = Exception,
        settings: Optional[ValidatorSettings] = None,
    ):
        """
        Initialize the validator.

        Args:
            error_handler: Exception class built with the failure message
            settings: Optional settings (default: ValidatorSettings())
        """
        self.error_handler = error_handler
        self.settings = settings or ValidatorSettings()
        self._fail_on_first_error = self.settings.fail_on_first_error

    @property
    def fail_on_first_error(self) -> bool:
        return self._fail_on_first_error

    def disable_fail_on_first_error(self) -> None:
        """Report every error instead of only the first one."""
        self._fail_on_first_error = False

    def validate(self, request: Any, next_: Callable[..., Any]) -> None:
        """
        Validate the request and invoke the continuation.

        Calls ``next_()`` when the request is valid, otherwise
        ``next_(error)`` with an error built by ``error_handler``.

        Args:
            request: Mapping or object carrying route.validation and inputs
            next_: Continuation callback
        """
        outcome = self.check(request)
        if outcome.is_valid:
            next_()
            return
        next_(self.error_handler(outcome.message))

    def middleware(self, request: Any, response: Any, next_: Callable[..., Any]) -> None:
        """Framework-style (request, response, next) entry point."""
        self.validate(request, next_)

    def check(self, request: Any) -> ValidationOutcome:
        """
        Validate the request without invoking a continuation.

        Args:
            request: Mapping or object carrying route.validation and inputs

        Returns:
            ValidationOutcome
        """
        fail_first = self._fail_on_first_error
        schema, messages = self._resolve_schema(request)
        if not isinstance(schema, Mapping):
            return ValidationOutcome(is_valid=True, fail_on_first_error=fail_first)

        evaluator = FieldEvaluator(
            fail_on_first_error=fail_first,
            array_separator=self.settings.array_separator,
        )

        reports: List[SectionReport] = []
        for section in SECTIONS:
            if section.name not in schema:
                continue
            data = self._section_input(request, section)
            records = evaluator.evaluate_section(
                data, schema[section.name], section.from_url, messages
            )
            reports.append(
                SectionReport(section=section.name, label=section.label, records=records)
            )
            logger.debug(
                "Section %s validated with %d error(s)", section.name, len(records)
            )
            if records and fail_first:
                break

        errors = [message for report in reports for message in report.messages]
        return ValidationOutcome(
            is_valid=not errors,
            errors=errors,
            sections=reports,
            fail_on_first_error=fail_first,
        )

    @staticmethod
    def _resolve_schema(request: Any) -> Tuple[Any, Optional[Mapping]]:
        route = _get(request, "route")
        if route is None:
            route = request

        schema = _get(route, "validation")
        messages = _get(route, "validationMessages")
        if messages is None:
            messages = _get(route, "validation_messages")
        if not isinstance(messages, Mapping):
            messages = None
        return schema, messages

    @staticmethod
    def _section_input(request: Any, section: Section) -> Optional[MutableMapping]:
        for source in section.sources:
            data = _get(request, source)
            if data is None:
                continue
            if not isinstance(data, Mapping):
                return None
            if not isinstance(data, MutableMapping):
                # Read-only mapping: coerce into an owned copy and store it back
                data = dict(data)
                _set(request, source, data)
            return data
        return None
