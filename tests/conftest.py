"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest

from paramguard import RequestValidator
from paramguard.validators import FieldEvaluator


@pytest.fixture
def validator() -> RequestValidator:
    """Validator in the default fail-first mode."""
    return RequestValidator(Exception)


@pytest.fixture
def slow_validator() -> RequestValidator:
    """Validator that reports every error."""
    v = RequestValidator()
    v.disable_fail_on_first_error()
    return v


@pytest.fixture
def evaluator() -> FieldEvaluator:
    return FieldEvaluator(fail_on_first_error=False)


@pytest.fixture
def next_() -> MagicMock:
    """Continuation callback."""
    return MagicMock()


@pytest.fixture
def run(next_):
    """Validate a request and return the error message, or None on success."""

    def _run(v: RequestValidator, request):
        next_.reset_mock()
        v.validate(request, next_)
        next_.assert_called_once()
        if not next_.call_args.args:
            return None
        return str(next_.call_args.args[0])

    return _run


@pytest.fixture
def make_request():
    """Build a request dict shaped like a routed framework request."""

    def _make(validation, messages=None, **inputs):
        route = {"validation": validation}
        if messages is not None:
            route["validationMessages"] = messages
        return {"route": route, **inputs}

    return _make
