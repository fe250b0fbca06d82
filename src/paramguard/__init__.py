"""
paramguard - Declarative validation for request params, query strings and bodies

Check presence, type, shape and content of request fields against a schema,
coerce values in place, and report failures through a single callback.
"""

__version__ = "0.1.0"

import sys

if sys.version_info < (3, 10):
    raise RuntimeError("paramguard requires Python 3.10 or higher")

from .config import ValidatorSettings
from .core.request_validator import RequestValidator
from .schemas.base import SectionReport, ValidationOutcome
from .validators import (
    MISSING,
    ArrayType,
    Constraint,
    ErrorRecord,
    FieldEvaluator,
    FieldRule,
    FieldType,
    compile_rule,
    evaluate_section,
)


def validate_request(request, fail_on_first_error=True) -> ValidationOutcome:
    """
    One-liner request validation.

    Args:
        request: Mapping or object carrying route.validation and inputs
        fail_on_first_error: Stop at the first error (default: True)

    Returns:
        ValidationOutcome
    """
    validator = RequestValidator(
        settings=ValidatorSettings(fail_on_first_error=fail_on_first_error)
    )
    return validator.check(request)


__all__ = [
    "__version__",
    # Main API
    "RequestValidator",
    "validate_request",
    # Engine
    "FieldEvaluator",
    "compile_rule",
    "evaluate_section",
    # Types
    "FieldRule",
    "FieldType",
    "ArrayType",
    "Constraint",
    "ErrorRecord",
    "MISSING",
    # Result types
    "SectionReport",
    "ValidationOutcome",
    # Config
    "ValidatorSettings",
]
