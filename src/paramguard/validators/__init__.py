"""
Rule evaluation engine for request fields.

Compiles loosely-typed field schemas into FieldRule objects and runs them
against request sections, coercing values and collecting ErrorRecords.
"""

from .base import (
    MISSING,
    ArrayType,
    BaseFieldCheck,
    CheckResult,
    Constraint,
    ErrorRecord,
    FieldRule,
    FieldType,
)
from .compiler import compile_rule
from .engine import FieldEvaluator, build_plan


def evaluate_section(
    data, section_schema, from_url=False, messages=None, fail_on_first_error=True
):
    """
    One-liner section evaluation.

    Args:
        data: Section input mapping (mutated in place by coercion)
        section_schema: Field name -> raw rule descriptor
        from_url: Treat string values of array fields as comma lists
        messages: Optional custom message table
        fail_on_first_error: Stop at the first failing field (default: True)

    Returns:
        List of ErrorRecord
    """
    evaluator = FieldEvaluator(fail_on_first_error=fail_on_first_error)
    return evaluator.evaluate_section(data, section_schema, from_url, messages)


__all__ = [
    "MISSING",
    "ArrayType",
    "BaseFieldCheck",
    "CheckResult",
    "Constraint",
    "ErrorRecord",
    "FieldRule",
    "FieldType",
    "FieldEvaluator",
    "build_plan",
    "compile_rule",
    "evaluate_section",
]
