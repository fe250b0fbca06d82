"""Built-in field checks."""

from .bound_rules import LengthCheck, MaxCheck, MinCheck
from .content_rules import RegexCheck, ValuesCheck
from .presence_rules import RequiredCheck
from .type_rules import ArrayTypeCheck, TypeCheck


def get_all_default_checks():
    """Instantiate all built-in checks in evaluation order."""
    return [
        # Presence
        RequiredCheck(),
        # Type
        TypeCheck(),
        ArrayTypeCheck(),
        # Bounds
        LengthCheck(),
        MinCheck(),
        MaxCheck(),
        # Content
        ValuesCheck(),
        RegexCheck(),
    ]
