"""Data models for paramguard."""

from .base import SectionReport, ValidationOutcome

__all__ = [
    "SectionReport",
    "ValidationOutcome",
]
