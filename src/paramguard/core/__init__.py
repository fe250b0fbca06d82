"""Request-level orchestration."""

from .request_validator import SECTIONS, RequestValidator, Section

__all__ = ["RequestValidator", "Section", "SECTIONS"]
