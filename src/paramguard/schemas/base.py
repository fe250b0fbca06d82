"""Result models for request validation."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from ..validators.base import ErrorRecord


class SectionReport(BaseModel):
    """Errors produced by one request section."""

    section: str
    label: str
    records: List[ErrorRecord] = Field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        """Messages with the section label prefixed, custom messages left as-is."""
        return [
            r.message if r.is_custom else f"{self.label}: {r.message}"
            for r in self.records
        ]


class ValidationOutcome(BaseModel):
    """Outcome of validating one request."""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    sections: List[SectionReport] = Field(default_factory=list)
    fail_on_first_error: bool = True
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def sections_checked(self) -> List[str]:
        return [s.section for s in self.sections]

    @property
    def message(self) -> str:
        """Error message handed to the continuation ("" when valid)."""
        if not self.errors:
            return ""
        if self.fail_on_first_error:
            return self.errors[0]
        return "\n".join(self.errors)
