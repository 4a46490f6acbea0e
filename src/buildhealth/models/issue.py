"""Issue data models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, field_validator

from .severity import Severity


class Issue(BaseModel):
    severity: Severity
    message: Optional[str] = None
    file: Optional[str] = None
    line: Optional[int] = None
    category: Optional[str] = None
    tool: Optional[str] = None

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value: object) -> Severity:
        return Severity.parse(value)


class IssueReport(BaseModel):
    tool: str = ""
    issues: list[Issue] = []
