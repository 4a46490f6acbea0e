"""Health configuration and result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .severity import Severity


class HealthDescriptor(BaseModel):
    """Thresholds that map a number of relevant issues to a health percentage."""

    model_config = ConfigDict(frozen=True)

    healthy: int = 0
    unhealthy: int = 0
    minimum_severity: Severity = Severity.LOW

    @field_validator("minimum_severity", mode="before")
    @classmethod
    def _parse_severity(cls, value: object) -> Severity:
        severity = Severity.parse(value)
        if severity == Severity.ERROR:
            raise ValueError("minimum_severity must be one of HIGH, NORMAL, LOW")
        return severity

    @property
    def is_enabled(self) -> bool:
        return self.healthy != 0 or self.unhealthy != 0

    @property
    def is_valid(self) -> bool:
        return 0 <= self.healthy < self.unhealthy


class HealthResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    percentage: int = Field(ge=0, le=100)
    message: str
