"""Severity data model."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    ERROR = "ERROR"
    HIGH = "HIGH"
    NORMAL = "NORMAL"
    LOW = "LOW"

    @classmethod
    def parse(cls, value: object) -> Severity:
        """Parse a severity name case-insensitively."""
        if isinstance(value, Severity):
            return value
        name = str(value).strip().upper()
        try:
            return cls(name)
        except ValueError:
            raise ValueError(
                f"Unknown severity '{value}'. Expected one of: "
                f"{', '.join(s.value for s in cls)}"
            ) from None

    @classmethod
    def filter_scale(cls) -> list[Severity]:
        """Severities that can be filtered by a minimum, most severe first."""
        return [cls.HIGH, cls.NORMAL, cls.LOW]

    @classmethod
    def collect_from(cls, minimum: Severity) -> list[Severity]:
        """Return the filter-scale severities at or above ``minimum``.

        ERROR is not part of the scale and is never returned here.
        """
        scale = cls.filter_scale()
        if minimum not in scale:
            raise ValueError(f"{minimum.value} is not a filterable severity")
        return [severity for severity in scale if severity.is_at_least(minimum)]

    @property
    def rank(self) -> int:
        """0 for ERROR up to 3 for LOW."""
        return list(Severity).index(self)

    def is_at_least(self, minimum: Severity) -> bool:
        return self.rank <= minimum.rank
