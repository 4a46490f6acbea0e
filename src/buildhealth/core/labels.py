"""Labels used to describe a health result.

The scorer only needs a callable that turns a number of relevant issues into
text. ``StaticAnalysisLabels`` is the default used by the reporter.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LabelProvider(Protocol):
    """Protocol for anything that describes a count of relevant issues."""

    def __call__(self, count: int) -> str: ...


class StaticAnalysisLabels:
    """Tooltip texts for a static analysis tool."""

    def __init__(self, name: str = ""):
        self.name = name

    def tooltip(self, count: int) -> str:
        if count == 0:
            text = "No warnings"
        elif count == 1:
            text = "One warning"
        else:
            text = f"{count} warnings"
        if self.name:
            return f"{self.name}: {text}"
        return text

    def __call__(self, count: int) -> str:
        return self.tooltip(count)
