"""Severity count validation and aggregation.

Turns issue lists, CLI input and JSON issue reports into the
severity -> count mapping consumed by ``compute_health``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path

from pydantic import ValidationError

from ..models.issue import Issue, IssueReport
from ..models.severity import Severity


def validate_counts(counts: Mapping[Severity, int]) -> dict[Severity, int]:
    """Check that every key is a Severity and every count a non-negative int."""
    if counts is None:
        raise ValueError("Severity counts must not be None")

    result: dict[Severity, int] = {}
    for severity, count in counts.items():
        if not isinstance(severity, Severity):
            raise ValueError(f"Not a severity: {severity!r}")
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValueError(f"Count for {severity.value} must be an integer, got {count!r}")
        if count < 0:
            raise ValueError(f"Count for {severity.value} must not be negative, got {count}")
        result[severity] = count
    return result


def parse_counts(raw: Mapping[str, object]) -> dict[Severity, int]:
    """Convert text input like ``{"high": "3"}`` into severity counts.

    Severities that appear more than once (e.g. ``high`` and ``HIGH``) are summed.
    """
    result: dict[Severity, int] = {}
    for name, value in raw.items():
        severity = Severity.parse(name)
        if isinstance(value, bool):
            raise ValueError(f"Invalid count for {severity.value}: {value!r}")
        try:
            count = int(str(value).strip())
        except ValueError:
            raise ValueError(f"Invalid count for {severity.value}: {value!r}") from None
        if count < 0:
            raise ValueError(f"Count for {severity.value} must not be negative, got {count}")
        result[severity] = result.get(severity, 0) + count
    return result


def count_by_severity(issues: Iterable[Issue]) -> dict[Severity, int]:
    """Count issues by severity with a key for every severity."""
    counts = {severity: 0 for severity in Severity}
    for issue in issues:
        counts[issue.severity] += 1
    return counts


def merge_counts(*all_counts: Mapping[Severity, int]) -> dict[Severity, int]:
    """Sum several count mappings, e.g. one per analysis tool."""
    merged: dict[Severity, int] = {}
    for counts in all_counts:
        for severity, count in validate_counts(counts).items():
            merged[severity] = merged.get(severity, 0) + count
    return merged


def load_issue_report(path: Path) -> IssueReport:
    """Load a JSON issue report.

    Accepts either ``{"tool": "...", "issues": [...]}`` or a bare list of issues.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read issue report {path}: {e}") from e

    if isinstance(data, list):
        data = {"issues": data}
    if not isinstance(data, dict):
        raise ValueError(f"Issue report {path} must be a JSON object or list")

    try:
        return IssueReport.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid issue report {path}: {e}") from e
