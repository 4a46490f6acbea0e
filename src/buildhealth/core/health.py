"""Health computation for a build.

Maps the number of relevant issues onto a percentage using the healthy and
unhealthy thresholds of a ``HealthDescriptor``:

- fewer issues than ``healthy``: 100%
- more issues than ``unhealthy``: 0%
- in between: linear ramp from 100% at ``healthy`` to 0% at ``unhealthy``

Only issues at or above the descriptor's minimum severity are relevant.
ERROR issues are tool failures and are always relevant.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from .counts import validate_counts
from .labels import LabelProvider
from ..models.health import HealthDescriptor, HealthResult
from ..models.severity import Severity


def count_relevant_issues(
    minimum_severity: Severity,
    counts: Mapping[Severity, int],
) -> int:
    """Sum ERROR issues plus issues at or above ``minimum_severity``."""
    relevant = 0
    for severity in Severity.collect_from(minimum_severity):
        relevant += counts.get(severity, 0)
    relevant += counts.get(Severity.ERROR, 0)
    return relevant


def compute_health(
    descriptor: HealthDescriptor,
    label_provider: LabelProvider,
    counts: Mapping[Severity, int],
) -> Optional[HealthResult]:
    """Compute the health of a build.

    Args:
        descriptor: Thresholds and minimum severity.
        label_provider: Returns the result message for the relevant count.
        counts: Number of issues per severity; missing severities count as 0.

    Returns:
        The health result, or None when the descriptor is invalid and health
        reporting is therefore disabled.

    Raises:
        ValueError: If ``counts`` is None or holds negative or non-integer counts.
    """
    counts = validate_counts(counts)
    relevant = count_relevant_issues(descriptor.minimum_severity, counts)

    if not descriptor.is_valid:
        return None

    healthy = descriptor.healthy
    unhealthy = descriptor.unhealthy
    if relevant < healthy:
        percentage = 100
    elif relevant > unhealthy:
        percentage = 0
    else:
        percentage = 100 - ((relevant - healthy) * 100 // (unhealthy - healthy))

    return HealthResult(percentage=percentage, message=label_provider(relevant))
