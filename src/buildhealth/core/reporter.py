"""Health report pipeline.

Resolves configuration, gathers severity counts, computes the health and
prints it for the console or as JSON.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .. import __version__
from .config import CONFIG_DIR, get_config_path, get_effective_config, get_health_descriptor
from .counts import count_by_severity, load_issue_report, merge_counts
from .health import compute_health, count_relevant_issues
from .labels import StaticAnalysisLabels
from ..models.health import HealthDescriptor, HealthResult
from ..models.severity import Severity

console = Console()


def initialize_project(project_path: Path) -> None:
    """Initialize .build-health directory with a starter config."""
    config_path = get_config_path(project_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    if not config_path.exists():
        config_path.write_text(
            "# Build health configuration\n"
            "\n"
            f"build_health_version: \"{__version__}\"\n"
            "\n"
            "tool:\n"
            f'  name: "{project_path.name}"\n'
            "\n"
            "health:\n"
            "  healthy: 0\n"
            "  unhealthy: 0\n"
            "  minimum_severity: LOW\n",
            encoding="utf-8",
        )

    console.print(f"  [green]Initialized[/green] {CONFIG_DIR}/ in {project_path.name}")


def classify_health(result: Optional[HealthResult]) -> str:
    """Classify a health result for exit code mapping.

    - disabled: no result
    - healthy: 100%
    - unhealthy: 0%
    - degraded: everything else
    """
    if result is None:
        return "disabled"
    if result.percentage == 100:
        return "healthy"
    if result.percentage == 0:
        return "unhealthy"
    return "degraded"


def get_exit_code(classification: str, config: dict) -> int:
    """Map a health classification to the configured exit code."""
    exit_codes = (config.get("ci") or {}).get("exit_codes") or {}
    return int(exit_codes.get(classification, 0))


def gather_counts(
    counts: Optional[Mapping[Severity, int]] = None,
    issues_files: Iterable[Path] = (),
) -> dict[Severity, int]:
    """Merge explicit counts with the counts of each issue report."""
    all_counts: list[Mapping[Severity, int]] = []
    if counts:
        all_counts.append(counts)
    for path in issues_files:
        report = load_issue_report(path)
        all_counts.append(count_by_severity(report.issues))
    merged = merge_counts(*all_counts)
    return {severity: merged.get(severity, 0) for severity in Severity}


def build_report_document(
    descriptor: HealthDescriptor,
    result: Optional[HealthResult],
    counts: Mapping[Severity, int],
) -> dict:
    """Build the JSON document for a health result."""
    return {
        "version": __version__,
        "enabled": descriptor.is_enabled,
        "valid": descriptor.is_valid,
        "thresholds": {
            "healthy": descriptor.healthy,
            "unhealthy": descriptor.unhealthy,
            "minimumSeverity": descriptor.minimum_severity.value,
        },
        "relevantCount": count_relevant_issues(descriptor.minimum_severity, counts),
        "percentage": result.percentage if result else None,
        "message": result.message if result else None,
        "counts": {severity.value: int(counts.get(severity, 0)) for severity in Severity},
    }


def _print_text_report(
    descriptor: HealthDescriptor,
    result: Optional[HealthResult],
    counts: Mapping[Severity, int],
    tool_name: str,
) -> None:
    relevant = count_relevant_issues(descriptor.minimum_severity, counts)

    console.print()
    console.print("  [bold cyan]BUILD HEALTH[/bold cyan]")
    if tool_name:
        console.print(f"  Tool:     [white]{escape(tool_name)}[/white]")
    console.print(
        "  Issues:   "
        + ", ".join(f"{s.value} {counts.get(s, 0)}" for s in Severity)
    )
    console.print(
        f"  Relevant: [white]{relevant}[/white] "
        f"(minimum severity {descriptor.minimum_severity.value}, errors always counted)"
    )

    if result is None:
        if descriptor.is_enabled:
            console.print(
                f"  [yellow]WARN[/yellow] Invalid thresholds: healthy={descriptor.healthy}, "
                f"unhealthy={descriptor.unhealthy} (need 0 <= healthy < unhealthy)"
            )
        console.print("  Health reporting disabled")
        console.print()
        return

    classification = classify_health(result)
    color = {"healthy": "green", "degraded": "yellow", "unhealthy": "red"}[classification]
    console.print(f"  [{color}]Health: {result.percentage}%[/{color}]  {escape(result.message)}")
    console.print()


def run_health_report(
    project_path: Optional[Path] = None,
    counts: Optional[Mapping[Severity, int]] = None,
    issues_files: Iterable[Path] = (),
    output_format: Optional[str] = None,
    ci: bool = False,
    cli_overrides: Optional[dict] = None,
) -> int:
    """Compute and print the health of a build.

    Returns:
        Exit code. Always 0 unless ``ci`` is set, in which case the health
        classification is mapped through ``ci.exit_codes``.
    """
    config = get_effective_config(project_path, cli_overrides)
    descriptor = get_health_descriptor(config)
    tool_name = (config.get("tool") or {}).get("name", "")
    labels = StaticAnalysisLabels(tool_name)

    all_counts = gather_counts(counts, issues_files)
    result = compute_health(descriptor, labels, all_counts)

    fmt = output_format or (config.get("output") or {}).get("format", "text")
    if fmt == "json":
        document = build_report_document(descriptor, result, all_counts)
        console.print_json(json.dumps(document))
    else:
        _print_text_report(descriptor, result, all_counts, tool_name)

    exit_code = 0
    if ci:
        exit_code = get_exit_code(classify_health(result), config)
        if fmt != "json":
            console.print(f"  CI Mode: Exiting with code {exit_code}")
    return exit_code
