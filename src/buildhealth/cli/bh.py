"""Build Health (bh) - score a build from its issue counts.

Reads thresholds from .build-health/config.yaml, overridable on the command line.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.markup import escape

SEVERITY_CHOICES = ["HIGH", "NORMAL", "LOW"]


def _parse_count_options(values: tuple[str, ...]) -> list[tuple[str, str]]:
    """Split repeated ``SEVERITY=N`` options into name/count pairs."""
    pairs: list[tuple[str, str]] = []
    for value in values:
        name, sep, count = value.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected SEVERITY=N, got '{value}'", param_hint="--count")
        pairs.append((name, count))
    return pairs


@click.group(invoke_without_command=True)
@click.pass_context
@click.option("--project", "-p", type=click.Path(exists=True, file_okay=False), help="Project path")
@click.option("--healthy", type=int, help="Issue count below which health is 100%")
@click.option("--unhealthy", type=int, help="Issue count above which health is 0%")
@click.option("--minimum-severity", type=click.Choice(SEVERITY_CHOICES, case_sensitive=False))
@click.option("--count", "-c", "count_values", multiple=True, help="Issue count as SEVERITY=N (repeatable)")
@click.option("--issues", "-i", "issues_files", multiple=True, type=click.Path(exists=True, dir_okay=False),
              help="JSON issue report (repeatable)")
@click.option("--output-format", "-f", type=click.Choice(["text", "json"]))
@click.option("--ci", is_flag=True, help="CI mode: enable exit codes")
def bh_cli(
    ctx: click.Context,
    project: str | None,
    healthy: int | None,
    unhealthy: int | None,
    minimum_severity: str | None,
    count_values: tuple[str, ...],
    issues_files: tuple[str, ...],
    output_format: str | None,
    ci: bool,
) -> None:
    """Build Health - compute a health percentage from issue counts."""
    if ctx.invoked_subcommand is not None:
        return

    from ..core.counts import merge_counts, parse_counts
    from ..core.reporter import console, run_health_report

    try:
        pairs = _parse_count_options(count_values)
        counts = merge_counts(*(parse_counts({name: count}) for name, count in pairs))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--count") from e

    health: dict = {}
    if healthy is not None:
        health["healthy"] = healthy
    if unhealthy is not None:
        health["unhealthy"] = unhealthy
    if minimum_severity:
        health["minimum_severity"] = minimum_severity.upper()
    cli_overrides = {"health": health} if health else None

    try:
        exit_code = run_health_report(
            project_path=Path(project) if project else None,
            counts=counts,
            issues_files=[Path(f) for f in issues_files],
            output_format=output_format,
            ci=ci,
            cli_overrides=cli_overrides,
        )
    except (ValueError, ValidationError) as e:
        console.print(f"  [red]ERROR[/red] {escape(str(e))}")
        ctx.exit(11)
        return

    if ci:
        sys.exit(exit_code)


@bh_cli.command()
@click.option("--project", "-p", type=click.Path(exists=True, file_okay=False), required=True)
def init(project: str) -> None:
    """Initialize build health configuration in a project."""
    from ..core.reporter import initialize_project

    initialize_project(Path(project))


def main() -> None:
    bh_cli()


if __name__ == "__main__":
    main()
