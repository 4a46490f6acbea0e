"""Shared fixtures for build health tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal project directory for testing."""
    project = tmp_path / "test-project"
    project.mkdir()
    (project / "README.md").write_text("# Test Project\n", encoding="utf-8")
    return project


@pytest.fixture
def initialized_project(tmp_project: Path) -> Path:
    """Create a project with .build-health configured."""
    bh_dir = tmp_project / ".build-health"
    bh_dir.mkdir()
    (bh_dir / "config.yaml").write_text(
        'tool:\n  name: "CheckStyle"\n\n'
        "health:\n  healthy: 1\n  unhealthy: 9\n  minimum_severity: NORMAL\n",
        encoding="utf-8",
    )
    return tmp_project


@pytest.fixture
def sample_issues() -> list[dict]:
    """Return a sample issue list as emitted by an analysis run."""
    return [
        {"severity": "ERROR", "message": "Cannot parse Foo.java", "file": "src/Foo.java"},
        {"severity": "HIGH", "message": "Null dereference", "file": "src/Bar.java", "line": 12},
        {"severity": "NORMAL", "message": "Unused import", "file": "src/Bar.java", "line": 3},
        {"severity": "NORMAL", "message": "Missing javadoc", "file": "src/Baz.java", "line": 7},
        {"severity": "low", "message": "Line too long", "file": "src/Baz.java", "line": 40},
    ]


@pytest.fixture
def issues_file(tmp_path: Path, sample_issues: list[dict]) -> Path:
    """Write the sample issues as a JSON issue report."""
    path = tmp_path / "issues.json"
    path.write_text(
        json.dumps({"tool": "checkstyle", "issues": sample_issues}, indent=2),
        encoding="utf-8",
    )
    return path
