"""3-layer configuration system for build health.

Loads and merges configuration from:
1. Default settings (built-in)
2. Project config (.build-health/config.yaml)
3. CLI parameters (override)
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Optional

import yaml

from ..models.health import HealthDescriptor

CONFIG_DIR = ".build-health"

DEFAULT_CONFIG: dict = {
    "tool": {
        "name": "",
    },
    "health": {
        "healthy": 0,
        "unhealthy": 0,
        "minimum_severity": "LOW",
    },
    "output": {
        "format": "text",
    },
    "ci": {
        "exit_codes": {"healthy": 0, "degraded": 2, "unhealthy": 1, "disabled": 0},
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def get_config_path(project_path: Path) -> Path:
    return project_path / CONFIG_DIR / "config.yaml"


def load_project_config(project_path: Path) -> dict:
    """Load project configuration from .build-health/config.yaml."""
    config_path = get_config_path(project_path)
    if not config_path.exists():
        return {}
    content = config_path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping")
    for key in DEFAULT_CONFIG:
        section = data.get(key)
        if section is not None and not isinstance(section, dict):
            raise ValueError(f"{config_path}: '{key}' must be a mapping")
    exit_codes = (data.get("ci") or {}).get("exit_codes")
    if exit_codes is not None and not isinstance(exit_codes, dict):
        raise ValueError(f"{config_path}: 'ci.exit_codes' must be a mapping")
    return data


def get_effective_config(
    project_path: Optional[Path] = None,
    cli_overrides: Optional[dict] = None,
) -> dict:
    """Get the fully resolved configuration for a health report."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    if project_path is not None:
        project_config = load_project_config(project_path)
        if project_config:
            config = deep_merge(config, project_config)
        config["_project_path"] = str(project_path)

    if cli_overrides:
        config = deep_merge(config, cli_overrides)

    return config


def get_health_descriptor(config: dict) -> HealthDescriptor:
    """Build the health descriptor from the ``health`` section."""
    health = config.get("health") or {}
    return HealthDescriptor(
        healthy=health.get("healthy", 0),
        unhealthy=health.get("unhealthy", 0),
        minimum_severity=health.get("minimum_severity", "LOW"),
    )
