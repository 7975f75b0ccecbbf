"""
Configuration loader with deep merge.

Precedence (lowest to highest):
1. Defaults (defined in the Pydantic schemas, including the built-in registry)
2. YAML file (--config, or skillsync.yaml at the workspace root)
3. Environment variables
4. CLI arguments

A YAML `registry:` section replaces the built-in `sources` or `vendors`
for whichever of the two keys it defines.
"""

import os
from pathlib import Path
from typing import Any

import yaml

from .schema import AppConfig

DEFAULT_CONFIG_NAME = "skillsync.yaml"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursive dictionary merge. Override wins on leaf conflicts.

    Example:
        >>> deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"b": 99}, "d": 4})
        {'a': {'b': 99, 'c': 2}, 'd': 4}
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def find_config(workspace_root: Path) -> Path | None:
    """Return the default config file of a workspace if it exists."""
    candidate = workspace_root / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def load_yaml_config(config_path: Path | None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Returns:
        Parsed mapping, or an empty dict when no path is given or the file is empty.

    Raises:
        FileNotFoundError: If config_path does not exist.
        ValueError: If the document is not a mapping.
    """
    if not config_path:
        return {}

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: top-level YAML must be a mapping")
    return data


def load_env_overrides() -> dict[str, Any]:
    """Load overrides from environment variables.

    Supported variables:
        SKILLSYNC_WORKSPACE: overrides workspace.root
        SKILLSYNC_LOG_LEVEL: overrides logging.level
        SKILLSYNC_LOG_FILE: overrides logging.file
    """
    overrides: dict[str, Any] = {}

    if workspace := os.environ.get("SKILLSYNC_WORKSPACE"):
        overrides.setdefault("workspace", {})["root"] = workspace

    if log_level := os.environ.get("SKILLSYNC_LOG_LEVEL"):
        overrides.setdefault("logging", {})["level"] = log_level.lower()

    if log_file := os.environ.get("SKILLSYNC_LOG_FILE"):
        overrides.setdefault("logging", {})["file"] = log_file

    return overrides


def apply_cli_overrides(config_dict: dict[str, Any], cli_args: dict[str, Any]) -> dict[str, Any]:
    """Apply overrides coming from CLI options."""
    overrides: dict[str, Any] = {}

    if cli_args.get("workspace"):
        overrides.setdefault("workspace", {})["root"] = cli_args["workspace"]

    if cli_args.get("log_file"):
        overrides.setdefault("logging", {})["file"] = cli_args["log_file"]

    if cli_args.get("verbose"):
        overrides.setdefault("logging", {})["verbose"] = cli_args["verbose"]

    return deep_merge(config_dict, overrides)


def load_config(
    config_path: Path | None = None,
    cli_args: dict[str, Any] | None = None,
) -> AppConfig:
    """Load and validate the full application configuration.

    When config_path is None, skillsync.yaml at the workspace root (from
    the CLI, else SKILLSYNC_WORKSPACE, else the current directory) is used
    if present.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
        ValueError: If the YAML is not a mapping.
        ValidationError: If the merged configuration is invalid.
    """
    cli_args = cli_args or {}

    if config_path is None:
        workspace = cli_args.get("workspace") or os.environ.get("SKILLSYNC_WORKSPACE") or "."
        config_path = find_config(Path(workspace))

    yaml_config = load_yaml_config(config_path)
    merged = deep_merge(yaml_config, load_env_overrides())
    merged = apply_cli_overrides(merged, cli_args)

    return AppConfig(**merged)
