"""Loader configuration: defaults, YAML files and overrides."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from facts.errors import SettingsError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "default.yaml"


class FactSettings(BaseModel):
    """Knobs controlling where and how facts are loaded."""

    search_subdir: str = "hostfacts"
    lib_env_var: str = "HOSTFACTSLIB"
    env_prefix: str = "hostfacts"
    file_glob: str = "*.py"
    command_timeout: float = Field(default=10.0, gt=0)
    debug: bool | int | str = False


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise SettingsError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> FactSettings:
    """Merge config/default.yaml, an optional YAML file and overrides, in that order."""
    data = load_yaml(DEFAULT_CONFIG_PATH)
    if path is not None:
        data = merge_dicts(data, load_yaml(path))
    data = merge_dicts(data, overrides or {})
    try:
        return FactSettings.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(f"Invalid hostfacts settings: {exc}") from exc
