"""Typer command handlers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import typer
import yaml

from core.runtime import HostFacts, init_host_facts
from core.settings import load_settings
from core.version import version
from facts.errors import UnknownFactError


def _runtime(config: Path | None = None, debug: bool = False) -> HostFacts:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    overrides: dict[str, Any] = {"debug": True} if debug else {}
    return init_host_facts(load_settings(config, overrides))


def show(
    names: list[str],
    as_yaml: bool = False,
    config: Path | None = None,
    debug: bool = False,
) -> None:
    """Print the requested facts, or every fact with a value."""
    host_facts = _runtime(config, debug)
    if names:
        data: dict[str, Any] = {}
        missing: list[str] = []
        for name in names:
            try:
                data[name] = host_facts.get(name)
            except UnknownFactError as exc:
                missing.append(exc.name)
        for name in missing:
            typer.echo(f"Could not find fact '{name}'", err=True)
    else:
        data = dict(sorted(host_facts.to_dict().items()))
        missing = []

    if as_yaml:
        typer.echo(yaml.safe_dump(_yaml_safe(data), default_flow_style=False).rstrip())
    elif len(names) == 1 and not missing:
        typer.echo(_render(data[names[0]]))
    else:
        for name, value in data.items():
            typer.echo(f"{name} => {_render(value)}")
    if missing:
        raise typer.Exit(code=1)


def list_names(config: Path | None = None) -> None:
    """Print every registered fact name."""
    host_facts = _runtime(config)
    for name in sorted(host_facts.list_names()):
        typer.echo(name)


def query(name: str, candidates: list[str], config: Path | None = None) -> None:
    """Print whether a fact matches any candidate; exit 1 when it does not."""
    host_facts = _runtime(config)
    try:
        matched = host_facts.is_(name, *candidates)
    except UnknownFactError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc
    typer.echo("true" if matched else "false")
    if not matched:
        raise typer.Exit(code=1)


def show_version() -> None:
    typer.echo(version())


def _render(value: Any) -> str:
    return "" if value is None else str(value)


def _yaml_safe(payload: object) -> object:
    """Reduce values to YAML-representable builtins."""
    if isinstance(payload, dict):
        return {str(k): _yaml_safe(v) for k, v in payload.items()}
    if isinstance(payload, list | tuple | set):
        return [_yaml_safe(v) for v in payload]
    if payload is None or isinstance(payload, bool | int | float | str):
        return payload
    return str(payload)
