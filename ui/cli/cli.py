"""CLI entrypoint for hostfacts."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Query facts about the running host")


@app.command("show")
def show_cmd(
    names: list[str] = typer.Argument(None, help="Fact names; all facts when omitted"),
    as_yaml: bool = typer.Option(False, "--yaml", help="Emit YAML"),
    config: Path = typer.Option(None, "--config", help="YAML settings file"),
    debug: bool = typer.Option(False, "--debug", help="Print loader debugging"),
) -> None:
    """Show fact values."""
    commands.show(names=names or [], as_yaml=as_yaml, config=config, debug=debug)


@app.command("list")
def list_cmd(
    config: Path = typer.Option(None, "--config", help="YAML settings file"),
) -> None:
    """List registered fact names."""
    commands.list_names(config=config)


@app.command("query")
def query_cmd(
    name: str = typer.Argument(..., help="Fact name, optionally ending in '?'"),
    candidates: list[str] = typer.Argument(..., help="Values to compare against"),
    config: Path = typer.Option(None, "--config", help="YAML settings file"),
) -> None:
    """Check a fact value case-insensitively."""
    commands.query(name=name, candidates=candidates, config=config)


@app.command("version")
def version_cmd() -> None:
    """Print the hostfacts version."""
    commands.show_version()


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
