"""Command-line interface for confhound diagnostics."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from confhound.errors import ConfigError
from confhound.keys import ConfigKey
from confhound.manager import ConfigManager
from confhound.masking import looks_sensitive
from confhound.sources.memory import ParameterSource

app = typer.Typer(
    name="confhound",
    help="Inspect layered configuration: environment, sources and resolved values",
    add_completion=False,
)

ConfigDirOption = Annotated[
    Path,
    typer.Option("--config-dir", "-c", help="Directory holding global/common/<env> files"),
]
ParamOption = Annotated[
    Optional[list[str]],
    typer.Option("--param", "-p", help="Override as key=value (highest priority)"),
]
FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format (console, json)"),
]
EnvOption = Annotated[
    Optional[str],
    typer.Option("--env", "-e", help="Environment name, overriding APP_ENV/ENVIRONMENT/ENV"),
]


def _build_manager(
    config_dir: Path, params: Optional[list[str]], env: Optional[str] = None
) -> ConfigManager:
    manager = ConfigManager()
    parsed: dict[str, str] = {}
    if params:
        for item in params:
            key, sep, value = item.partition("=")
            if not sep or not key:
                raise typer.BadParameter(f"Expected key=value, got {item!r}", param_hint="--param")
            parsed[key.strip()] = value
    if env:
        parsed["APP_ENV"] = env
    if parsed:
        manager.add_source(ParameterSource(parsed, name="CLI"))
    manager.auto_load_config(config_dir)
    return manager


def _fail(error: Exception) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


@app.command(name="env")
def env_cmd(
    config_dir: ConfigDirOption = Path("."),
    param: ParamOption = None,
    env: EnvOption = None,
    format: FormatOption = "console",
) -> None:
    """Detect the environment and list the active sources."""
    try:
        manager = _build_manager(config_dir, param, env)
    except ConfigError as e:
        _fail(e)
        return

    sources = [{"name": s.name, "priority": s.priority} for s in manager.sources]
    if format == "json":
        typer.echo(json.dumps({"environment": manager.environment_name, "sources": sources}, indent=2))
        return

    console = Console()
    console.print(f"Environment: [bold]{manager.environment_name}[/bold]")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Priority", justify="right")
    table.add_column("Source")
    for s in sources:
        table.add_row(str(s["priority"]), s["name"])
    console.print(table)


@app.command(name="get")
def get_cmd(
    keys: Annotated[list[str], typer.Argument(help="Configuration keys to resolve")],
    config_dir: ConfigDirOption = Path("."),
    param: ParamOption = None,
    env: EnvOption = None,
    sensitive: Annotated[
        Optional[list[str]],
        typer.Option("--sensitive", "-s", help="Treat this key as sensitive (masked)"),
    ] = None,
    format: FormatOption = "console",
) -> None:
    """Resolve keys and show which source supplied each value."""
    try:
        manager = _build_manager(config_dir, param, env)
    except ConfigError as e:
        _fail(e)
        return

    marked = set(sensitive or ())
    descriptors = [ConfigKey(k, sensitive=k in marked or looks_sensitive(k)) for k in keys]
    infos = manager.all_source_info(*descriptors)

    if format == "json":
        typer.echo(json.dumps({k: v.to_dict() for k, v in infos.items()}, indent=2))
    else:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Key")
        table.add_column("Value")
        table.add_column("Source")
        for info in infos.values():
            table.add_row(info.key, info.value if info.found else "-", info.origin)
        Console().print(table)

    if not all(info.found for info in infos.values()):
        raise typer.Exit(1)


@app.command(name="prefix")
def prefix_cmd(
    prefix: Annotated[str, typer.Argument(help="Key prefix, e.g. 'database.'")],
    config_dir: ConfigDirOption = Path("."),
    param: ParamOption = None,
    env: EnvOption = None,
    format: FormatOption = "console",
) -> None:
    """List every key under a prefix with its winning value (secrets masked)."""
    try:
        manager = _build_manager(config_dir, param, env)
    except ConfigError as e:
        _fail(e)
        return

    values = manager.by_prefix_for_display(prefix)
    if format == "json":
        typer.echo(json.dumps(values, indent=2))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("Value")
    for key, value in values.items():
        table.add_row(key, value)
    Console().print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
