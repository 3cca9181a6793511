"""
Dependency map CLI commands

Usage:
    permdeps map show [-f json]    # Print the dependency map
    permdeps map validate          # Check schema and look for cycles
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from permdeps.cli.map_source import EXIT_ERROR, build_resolver, map_option
from permdeps.core.errors import CyclicDependencyError
from permdeps.logger import get_logger

logger = get_logger(__name__)
console = Console()

app = typer.Typer(name="map", help="Inspect and validate the dependency map", no_args_is_help=True)


@app.command("show")
def show(
    map_path: Optional[Path] = map_option(),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
):
    """Print every permission and what it directly requires."""
    resolver = build_resolver(map_path)
    dependencies = resolver.dependencies

    if output_format == "json":
        typer.echo(json.dumps({k: list(v) for k, v in dependencies.items()}, indent=2))
        return

    table = Table(title="Dependency Map")
    table.add_column("Permission", style="cyan")
    table.add_column("Requires", style="white")
    for permission, required in dependencies.items():
        table.add_row(permission, ", ".join(required) or "-")
    console.print(table)


@app.command("validate")
def validate(map_path: Optional[Path] = map_option()):
    """
    Validate the dependency map.

    Loading checks the schema; every permission is then sorted so that
    cycles are reported before they reach a grant.
    """
    resolver = build_resolver(map_path)

    try:
        order = resolver.sort(list(resolver.dependencies))
    except CyclicDependencyError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_ERROR)

    typer.echo(f"✅ Dependency map is valid ({len(resolver.dependencies)} entries, {len(order)} permissions)")
