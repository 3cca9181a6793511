"""
Resolution CLI commands

Usage:
    permdeps resolve deps PERMISSION...                # Direct dependencies
    permdeps resolve check PERMISSION...               # Is a held set consistent
    permdeps resolve grant PERMISSION -e HELD,...      # May PERMISSION be granted
    permdeps resolve deny PERMISSION -e HELD,...       # May PERMISSION be removed
    permdeps resolve sort PERMISSION... [-f json]      # Grant order

Exit codes: 0 = yes, 1 = no, 2 = error.
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from permdeps.cli.map_source import (
    EXIT_ERROR,
    EXIT_NEGATIVE,
    build_resolver,
    map_option,
    split_permissions,
)
from permdeps.core.errors import CyclicDependencyError, InvalidBasePermissionsError
from permdeps.logger import get_logger

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="resolve",
    help="Query dependencies, check, grant, deny and sort permissions",
    no_args_is_help=True,
)


def _existing_option():
    return typer.Option(
        None,
        "--existing",
        "-e",
        help="Held permission (repeat or comma-separate)",
    )


def _missing(held: List[str], required: Optional[List[str]]) -> List[str]:
    held_set = set(held)
    return [permission for permission in required or [] if permission not in held_set]


@app.command("deps")
def deps(
    permissions: List[str] = typer.Argument(..., help="Permissions to look up"),
    map_path: Optional[Path] = map_option(),
    output_format: str = typer.Option("text", "--format", "-f", help="Output format: text or json"),
):
    """
    List the permissions directly required by the given permissions.

    Examples:
        permdeps resolve deps edit -m deps.json
        permdeps resolve deps edit delete -f json
    """
    resolver = build_resolver(map_path)
    dependency_list = resolver.get_dependency_list(split_permissions(permissions))

    if dependency_list is None:
        typer.echo("⚠️  Dependencies could not be resolved (see log for details)", err=True)
        raise typer.Exit(EXIT_ERROR)

    if output_format == "json":
        typer.echo(json.dumps(dependency_list))
    elif not dependency_list:
        typer.echo("No direct dependencies")
    else:
        for permission in dependency_list:
            typer.echo(permission)


@app.command("check")
def check(
    permissions: List[str] = typer.Argument(..., help="Held permissions"),
    map_path: Optional[Path] = map_option(),
):
    """
    Check that every direct dependency of the held permissions is held.

    Examples:
        permdeps resolve check view edit -m deps.json
    """
    resolver = build_resolver(map_path)
    held = split_permissions(permissions)

    if resolver.is_valid_existing_permission(held):
        typer.echo("✅ Held permissions are consistent")
        return

    typer.echo("❌ Held permissions are inconsistent")
    missing = _missing(held, resolver.get_dependency_list(held))
    if missing:
        typer.echo(f"   Missing: {', '.join(missing)}")
    raise typer.Exit(EXIT_NEGATIVE)


@app.command("grant")
def grant(
    permission: str = typer.Argument(..., help="Permission to grant"),
    existing: Optional[List[str]] = _existing_option(),
    map_path: Optional[Path] = map_option(),
):
    """
    Check whether a permission can be granted on top of the held permissions.

    Examples:
        permdeps resolve grant edit -e view -m deps.json
        permdeps resolve grant admin -e view,edit
    """
    resolver = build_resolver(map_path)
    held = split_permissions(existing)

    try:
        allowed = resolver.can_grant(held, permission)
    except InvalidBasePermissionsError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_ERROR)

    if allowed:
        typer.echo(f"✅ '{permission}' can be granted")
        return

    typer.echo(f"❌ '{permission}' cannot be granted")
    missing = _missing(held, resolver.get_dependency_list(permission))
    if missing:
        typer.echo(f"   Grant first: {', '.join(missing)}")
    raise typer.Exit(EXIT_NEGATIVE)


@app.command("deny")
def deny(
    permission: str = typer.Argument(..., help="Permission to remove"),
    existing: Optional[List[str]] = _existing_option(),
    map_path: Optional[Path] = map_option(),
):
    """
    Check whether a permission can be removed without breaking the held set.

    Examples:
        permdeps resolve deny view -e view,edit -m deps.json
    """
    resolver = build_resolver(map_path)
    held = split_permissions(existing)

    try:
        allowed = resolver.can_deny(held, permission)
    except InvalidBasePermissionsError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_ERROR)

    if allowed:
        typer.echo(f"✅ '{permission}' can be denied")
        return

    typer.echo(f"❌ '{permission}' cannot be denied")
    remaining = [p for p in held if p != permission]
    dependents = [p for p in remaining if permission in (resolver.get_dependency_list(p) or [])]
    if dependents:
        typer.echo(f"   Required by: {', '.join(dependents)}")
    raise typer.Exit(EXIT_NEGATIVE)


@app.command("sort")
def sort(
    permissions: List[str] = typer.Argument(..., help="Permissions to order"),
    map_path: Optional[Path] = map_option(),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
):
    """
    Print the order in which permissions must be granted.

    Examples:
        permdeps resolve sort admin -m deps.json
        permdeps resolve sort admin edit -f json
    """
    resolver = build_resolver(map_path)

    try:
        order = resolver.sort(split_permissions(permissions))
    except CyclicDependencyError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_ERROR)

    if output_format == "json":
        typer.echo(json.dumps(order))
        return

    table = Table(title="Grant Order")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Permission", style="green")
    for index, permission in enumerate(order, start=1):
        table.add_row(str(index), permission)
    console.print(table)
