"""
Shared helpers for CLI commands: locating the dependency map and
parsing permission options.
"""

from pathlib import Path
from typing import Iterable, List, Optional

import typer

from permdeps.core.config_manager import DEPENDENCY_MAP_ENV, get_config_manager
from permdeps.core.dependency import DependencyResolver, load_dependency_map
from permdeps.core.errors import ConfigurationError
from permdeps.logger import get_logger

logger = get_logger(__name__)

EXIT_NEGATIVE = 1
EXIT_ERROR = 2


def map_option():
    return typer.Option(
        None,
        "--map",
        "-m",
        help=f"Dependency map JSON file (defaults to ${DEPENDENCY_MAP_ENV})",
    )


def resolve_map_path(map_path: Optional[Path]) -> Path:
    """Pick the explicit --map path, or fall back to configuration."""
    path = map_path or get_config_manager().get_dependency_map_path()
    if path is None:
        raise ConfigurationError(
            "No dependency map configured",
            what="No dependency map configured",
            how_to_fix=f"Pass --map PATH or set {DEPENDENCY_MAP_ENV}",
        )
    return path


def build_resolver(map_path: Optional[Path]) -> DependencyResolver:
    """Load the dependency map and build a resolver, exiting on config errors."""
    try:
        path = resolve_map_path(map_path)
        dependency_map = load_dependency_map(path)
    except ConfigurationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(EXIT_ERROR)
    logger.debug(f"Loaded {len(dependency_map)} dependency entries from {path}")
    return DependencyResolver(dependency_map, logger=get_logger("permdeps.cli.resolver"))


def split_permissions(values: Optional[Iterable[str]]) -> List[str]:
    """Flatten repeated and comma-separated option values into ids."""
    permissions: List[str] = []
    for value in values or []:
        permissions.extend(item.strip() for item in value.split(",") if item.strip())
    return permissions
