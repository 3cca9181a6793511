"""
Dependency map loading

Reads a JSON object of the form {"permission": ["required", ...]} and turns
it into the read-only mapping DependencyResolver expects. Schema validation is
done with pydantic; cycles are not checked here and surface from
DependencyResolver.sort().
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import RootModel
from pydantic import ValidationError as PydanticValidationError

from permdeps.core.errors import ConfigurationError
from permdeps.logger import get_logger

logger = get_logger(__name__)


class DependencyMapModel(RootModel[Dict[str, List[str]]]):
    """Schema of a dependency map: permission id -> list of required ids."""

    pass


def freeze_dependency_map(mapping: Mapping[str, Any]) -> Mapping[str, Tuple[str, ...]]:
    """Copy a mapping into a read-only view whose values are tuples."""
    return MappingProxyType(
        {permission: tuple(required) for permission, required in mapping.items()}
    )


def parse_dependency_map(
    data: Any, source: str = "<memory>"
) -> Mapping[str, Tuple[str, ...]]:
    """
    Validate an in-memory dependency map.

    Args:
        data: Decoded JSON data
        source: Where the data came from (used in error context)

    Returns:
        Read-only dependency map

    Raises:
        ConfigurationError: If data does not match the schema
    """
    try:
        model = DependencyMapModel.model_validate(data)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(
            f"Invalid dependency map in {source}",
            what="Invalid dependency map",
            why=problems,
            how_to_fix='Use a JSON object mapping each permission to a list of permission ids, e.g. {"edit": ["view"]}',
            context={"source": source},
        ) from e

    dependency_map = freeze_dependency_map(model.root)
    logger.debug(f"Parsed dependency map from {source} with {len(dependency_map)} entries")
    return dependency_map


def load_dependency_map(path: Union[str, Path]) -> Mapping[str, Tuple[str, ...]]:
    """
    Load and validate a dependency map from a JSON file.

    Raises:
        ConfigurationError: If the file is missing, not valid JSON, or does
            not match the schema
    """
    map_path = Path(path)
    if not map_path.is_file():
        raise ConfigurationError(
            f"Dependency map not found: {map_path}",
            what="Dependency map not found",
            why=f"No file exists at {map_path}",
            how_to_fix="Pass --map PATH or set PERMDEPS_DEPENDENCY_MAP",
            context={"path": str(map_path)},
        )

    try:
        with open(map_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read dependency map {map_path}: {e}",
            what="Cannot read dependency map",
            why=str(e),
            how_to_fix="Check that the file is readable and contains valid JSON",
            context={"path": str(map_path)},
        ) from e

    return parse_dependency_map(data, source=str(map_path))


__all__ = [
    "DependencyMapModel",
    "freeze_dependency_map",
    "parse_dependency_map",
    "load_dependency_map",
]
