from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from dotenv import load_dotenv

from permdeps.logger import get_logger

logger = get_logger(__name__)

DEPENDENCY_MAP_ENV = "PERMDEPS_DEPENDENCY_MAP"
LOG_LEVEL_ENV = "PERMDEPS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class ConfigManager:
    """
    Typed configuration for permdeps.

    Values come from the environment (optionally populated from a .env file)
    unless overridden in memory, which is mostly useful in tests.

    Usage examples
    --------------
        from permdeps.core.config_manager import get_config_manager

        cm = get_config_manager()
        cm.load_env_files([Path.cwd() / ".env"], override=False)
        map_path = cm.get_dependency_map_path()
    """

    _dependency_map_path: Optional[Path] = None
    _log_level: Optional[str] = None

    def load_env_files(self, paths: Iterable[Path], override: bool = False) -> None:
        """Load the first existing .env file from the provided paths."""
        for env_path in paths:
            if env_path.exists():
                load_dotenv(env_path, override=override)
                logger.debug("Loaded .env file from %s", env_path)
                return

    def set_dependency_map_path(self, path: Optional[str | Path]) -> None:
        self._dependency_map_path = Path(path) if path else None

    def get_dependency_map_path(self) -> Optional[Path]:
        if self._dependency_map_path is not None:
            return self._dependency_map_path
        env_path = os.getenv(DEPENDENCY_MAP_ENV)
        return Path(env_path) if env_path else None

    def set_log_level(self, level: Optional[str]) -> None:
        self._log_level = level.upper() if level else None

    def get_log_level(self) -> str:
        if self._log_level:
            return self._log_level
        return os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()

    def clear(self) -> None:
        self._dependency_map_path = None
        self._log_level = None


_config_manager = ConfigManager()


def get_config_manager() -> ConfigManager:
    return _config_manager


__all__ = [
    "ConfigManager",
    "get_config_manager",
    "DEPENDENCY_MAP_ENV",
    "LOG_LEVEL_ENV",
]
