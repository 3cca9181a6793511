"""
Logging helpers for permdeps

Every module obtains its logger through get_logger(__name__). The package
root logger carries a NullHandler, so the library stays silent until an
application (or the CLI) calls setup_logging().
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "permdeps"
LOG_FORMAT = "%(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger inside the permdeps hierarchy.

    Args:
        name: Module name (usually __name__). Names outside the package are
            nested under the permdeps root logger.

    Returns:
        Logger instance
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: Union[str, int] = "WARNING") -> logging.Logger:
    """
    Attach a rich handler writing to stderr to the permdeps root logger.

    Calling it again only updates the level; handlers are not duplicated.
    Unknown level names fall back to WARNING.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root.setLevel(level)

    if not any(getattr(h, "_permdeps_handler", False) for h in root.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._permdeps_handler = True
        root.addHandler(handler)
    return root


__all__ = ["get_logger", "setup_logging", "ROOT_LOGGER_NAME"]
