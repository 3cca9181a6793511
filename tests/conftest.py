"""
Shared fixtures for permdeps tests
"""
import json
import logging

import pytest

from permdeps.core.config_manager import DEPENDENCY_MAP_ENV, LOG_LEVEL_ENV, get_config_manager
from permdeps.logger import ROOT_LOGGER_NAME

SAMPLE_MAP = {
    "admin": ["edit", "audit"],
    "edit": ["view"],
    "audit": ["view"],
    "view": [],
}


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Reset in-memory config overrides and config env vars around each test"""
    # recorded by monkeypatch, so values set later (e.g. by a .env file) are removed
    for name in (DEPENDENCY_MAP_ENV, LOG_LEVEL_ENV):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    get_config_manager().clear()
    yield
    get_config_manager().clear()


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo setup_logging(): restore the root permdeps level and drop its handler"""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    level = root.level
    yield
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_permdeps_handler", False):
            root.removeHandler(handler)


@pytest.fixture
def map_file(tmp_path):
    path = tmp_path / "deps.json"
    path.write_text(json.dumps(SAMPLE_MAP), encoding="utf-8")
    return path


@pytest.fixture
def cyclic_map_file(tmp_path):
    path = tmp_path / "cyclic.json"
    path.write_text(json.dumps({"X": ["Y"], "Y": ["X"]}), encoding="utf-8")
    return path
