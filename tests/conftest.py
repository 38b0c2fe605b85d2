"""Shared fixtures: isolate settings and the theme environment variable."""

import logging

import pytest

import tracetint.config as config
from tracetint.config import AppSettings, SettingsManager
from tracetint.log import LOGGER_NAME
from tracetint.theme.engine import THEME_ENV_VAR, Theme
from tracetint.theme.ansi import parse_style


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the global settings manager at a temporary config file."""
    monkeypatch.delenv(THEME_ENV_VAR, raising=False)
    manager = SettingsManager(config_path=tmp_path / "config" / "config.json")
    monkeypatch.setattr(config, "_manager", manager)
    return manager


@pytest.fixture
def settings():
    return AppSettings()


@pytest.fixture
def theme():
    """Small theme with distinct styles per role."""
    return Theme(
        name="test",
        span=parse_style("bold cyan"),
        event=parse_style("green"),
        error=parse_style("bold red"),
    )


@pytest.fixture
def theme_dir(tmp_path):
    directory = tmp_path / "themes"
    directory.mkdir()
    return directory


@pytest.fixture(autouse=True)
def restore_logger():
    """Undo handlers and level set by setup_logging during a test."""
    logger = logging.getLogger(LOGGER_NAME)
    level = logger.level
    handlers = list(logger.handlers)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
