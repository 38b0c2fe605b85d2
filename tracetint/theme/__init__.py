"""
Theme system for console trace styling.
"""

from .ansi import TextStyle, apply, parse_style, visible_text
from .engine import (
    ConfigurationError,
    Role,
    Theme,
    ThemeEngine,
    build_engine,
    load_theme,
)

__all__ = [
    "TextStyle",
    "apply",
    "parse_style",
    "visible_text",
    "ConfigurationError",
    "Role",
    "Theme",
    "ThemeEngine",
    "build_engine",
    "load_theme",
]
