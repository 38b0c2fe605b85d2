"""
tracetint - Themeable console output for trace lines.

- Immutable ANSI text styles and a total style applicator
- Built-in and YAML themes with a role per trace element
- Persistent settings (theme, color mode)
"""

__version__ = "0.1.0"

from .theme.ansi import TextStyle, apply, parse_style, visible_text
from .theme.engine import ConfigurationError, Role, Theme, ThemeEngine, load_theme
from .viewer import render_trace

__all__ = [
    # Styling
    "TextStyle",
    "apply",
    "parse_style",
    "visible_text",
    # Themes
    "ConfigurationError",
    "Role",
    "Theme",
    "ThemeEngine",
    "load_theme",
    # Output
    "render_trace",
]
