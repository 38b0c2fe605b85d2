"""
Theme system.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional
import logging
import os

import yaml

from tracetint.config import AppSettings, get_settings
from tracetint.resources import resources
from tracetint.theme.ansi import TextStyle, parse_style

logger = logging.getLogger(__name__)

THEME_ENV_VAR = "TRACETINT_THEME"
DEFAULT_THEME = "default"


class ConfigurationError(Exception):
    """
    Raised when a theme cannot be provided.

    Covers unknown theme names, theme files that omit a role or carry an
    unparseable style, and theme files that cannot be read.
    """
    pass


class Role(Enum):
    """Semantic elements of a trace line that get their own style."""
    SPAN = "span"
    EVENT = "event"
    ERROR = "error"


@dataclass
class Theme:
    """Console theme: one style per role."""
    name: str
    span: TextStyle = field(default_factory=TextStyle)
    event: TextStyle = field(default_factory=TextStyle)
    error: TextStyle = field(default_factory=TextStyle)
    description: str = ""

    def style_for(self, role: Role) -> TextStyle:
        """Style used for a role."""
        return getattr(self, role.value)

    @classmethod
    def from_dict(cls, data: dict, name: str = None) -> Theme:
        """
        Build a theme from parsed YAML.

        Args:
            data: Mapping with ``name``, ``description`` and one entry per role
            name: Fallback name when the mapping has none

        Raises:
            ConfigurationError: if a role is missing or a style is invalid
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Theme {name or ''!r} must be a mapping, got {type(data).__name__}"
            )

        theme_name = data.get("name") or name
        if not theme_name:
            raise ConfigurationError("Theme has no name")

        missing = [role.value for role in Role if role.value not in data]
        if missing:
            raise ConfigurationError(
                f"Theme '{theme_name}' is missing required role(s): {', '.join(missing)}"
            )

        styles = {}
        for role in Role:
            try:
                styles[role.value] = TextStyle.from_value(data[role.value])
            except ValueError as e:
                raise ConfigurationError(
                    f"Theme '{theme_name}' has an invalid {role.value} style: {e}"
                ) from e

        return cls(
            name=str(theme_name),
            description=str(data.get("description") or ""),
            **styles,
        )

    @classmethod
    def load(cls, path: Path) -> Theme:
        """Load theme from YAML file."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read theme file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed theme file {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Theme file {path} is not valid UTF-8: {e}") from e
        return cls.from_dict(data, name=path.stem)

    def to_dict(self) -> dict:
        data = {"name": self.name}
        if self.description:
            data["description"] = self.description
        for role in Role:
            data[role.value] = self.style_for(role).to_spec()
        return data

    def save(self, path: Path) -> None:
        """Save theme to YAML file."""
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def default(cls) -> Theme:
        """Default theme for dark terminals."""
        return cls(
            name="default",
            description="Cyan spans, plain events, bold red errors",
            span=parse_style("bold cyan"),
            event=parse_style("white"),
            error=parse_style("bold red"),
        )

    @classmethod
    def dracula(cls) -> Theme:
        """Dracula theme."""
        return cls(
            name="dracula",
            description="Dracula palette (24-bit color)",
            span=parse_style("bold #bd93f9"),
            event=parse_style("#f8f8f2"),
            error=parse_style("bold #ff5555"),
        )

    @classmethod
    def nord(cls) -> Theme:
        """Nord theme."""
        return cls(
            name="nord",
            description="Nord palette (24-bit color)",
            span=parse_style("bold #88c0d0"),
            event=parse_style("#d8dee9"),
            error=parse_style("bold #bf616a"),
        )

    @classmethod
    def gruvbox_dark(cls) -> Theme:
        """Gruvbox Dark theme."""
        return cls(
            name="gruvbox_dark",
            description="Gruvbox dark palette (24-bit color)",
            span=parse_style("bold #fabd2f"),
            event=parse_style("#ebdbb2"),
            error=parse_style("bold #fb4934"),
        )

    @classmethod
    def monochrome(cls) -> Theme:
        """
        Monochrome theme.

        Attributes only, for terminals where color is unwelcome but
        emphasis still helps.
        """
        return cls(
            name="monochrome",
            description="Bold, dim and underline only",
            span=parse_style("bold"),
            event=parse_style("none"),
            error=parse_style("bold underline"),
        )

    @classmethod
    def plain(cls) -> Theme:
        """No styling at all."""
        return cls(name="plain", description="No styling")


class ThemeEngine:
    """Manages theme loading and switching."""

    def __init__(self, theme_dir: Path = None, user_theme_dir: Path = None):
        """
        Initialize theme engine.

        Args:
            theme_dir: Directory of bundled themes
            user_theme_dir: Optional directory of user themes, loaded last
        """
        self.theme_dir = theme_dir or resources.themes_dir
        self.user_theme_dir = user_theme_dir

        self._themes: dict[str, Theme] = {}
        self._current: Optional[Theme] = None

        # Register built-in themes
        for theme in (
            Theme.default(),
            Theme.dracula(),
            Theme.nord(),
            Theme.gruvbox_dark(),
            Theme.monochrome(),
            Theme.plain(),
        ):
            self._themes[theme.name] = theme

    def load_themes(self) -> None:
        """Load all themes from the bundled and user theme directories."""
        for directory in (self.theme_dir, self.user_theme_dir):
            if directory is None:
                continue
            directory = Path(directory)
            if not directory.is_dir():
                logger.debug(f"Theme directory not found: {directory}")
                continue

            for path in sorted(directory.glob("*.yaml")):
                try:
                    theme = Theme.load(path)
                except ConfigurationError as e:
                    logger.warning(f"Failed to load theme {path}: {e}")
                    continue
                self._themes[theme.name] = theme
                logger.debug(f"Loaded theme: {theme.name}")

    def get_theme(self, name: str) -> Optional[Theme]:
        """
        Get theme by name.

        Args:
            name: Theme name

        Returns:
            Theme if found, None otherwise
        """
        return self._themes.get(name)

    def list_themes(self) -> list[str]:
        """
        List available theme names.

        Returns:
            List of theme names
        """
        return sorted(self._themes.keys())

    def register_theme(self, theme: Theme) -> None:
        """
        Register a theme.

        Args:
            theme: Theme to register
        """
        self._themes[theme.name] = theme

    @property
    def current(self) -> Theme:
        """Current active theme."""
        return self._current or self._themes[DEFAULT_THEME]

    @current.setter
    def current(self, theme: Theme) -> None:
        """Set current active theme."""
        self._current = theme


def build_engine(settings: AppSettings) -> ThemeEngine:
    """Engine with bundled themes and the user's theme_dir loaded."""
    user_dir = Path(settings.theme_dir).expanduser() if settings.theme_dir else None
    engine = ThemeEngine(user_theme_dir=user_dir)
    engine.load_themes()
    return engine


def load_theme(
    name: str = None,
    settings: AppSettings = None,
    engine: ThemeEngine = None,
) -> Theme:
    """
    Load the theme to render with.

    The name comes from the ``name`` argument, then the TRACETINT_THEME
    environment variable, then ``settings.theme_name``, then "default".
    A new engine is built on every call unless one is passed in.

    Args:
        name: Explicit theme name
        settings: AppSettings to read theme_name and theme_dir from
        engine: Engine to look the theme up in

    Returns:
        Resolved Theme

    Raises:
        ConfigurationError: if no theme of that name exists
    """
    if settings is None:
        settings = get_settings()

    theme_name = (
        name
        or os.environ.get(THEME_ENV_VAR)
        or settings.theme_name
        or DEFAULT_THEME
    )

    if engine is None:
        engine = build_engine(settings)

    theme = engine.get_theme(theme_name)
    if theme is None:
        raise ConfigurationError(
            f"Unknown theme '{theme_name}'. Available: {', '.join(engine.list_themes())}"
        )

    engine.current = theme
    logger.debug(f"Using theme: {theme.name}")
    return theme
