"""
Persistent application settings for tracetint.
Stored in ~/.tracetint/config.json
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".tracetint"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"

COLOR_MODES = ("auto", "always", "never")


@dataclass
class AppSettings:
    """
    Application settings that persist across sessions.
    """
    # Appearance
    theme_name: str = "default"
    color: str = "auto"

    # Extra directory of user theme files
    theme_dir: Optional[str] = None

    log_level: str = "WARNING"

    def to_dict(self) -> dict:
        """Serialize to dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> AppSettings:
        """Deserialize from dict, ignoring unknown keys."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    def color_flag(self) -> Optional[bool]:
        """
        Color setting as click's ``color`` argument.

        "auto" maps to None so click strips codes on non-terminal output.
        """
        if self.color not in COLOR_MODES:
            logger.warning(f"Unknown color mode {self.color!r}, using auto")
            return None
        if self.color == "always":
            return True
        if self.color == "never":
            return False
        return None


class SettingsManager:
    """
    Manages loading and saving application settings.

    Usage:
        manager = SettingsManager()
        settings = manager.settings

        settings.theme_name = "nord"
        manager.save()
    """

    def __init__(self, config_path: Path = None):
        self._config_path = config_path or DEFAULT_CONFIG_FILE
        self._settings: Optional[AppSettings] = None

    @property
    def settings(self) -> AppSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self) -> AppSettings:
        """Load settings from disk, or return defaults."""
        if self._config_path.exists():
            try:
                data = json.loads(self._config_path.read_text(encoding="utf-8"))
                logger.debug(f"Loaded settings from {self._config_path}")
                return AppSettings.from_dict(data)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Failed to load settings: {e}, using defaults")
                return AppSettings()
        else:
            logger.debug("No settings file found, using defaults")
            return AppSettings()

    def save(self) -> None:
        """Save current settings to disk."""
        if self._settings is None:
            return

        # Ensure directory exists
        self._config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._config_path.write_text(
                json.dumps(self._settings.to_dict(), indent=2),
                encoding="utf-8",
            )
            logger.debug(f"Saved settings to {self._config_path}")
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")

    def reset(self) -> AppSettings:
        """Reset to default settings (does not save automatically)."""
        self._settings = AppSettings()
        return self._settings


# Global instance for convenience
_manager: Optional[SettingsManager] = None


def get_settings_manager() -> SettingsManager:
    """Get the global settings manager instance."""
    global _manager
    if _manager is None:
        _manager = SettingsManager()
    return _manager


def get_settings() -> AppSettings:
    """Convenience function to get current settings."""
    return get_settings_manager().settings


def save_settings() -> None:
    """Convenience function to save current settings."""
    get_settings_manager().save()
