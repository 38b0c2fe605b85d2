"""Theme model and provider tests."""

import logging

import pytest
import yaml

from tracetint.config import AppSettings
from tracetint.resources import resources
from tracetint.theme.ansi import TextStyle, parse_style
from tracetint.theme.engine import (
    THEME_ENV_VAR,
    ConfigurationError,
    Role,
    Theme,
    ThemeEngine,
    build_engine,
    load_theme,
)

BUILTIN_THEMES = ["default", "dracula", "nord", "gruvbox_dark", "monochrome", "plain"]
BUNDLED_THEMES = ["monokai", "solarized_dark", "high_contrast"]


def _write(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestTheme:
    def test_style_for(self, theme):
        assert theme.style_for(Role.SPAN) == parse_style("bold cyan")
        assert theme.style_for(Role.EVENT) == parse_style("green")
        assert theme.style_for(Role.ERROR) == parse_style("bold red")

    @pytest.mark.parametrize("factory", [
        Theme.default,
        Theme.dracula,
        Theme.nord,
        Theme.gruvbox_dark,
        Theme.monochrome,
        Theme.plain,
    ])
    def test_builtins_define_every_role(self, factory):
        theme = factory()
        for role in Role:
            assert isinstance(theme.style_for(role), TextStyle)

    def test_plain_has_no_styling(self):
        theme = Theme.plain()
        assert all(theme.style_for(role).is_plain for role in Role)

    def test_from_dict_strings_and_mappings(self):
        theme = Theme.from_dict({
            "name": "mixed",
            "span": "bold cyan",
            "event": {"fg": "white"},
            "error": {"fg": "#ff0000", "bold": True},
        })
        assert theme.name == "mixed"
        assert theme.event == TextStyle(fg="white")
        assert theme.error == TextStyle(fg=(255, 0, 0), bold=True)

    def test_from_dict_missing_role(self):
        with pytest.raises(ConfigurationError, match="missing required role\\(s\\): error"):
            Theme.from_dict({"name": "broken", "span": "red", "event": "green"})

    def test_from_dict_lists_all_missing_roles(self):
        with pytest.raises(ConfigurationError, match="span, event, error"):
            Theme.from_dict({"name": "empty"})

    def test_from_dict_bad_style(self):
        with pytest.raises(ConfigurationError, match="invalid event style"):
            Theme.from_dict({"name": "bad", "span": "red", "event": "sparkly", "error": "red"})

    def test_from_dict_requires_name(self):
        with pytest.raises(ConfigurationError, match="no name"):
            Theme.from_dict({"span": "red", "event": "red", "error": "red"})

    def test_from_dict_rejects_non_mapping(self):
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            Theme.from_dict(["span", "event"], name="listy")

    def test_load_uses_file_stem_as_fallback_name(self, theme_dir):
        path = _write(theme_dir / "ocean.yaml", {"span": "blue", "event": "cyan", "error": "red"})
        assert Theme.load(path).name == "ocean"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read"):
            Theme.load(tmp_path / "nope.yaml")

    def test_load_malformed_yaml(self, theme_dir):
        path = theme_dir / "broken.yaml"
        path.write_text("span: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Malformed"):
            Theme.load(path)

    def test_load_invalid_utf8(self, theme_dir):
        path = theme_dir / "binary.yaml"
        path.write_bytes(b"span: \xff\xfe\n")
        with pytest.raises(ConfigurationError, match="not valid UTF-8"):
            Theme.load(path)

    def test_load_empty_file(self, theme_dir):
        path = theme_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            Theme.load(path)

    def test_save_then_load(self, theme, theme_dir):
        theme.description = "for tests"
        path = theme_dir / "saved.yaml"
        theme.save(path)
        assert Theme.load(path) == theme

    def test_save_then_load_indexed_colors(self, theme_dir):
        theme = Theme(
            name="indexed",
            span=TextStyle(fg=208),
            event=TextStyle(fg=15, bg=0),
            error=TextStyle(fg=196, bold=True),
        )
        path = theme_dir / "indexed.yaml"
        theme.save(path)
        assert Theme.load(path) == theme

    def test_save_writes_style_strings(self, theme, theme_dir):
        path = theme_dir / "saved.yaml"
        theme.save(path)
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data == {
            "name": "test",
            "span": "bold cyan",
            "event": "green",
            "error": "bold red",
        }


class TestBundledThemes:
    @pytest.mark.parametrize("name", BUNDLED_THEMES)
    def test_bundled_file_loads(self, name):
        theme = Theme.load(resources.themes_dir / f"{name}.yaml")
        assert theme.name == name
        assert not theme.error.is_plain


class TestThemeEngine:
    def test_builtins_registered(self, theme_dir):
        engine = ThemeEngine(theme_dir=theme_dir)
        assert engine.list_themes() == sorted(BUILTIN_THEMES)

    def test_load_themes_from_package(self):
        engine = ThemeEngine()
        engine.load_themes()
        for name in BUILTIN_THEMES + BUNDLED_THEMES:
            assert engine.get_theme(name) is not None

    def test_user_themes_override(self, theme_dir):
        _write(theme_dir / "default.yaml", {
            "name": "default", "span": "magenta", "event": "none", "error": "red",
        })
        engine = ThemeEngine(user_theme_dir=theme_dir)
        engine.load_themes()
        assert engine.get_theme("default").span == TextStyle(fg="magenta")

    def test_invalid_files_are_skipped(self, theme_dir, caplog):
        _write(theme_dir / "good.yaml", {"span": "red", "event": "red", "error": "red"})
        _write(theme_dir / "bad.yaml", {"span": "red"})
        engine = ThemeEngine(theme_dir=theme_dir)

        with caplog.at_level(logging.WARNING, logger="tracetint"):
            engine.load_themes()

        assert engine.get_theme("good") is not None
        assert engine.get_theme("bad") is None
        assert "Failed to load theme" in caplog.text

    @pytest.mark.parametrize("content", [
        b"span: \xff\xfe\n",
        b"span: {1: red, fg: red}\nevent: red\nerror: red\n",
        b"span: {fg: red, bold: \"false\"}\nevent: red\nerror: red\n",
    ])
    def test_unreadable_files_are_skipped(self, theme_dir, content):
        (theme_dir / "stray.yaml").write_bytes(content)
        engine = ThemeEngine(theme_dir=theme_dir)
        engine.load_themes()
        assert engine.get_theme("stray") is None
        assert engine.get_theme("default") is not None

    def test_stray_user_file_does_not_break_load_theme(self, theme_dir):
        (theme_dir / "stray.yaml").write_bytes(b"span: \xff\xfe\n")
        settings = AppSettings(theme_dir=str(theme_dir))
        assert load_theme("default", settings=settings).name == "default"

    def test_missing_directory_is_ignored(self, tmp_path):
        engine = ThemeEngine(theme_dir=tmp_path / "missing")
        engine.load_themes()
        assert engine.list_themes() == sorted(BUILTIN_THEMES)

    def test_register_and_current(self, theme, theme_dir):
        engine = ThemeEngine(theme_dir=theme_dir)
        assert engine.current.name == "default"
        engine.register_theme(theme)
        engine.current = engine.get_theme("test")
        assert engine.current is theme

    def test_get_unknown(self, theme_dir):
        assert ThemeEngine(theme_dir=theme_dir).get_theme("nope") is None


class TestLoadTheme:
    def test_default(self, settings):
        assert load_theme(settings=settings).name == "default"

    def test_from_settings(self, settings):
        settings.theme_name = "nord"
        assert load_theme(settings=settings).name == "nord"

    def test_env_beats_settings(self, settings, monkeypatch):
        settings.theme_name = "nord"
        monkeypatch.setenv(THEME_ENV_VAR, "dracula")
        assert load_theme(settings=settings).name == "dracula"

    def test_argument_beats_env(self, settings, monkeypatch):
        monkeypatch.setenv(THEME_ENV_VAR, "dracula")
        assert load_theme("monokai", settings=settings).name == "monokai"

    def test_unknown_theme(self, settings):
        with pytest.raises(ConfigurationError, match="Unknown theme 'nope'"):
            load_theme("nope", settings=settings)

    def test_user_theme_dir(self, settings, theme_dir):
        _write(theme_dir / "mine.yaml", {"span": "blue", "event": "none", "error": "red"})
        settings.theme_dir = str(theme_dir)
        assert load_theme("mine", settings=settings).span == TextStyle(fg="blue")

    def test_explicit_engine(self, theme, theme_dir):
        engine = ThemeEngine(theme_dir=theme_dir)
        engine.register_theme(theme)
        assert load_theme("test", settings=AppSettings(), engine=engine) is theme
        assert engine.current is theme

    def test_global_settings_used_by_default(self, isolated_settings):
        isolated_settings.settings.theme_name = "gruvbox_dark"
        assert load_theme().name == "gruvbox_dark"

    def test_fresh_engine_per_call(self, settings, theme_dir):
        settings.theme_dir = str(theme_dir)
        with pytest.raises(ConfigurationError):
            load_theme("late", settings=settings)
        _write(theme_dir / "late.yaml", {"span": "red", "event": "red", "error": "red"})
        assert load_theme("late", settings=settings).name == "late"

    def test_build_engine_includes_user_dir(self, settings, theme_dir):
        _write(theme_dir / "extra.yaml", {"span": "red", "event": "red", "error": "red"})
        settings.theme_dir = str(theme_dir)
        assert "extra" in build_engine(settings).list_themes()
