"""
tracetint/cli.py

Command-line interface for tracetint.

Usage:
    tracetint trace
    tracetint trace --theme nord --color
    tracetint themes
    tracetint preview dracula
    tracetint use gruvbox_dark
"""

import sys
import json
from pathlib import Path

import click

from .config import get_settings, get_settings_manager, save_settings
from .log import setup_logging
from .theme import ConfigurationError, Role, Theme, apply, build_engine, load_theme
from .viewer import render_trace


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.option("-v", "--verbose", count=True, help="Log more (-vv for debug)")
@click.option("--log-file", default=None, type=click.Path(dir_okay=False), help="Also log to this file")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def cli(ctx, verbose, log_file, output_json):
    """Print trace lines styled by a console theme."""
    ctx.ensure_object(dict)
    settings = get_settings()

    if verbose >= 2:
        level = "DEBUG"
    elif verbose == 1:
        level = "INFO"
    else:
        level = settings.log_level
    setup_logging(level=level, log_file=log_file)

    ctx.obj["json"] = output_json
    ctx.obj["settings"] = settings


@cli.command("trace")
@click.option("-t", "--theme", "theme_name", default=None, help="Theme name")
@click.option(
    "--theme-file",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Load the theme from a YAML file",
)
@click.option("--color/--no-color", default=None, help="Force escape codes on or off")
@click.pass_context
def show_trace(ctx, theme_name, theme_file, color):
    """Print the styled trace lines."""
    settings = ctx.obj["settings"]

    if theme_name and theme_file:
        _fail("Use either --theme or --theme-file, not both.")

    try:
        if theme_file:
            theme = Theme.load(theme_file)
        else:
            theme = load_theme(theme_name, settings=settings)
    except ConfigurationError as e:
        _fail(str(e))

    if color is None:
        color = settings.color_flag()

    render_trace(theme, color=color)


@cli.command("themes")
@click.pass_context
def list_themes(ctx):
    """List available themes."""
    settings = ctx.obj["settings"]
    engine = build_engine(settings)

    names = engine.list_themes()

    if ctx.obj["json"]:
        click.echo(json.dumps([
            {
                "name": name,
                "description": engine.get_theme(name).description,
                "configured": name == settings.theme_name,
            }
            for name in names
        ], indent=2))
    else:
        for name in names:
            marker = "*" if name == settings.theme_name else " "
            description = engine.get_theme(name).description
            click.echo(f"{marker} {name:<18} {description}".rstrip())
        click.echo(f"\n{len(names)} theme(s)")


@cli.command("preview")
@click.argument("name")
@click.option("--color/--no-color", default=None, help="Force escape codes on or off")
@click.pass_context
def preview_theme(ctx, name, color):
    """Show the styles of a theme."""
    settings = ctx.obj["settings"]

    try:
        theme = load_theme(name, settings=settings)
    except ConfigurationError as e:
        _fail(str(e))

    if ctx.obj["json"]:
        click.echo(json.dumps(theme.to_dict(), indent=2))
        return

    if color is None:
        color = settings.color_flag()

    click.echo(f"Theme: {theme.name}")
    if theme.description:
        click.echo(f"       {theme.description}")
    for role in Role:
        style = theme.style_for(role)
        sample = apply(style, role.value.upper())
        click.echo(f"  {role.value:<6} {style.to_spec():<28} {sample}", color=color)


@cli.command("use")
@click.argument("name")
@click.pass_context
def use_theme(ctx, name):
    """Save a theme as the default."""
    settings = ctx.obj["settings"]
    engine = build_engine(settings)

    if engine.get_theme(name) is None:
        _fail(f"Unknown theme '{name}'. Available: {', '.join(engine.list_themes())}")

    settings.theme_name = name
    save_settings()
    click.echo(f"Theme set to {name} ({get_settings_manager().config_path})")


def main():
    """Entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
