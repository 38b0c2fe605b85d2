"""
Themed trace output.
"""

from __future__ import annotations
import logging
from typing import IO, Optional

import click

from tracetint.theme.ansi import apply
from tracetint.theme.engine import Role, Theme, load_theme

logger = logging.getLogger(__name__)

# (role, text) pairs for each printed line, in order
TRACE_LINES = (
    ((Role.SPAN, "SPAN"), (Role.EVENT, "User logged in")),
    ((Role.ERROR, "ERROR"), (Role.ERROR, "Connection failed")),
)


def format_line(theme: Theme, *parts: tuple[Role, str]) -> str:
    """
    Style each part with its role and join them with single spaces.

    Args:
        theme: Theme supplying the role styles
        parts: (role, text) pairs

    Returns:
        The styled line, without a trailing newline
    """
    return " ".join(apply(theme.style_for(role), text) for role, text in parts)


def render_lines(theme: Theme) -> list[str]:
    """Styled trace lines for a theme."""
    return [format_line(theme, *parts) for parts in TRACE_LINES]


def render_trace(
    theme: Theme = None,
    color: Optional[bool] = None,
    file: IO = None,
) -> None:
    """
    Print the trace lines.

    Args:
        theme: Theme to use; loaded with ``load_theme()`` when omitted
        color: Force escape codes on (True) or off (False). None keeps
            them only when the output is a terminal.
        file: Output stream, stdout by default
    """
    if theme is None:
        theme = load_theme()

    logger.debug(f"Rendering trace with theme {theme.name}")
    for line in render_lines(theme):
        click.echo(line, file=file, color=color)
