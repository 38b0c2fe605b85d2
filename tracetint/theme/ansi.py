"""
ANSI styling for terminal output.

Styles are immutable ``TextStyle`` values. ``apply`` turns a style and a
piece of text into a string carrying SGR escape codes; it never raises and
never alters the text itself.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Optional, Union

import click

Color = Union[str, int, tuple]

BASE_COLORS = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)

COLOR_NAMES = frozenset(
    BASE_COLORS
    + tuple(f"bright_{name}" for name in BASE_COLORS)
    + ("reset",)
)

ATTRIBUTES = (
    "bold",
    "dim",
    "italic",
    "underline",
    "blink",
    "reverse",
    "strikethrough",
)

# Words accepted in style strings that mean "no styling"
PLAIN_WORDS = ("none", "plain", "default")


def normalize_color(value: Any) -> Optional[Color]:
    """
    Convert a color value into the form click understands.

    Accepts ANSI color names (``bright-red`` and ``bright_red`` alike),
    ``#rrggbb`` hex strings, 256-color indexes and RGB sequences.

    Returns:
        Normalized color, or None if the value is not a color
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value if 0 <= value <= 255 else None

    if isinstance(value, str):
        name = value.strip().lower().replace("-", "_")
        if name in COLOR_NAMES:
            return name
        if name.isascii() and name.isdigit():
            index = int(name)
            return index if index <= 255 else None
        if len(name) == 7 and name.startswith("#"):
            try:
                return tuple(int(name[i:i + 2], 16) for i in (1, 3, 5))
            except ValueError:
                return None
        return None

    if isinstance(value, (tuple, list)) and len(value) == 3:
        if all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value):
            return tuple(value)

    return None


def _color_to_spec(color: Color) -> str:
    if isinstance(color, tuple):
        return "#{:02x}{:02x}{:02x}".format(*color)
    return str(color)


@dataclass(frozen=True)
class TextStyle:
    """Visual style for a span of terminal text."""
    fg: Optional[Color] = None
    bg: Optional[Color] = None
    bold: bool = False
    dim: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    reverse: bool = False
    strikethrough: bool = False

    @property
    def is_plain(self) -> bool:
        """True if the style changes nothing."""
        return (
            self.fg is None
            and self.bg is None
            and not any(getattr(self, attr) for attr in ATTRIBUTES)
        )

    def __bool__(self) -> bool:
        return not self.is_plain

    @classmethod
    def from_dict(cls, data: dict) -> TextStyle:
        """
        Build a style from a mapping such as ``{"fg": "red", "bold": True}``.

        Raises:
            ValueError: on unknown keys or colors
        """
        valid_fields = {f.name for f in fields(cls)}
        unknown = set(data) - valid_fields
        if unknown:
            raise ValueError(f"Unknown style keys: {', '.join(sorted(map(str, unknown)))}")

        kwargs = {}
        for key in ("fg", "bg"):
            raw = data.get(key)
            if raw is None:
                continue
            color = normalize_color(raw)
            if color is None:
                raise ValueError(f"Unknown color for {key}: {raw!r}")
            kwargs[key] = color

        for attr in ATTRIBUTES:
            if attr not in data:
                continue
            if not isinstance(data[attr], bool):
                raise ValueError(f"{attr} must be true or false, got {data[attr]!r}")
            kwargs[attr] = data[attr]

        return cls(**kwargs)

    @classmethod
    def from_value(cls, value: Any) -> TextStyle:
        """Build a style from a style string, a mapping, or a TextStyle."""
        if isinstance(value, TextStyle):
            return value
        if value is None:
            return cls()
        if isinstance(value, str):
            return parse_style(value)
        if isinstance(value, dict):
            return cls.from_dict(value)
        raise ValueError(f"Cannot build a style from {type(value).__name__}")

    def to_spec(self) -> str:
        """Render as a style string accepted by ``parse_style``."""
        if self.is_plain:
            return "none"

        words = [attr for attr in ATTRIBUTES if getattr(self, attr)]
        if self.fg is not None:
            words.append(_color_to_spec(self.fg))
        if self.bg is not None:
            words.extend(["on", _color_to_spec(self.bg)])
        return " ".join(words)


def parse_style(spec: str) -> TextStyle:
    """
    Parse a style string.

    Examples: ``"bold red"``, ``"underline #ff8800 on black"``, ``"none"``.
    The first color is the foreground; a color after ``on`` is the
    background.

    Args:
        spec: Whitespace separated attributes and colors

    Returns:
        Parsed TextStyle

    Raises:
        ValueError: if a word is neither an attribute nor a color
    """
    words = spec.split()
    if not words or (len(words) == 1 and words[0].lower() in PLAIN_WORDS):
        return TextStyle()

    kwargs: dict = {}
    expect_bg = False

    for word in words:
        lowered = word.lower()

        if lowered == "on":
            if expect_bg:
                raise ValueError(f"Repeated 'on' in style {spec!r}")
            expect_bg = True
            continue

        if lowered in ATTRIBUTES and not expect_bg:
            kwargs[lowered] = True
            continue

        color = normalize_color(word)
        if color is None:
            raise ValueError(f"Unknown style word {word!r} in {spec!r}")

        key = "bg" if expect_bg else "fg"
        if key in kwargs:
            raise ValueError(f"More than one {key} color in style {spec!r}")
        kwargs[key] = color
        expect_bg = False

    if expect_bg:
        raise ValueError(f"Missing background color after 'on' in {spec!r}")

    return TextStyle(**kwargs)


def apply(style: Any, text: str) -> str:
    """
    Wrap text in the escape codes for a style.

    Total over its inputs: None, a plain style, or anything that is not a
    TextStyle leaves the text untouched. A color that fails
    ``normalize_color`` is skipped and the remaining attributes still apply.

    Args:
        style: Style to apply
        text: Text to style

    Returns:
        Styled text, ending with a reset code when styling was applied
    """
    if not isinstance(style, TextStyle) or style.is_plain or not text:
        return text

    kwargs = {attr: True for attr in ATTRIBUTES if getattr(style, attr)}
    fg = normalize_color(style.fg)
    bg = normalize_color(style.bg)
    if fg is not None:
        kwargs["fg"] = fg
    if bg is not None:
        kwargs["bg"] = bg

    if not kwargs:
        return text

    return click.style(text, **kwargs)


def visible_text(styled: str) -> str:
    """Text as shown on a terminal that ignores escape codes."""
    return click.unstyle(styled)
