"""Serialize styled segments to ANSI SGR escape sequences.

This is the only place that knows how terminals encode color. Everything
else describes what to show with ``StyledSegment`` values.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Color, StyledSegment

ESC = "\x1b"
RESET = f"{ESC}[0m"
CLEAR_TO_EOL = f"{ESC}[K"

BASIC_COLORS: dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "bright_black": 90,
    "bright_red": 91,
    "bright_green": 92,
    "bright_yellow": 93,
    "bright_blue": 94,
    "bright_magenta": 95,
    "bright_cyan": 96,
    "bright_white": 97,
}


def color_codes(color: Color, background: bool = False) -> str:
    """Return the SGR parameters selecting a foreground or background color.

    Args:
        color: RGB triple, xterm 256-color index or basic color name
        background: Select the background instead of the foreground

    Returns:
        SGR parameter string such as ``38;2;255;0;0``

    Raises:
        ValueError: If the color name is unknown
    """
    if isinstance(color, tuple):
        r, g, b = color
        return f"{48 if background else 38};2;{r};{g};{b}"
    if isinstance(color, int):
        return f"{48 if background else 38};5;{color}"
    try:
        code = BASIC_COLORS[color]
    except KeyError as e:
        raise ValueError(f"Unknown color name: {color}") from e
    return str(code + 10 if background else code)


def sgr_parameters(segment: StyledSegment) -> str:
    codes: list[str] = []
    if segment.bold:
        codes.append("1")
    if segment.dim:
        codes.append("2")
    if segment.foreground is not None:
        codes.append(color_codes(segment.foreground))
    if segment.background is not None:
        codes.append(color_codes(segment.background, background=True))
    return ";".join(codes)


def render_segment(segment: StyledSegment) -> str:
    """Render one segment, resetting all attributes after styled text."""
    params = sgr_parameters(segment)
    if not params or not segment.text:
        return segment.text
    return f"{ESC}[{params}m{segment.text}{RESET}"


def render_segments(segments: Iterable[StyledSegment]) -> str:
    """Render a sequence of segments into one terminal string."""
    return "".join(render_segment(segment) for segment in segments)
