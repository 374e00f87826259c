"""Gradient progress bar with an auto-compact threshold marker.

Each filled cell gets its own color, interpolated in RGB space from green
through yellow to red. The gradient is anchored to the threshold marker rather
than to the end of the bar, so the color reaches pure red exactly where
auto-compaction will happen whatever the configured width is. Cells filled
past the marker are always pure red.
"""

from __future__ import annotations

import math

from .enums import BarCellKind
from .models import PURE_GREEN, PURE_RED, BarCell, BarRender, Rgb, StyledSegment
from .token_calculator import COMPACT_USED_PERCENT

DEFAULT_BAR_WIDTH = 50
MIN_BAR_WIDTH = 10
MAX_BAR_WIDTH = 100

FILLED_CHAR = "█"
EMPTY_CHAR = "░"
MARKER_CHAR = "ϟ"
MARKER_BACKGROUND = "bright_black"


def normalize_bar_width(value: int | str | None, default: int = DEFAULT_BAR_WIDTH) -> int:
    """Return a bar width in the supported range, falling back to ``default``.

    Args:
        value: Requested width, possibly a raw CLI string
        default: Width to use when the request is missing or invalid

    Returns:
        Width between MIN_BAR_WIDTH and MAX_BAR_WIDTH inclusive
    """
    if not MIN_BAR_WIDTH <= default <= MAX_BAR_WIDTH:
        default = DEFAULT_BAR_WIDTH
    if value is None:
        return default
    try:
        width = int(value)
    except (TypeError, ValueError):
        return default
    if MIN_BAR_WIDTH <= width <= MAX_BAR_WIDTH:
        return width
    return default


def threshold_position(bar_width: int) -> int:
    """Index of the cell that carries the auto-compact marker."""
    return int(COMPACT_USED_PERCENT * bar_width / 100)


def filled_count(usage_percent: int, bar_width: int) -> int:
    return max(0, min(bar_width, int(usage_percent * bar_width / 100)))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def gradient_rgb(index: int, marker_position: int) -> Rgb:
    """Interpolate green -> yellow -> red for a cell.

    Args:
        index: Cell index
        marker_position: Index of the threshold marker, where the gradient hits red

    Returns:
        RGB triple for the cell
    """
    t = index / marker_position if marker_position > 0 else 0.0
    if t <= 0.5:
        # green -> yellow: red ramps up, green held at max
        return (_round_half_up(t * 2 * 255), 255, 0)
    # yellow -> red: red held at max, green ramps down
    return (255, _round_half_up((1 - t) * 2 * 255), 0)


def render_bar(usage_percent: int, bar_width: int = DEFAULT_BAR_WIDTH) -> BarRender:
    """Lay out the bar cells for a usage percentage.

    Args:
        usage_percent: Context usage, 0-100
        bar_width: Number of cells

    Returns:
        The cells, the marker position and the color of the rightmost filled cell
    """
    filled = filled_count(usage_percent, bar_width)
    marker = threshold_position(bar_width)

    cells: list[BarCell] = []
    rightmost_color = PURE_GREEN
    for i in range(bar_width):
        if i == marker:
            is_filled = i < filled
            cells.append(
                BarCell(
                    index=i,
                    kind=BarCellKind.THRESHOLD_MARKER,
                    color=gradient_rgb(i, marker) if is_filled else PURE_RED,
                    filled=is_filled,
                )
            )
        elif i < filled:
            color = PURE_RED if i > marker else gradient_rgb(i, marker)
            rightmost_color = color
            cells.append(BarCell(index=i, kind=BarCellKind.FILLED, color=color, filled=True))
        else:
            cells.append(BarCell(index=i, kind=BarCellKind.EMPTY))

    return BarRender(
        cells=tuple(cells),
        filled_count=filled,
        threshold_position=marker,
        rightmost_color=rightmost_color,
    )


def bar_segments(bar: BarRender) -> list[StyledSegment]:
    """Convert bar cells into styled segments, wrapped in brackets."""
    segments = [StyledSegment("[")]
    for cell in bar.cells:
        if cell.is_marker:
            if cell.filled:
                segments.append(StyledSegment(MARKER_CHAR, foreground="white", background=cell.color, bold=True))
            else:
                segments.append(StyledSegment(MARKER_CHAR, foreground=cell.color, background=MARKER_BACKGROUND))
        elif cell.kind == BarCellKind.FILLED:
            segments.append(StyledSegment(FILLED_CHAR, foreground=cell.color))
        else:
            segments.append(StyledSegment(EMPTY_CHAR))
    segments.append(StyledSegment("]"))
    return segments
