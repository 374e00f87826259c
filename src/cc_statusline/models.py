"""Value objects passed between the status line pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import BarCellKind, GitStatusKind

Rgb = tuple[int, int, int]
# A color is a 24-bit RGB triple, an xterm 256-color index, or a basic ANSI color name.
Color = Rgb | int | str

PURE_GREEN: Rgb = (0, 255, 0)
PURE_RED: Rgb = (255, 0, 0)

DEFAULT_CONTEXT_WINDOW_SIZE = 200_000


@dataclass(frozen=True)
class StatusInput:
    """Normalized view of the JSON payload received on stdin.

    Every numeric field is fully defaulted so downstream stages never deal
    with missing values. Optional strings are ``None`` when absent.
    """

    working_directory: str | None = None
    model_name: str | None = None
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    cache_read_tokens: int = 0
    context_window_size: int = DEFAULT_CONTEXT_WINDOW_SIZE
    precalculated_percentage: float | None = None
    remaining_percentage: float | None = None
    until_compact_percentage: float | None = None
    cost_usd: float | None = None
    skills_count: int = 0
    agents_count: int = 0
    mcp_tools_count: int = 0
    background_task_count: int = 0

    @property
    def tool_count(self) -> int:
        """Total of skills, agents and MCP tools."""
        return self.skills_count + self.agents_count + self.mcp_tools_count


@dataclass(frozen=True)
class UsageMetrics:
    """Derived context window usage figures."""

    used_tokens: int
    usage_percent: int
    remaining_until_compact_percent: float
    remaining_until_compact_tokens: int


@dataclass(frozen=True)
class GitState:
    """Summary of the version control state of the working directory."""

    is_repository: bool = False
    branch: str | None = None
    upstream: str | None = None
    ahead_count: int | None = None
    behind_count: int | None = None
    status_kind: GitStatusKind | None = None


@dataclass(frozen=True)
class BarCell:
    """One cell of the progress bar."""

    index: int
    kind: BarCellKind
    color: Rgb | None = None
    filled: bool = False

    @property
    def is_marker(self) -> bool:
        return self.kind == BarCellKind.THRESHOLD_MARKER


@dataclass(frozen=True)
class BarRender:
    """Result of rendering the gradient bar."""

    cells: tuple[BarCell, ...]
    filled_count: int
    threshold_position: int
    rightmost_color: Rgb = PURE_GREEN

    @property
    def width(self) -> int:
        return len(self.cells)


@dataclass(frozen=True)
class StyledSegment:
    """A run of text with terminal styling, serialized by ``styling.render_segments``."""

    text: str
    foreground: Color | None = None
    background: Color | None = None
    bold: bool = False
    dim: bool = False


@dataclass(frozen=True)
class DashboardLines:
    """The two composed output lines, without terminal line endings."""

    line1: str
    line2: str
