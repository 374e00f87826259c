"""Status line composition for Claude Code integration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .config import Config
from .enums import GitStatusKind
from .git_info import get_git_state
from .input_normalizer import normalize_payload, parse_status_input
from .models import BarRender, DashboardLines, GitState, StatusInput, StyledSegment, UsageMetrics
from .progress_bar import bar_segments, normalize_bar_width, render_bar
from .styling import CLEAR_TO_EOL, render_segments
from .token_calculator import calculate_usage, format_token_count, format_token_count_decimal
from .version_check import get_update_suffix

logger = logging.getLogger(__name__)

MODEL_ICON = "🤖 "
PROJECT_ICON = "📁 "
TOOLS_ICON = "🔧 "
BACKGROUND_ICON = "⏳ "
COMPACT_ICON = "⚡"

SEPARATOR = StyledSegment("│", foreground="white", dim=True)
ARROW = StyledSegment("→", foreground="white", dim=True)
NO_UPSTREAM = StyledSegment("(no upstream)", foreground="white", dim=True)

STATUS_GLYPHS: dict[GitStatusKind, tuple[StyledSegment, ...]] = {
    GitStatusKind.BOTH: (
        StyledSegment("●", foreground="yellow", bold=True),
        StyledSegment("✚", foreground="green", bold=True),
    ),
    GitStatusKind.UNSTAGED_ONLY: (StyledSegment("●", foreground="yellow", bold=True),),
    GitStatusKind.STAGED_ONLY: (StyledSegment("✚", foreground="green", bold=True),),
    GitStatusKind.CLEAN: (StyledSegment("✓", foreground="green", bold=True),),
}

# (minimum percent until compact, xterm 256 color) from plenty of room down to imminent
COMPACT_COLOR_STEPS: tuple[tuple[float, int], ...] = (
    (25, 46),
    (20, 154),
    (15, 226),
    (10, 220),
    (7, 214),
    (4, 208),
)
COMPACT_COLOR_IMMINENT = 196


def format_cost(cost: float) -> str:
    """Format a USD cost with two decimals."""
    return f"${cost:.2f}"


def format_percent(value: float) -> str:
    """Format a percentage without a trailing ``.0``."""
    return str(int(value)) if float(value).is_integer() else str(value)


def compact_indicator_color(remaining_percent: float) -> int:
    """Pick the xterm 256 color for the distance to auto-compact."""
    for minimum, color in COMPACT_COLOR_STEPS:
        if remaining_percent >= minimum:
            return color
    return COMPACT_COLOR_IMMINENT


def _join(groups: list[list[StyledSegment]]) -> list[StyledSegment]:
    """Join non-empty segment groups with single spaces."""
    segments: list[StyledSegment] = []
    for group in groups:
        if not group:
            continue
        if segments:
            segments.append(StyledSegment(" "))
        segments.extend(group)
    return segments


class StatusLineManager:
    """Builds the two-line dashboard from a Claude Code status payload."""

    def __init__(self, config: Config):
        """Initialize the status line manager.

        Args:
            config: Application configuration
        """
        self.config = config

    def _model_segments(self, status: StatusInput) -> list[StyledSegment]:
        if not status.model_name:
            return []
        return [StyledSegment(MODEL_ICON), StyledSegment(status.model_name, foreground="cyan", bold=True)]

    def _cost_segments(self, status: StatusInput) -> list[StyledSegment]:
        if status.cost_usd is None:
            return []
        return [StyledSegment(f"({format_cost(status.cost_usd)})", foreground="green", bold=True)]

    def _token_label_segments(self, metrics: UsageMetrics, bar: BarRender, max_tokens: int) -> list[StyledSegment]:
        """Used tokens in the color of the rightmost filled cell, then the window size."""
        return [
            StyledSegment(format_token_count(metrics.used_tokens), foreground=bar.rightmost_color),
            StyledSegment(f"/{format_token_count(max_tokens)}", foreground="cyan", bold=True),
        ]

    def _compact_indicator_segments(self, metrics: UsageMetrics) -> list[StyledSegment]:
        """Tokens left before auto-compact, with the percentage dimmed in parentheses."""
        remaining = metrics.remaining_until_compact_percent
        if not remaining:
            return []
        tokens = format_token_count_decimal(metrics.remaining_until_compact_tokens)
        return [
            StyledSegment(f"{COMPACT_ICON}{tokens} until compact", foreground=compact_indicator_color(remaining)),
            StyledSegment(" "),
            StyledSegment(f"({format_percent(remaining)}%)", dim=True),
        ]

    def _extra_segments(self, status: StatusInput, metrics: UsageMetrics) -> list[list[StyledSegment]]:
        groups: list[list[StyledSegment]] = []
        if self.config.show_compact_indicator:
            groups.append(self._compact_indicator_segments(metrics))
        if self.config.show_tool_counts and status.tool_count > 0:
            groups.append([StyledSegment(f"{TOOLS_ICON}{status.tool_count}")])
        if self.config.show_background_tasks and status.background_task_count > 0:
            groups.append([StyledSegment(f"{BACKGROUND_ICON}{status.background_task_count}")])
        return groups

    def format_line1(self, status: StatusInput, metrics: UsageMetrics, bar: BarRender) -> str:
        """Format line 1: model, cost, separator, gradient bar and token label.

        Args:
            status: Normalized status input
            metrics: Usage metrics
            bar: Rendered bar cells

        Returns:
            Line 1 with ANSI styling
        """
        heading = _join([self._model_segments(status), self._cost_segments(status)])
        groups = [
            heading,
            [SEPARATOR] if heading else [],
            bar_segments(bar),
            self._token_label_segments(metrics, bar, status.context_window_size),
            *self._extra_segments(status, metrics),
        ]
        return render_segments(_join(groups))

    def _git_segments(self, git: GitState) -> list[StyledSegment]:
        """Branch, status glyph, arrow and upstream tracking, or nothing without a branch."""
        if not git.is_repository or not git.branch:
            return []

        groups: list[list[StyledSegment]] = [[StyledSegment(git.branch, foreground="magenta", bold=True)]]
        if git.status_kind is not None:
            groups.append(list(STATUS_GLYPHS[git.status_kind]))
        groups.append([ARROW])

        if git.upstream:
            groups.append([StyledSegment(git.upstream, foreground="blue", bold=True)])
            tracking: list[list[StyledSegment]] = []
            if git.ahead_count:
                tracking.append([StyledSegment(f"↑{git.ahead_count}", foreground="green")])
            if git.behind_count:
                tracking.append([StyledSegment(f"↓{git.behind_count}", foreground="red")])
            groups.append(_join(tracking))
        else:
            groups.append([NO_UPSTREAM])
        return _join(groups)

    def format_line2(self, status: StatusInput, git: GitState, update_suffix: str = "") -> str:
        """Format line 2: project name, git state and the optional update notice.

        Args:
            status: Normalized status input
            git: Git state of the working directory
            update_suffix: Text appended verbatim, may be empty

        Returns:
            Line 2 with ANSI styling
        """
        project_name = Path(status.working_directory).name if status.working_directory else ""
        project = [StyledSegment(PROJECT_ICON), StyledSegment(project_name, foreground="cyan", bold=True)]
        groups = [project if project_name else [], self._git_segments(git)]
        return render_segments(_join(groups)) + update_suffix

    def compose_lines(
        self,
        status: StatusInput,
        metrics: UsageMetrics,
        bar: BarRender,
        git: GitState,
        update_suffix: str = "",
    ) -> DashboardLines:
        """Compose both lines from already computed pipeline results."""
        return DashboardLines(
            line1=self.format_line1(status, metrics, bar),
            line2=self.format_line2(status, git, update_suffix),
        )

    def _collect_git_state(self, status: StatusInput) -> GitState:
        if not self.config.git_enabled:
            return GitState()
        return get_git_state(status.working_directory, timeout=self.config.git_timeout)

    def _collect_update_suffix(self, status: StatusInput) -> str:
        if not self.config.update_check_enabled:
            return ""
        return get_update_suffix(
            status.working_directory,
            self.config.tracked_tool_dir,
            self.config.update_cache_file,
            self.config.tracked_tool_label,
        )

    def build_dashboard(self, status: StatusInput, bar_width: int | None = None) -> DashboardLines:
        """Run the full pipeline for one normalized input.

        Args:
            status: Normalized status input
            bar_width: Bar cells, falls back to the configured width when invalid

        Returns:
            The composed dashboard lines
        """
        width = normalize_bar_width(bar_width, default=self.config.bar_width)
        metrics = calculate_usage(status)
        bar = render_bar(metrics.usage_percent, width)
        git = self._collect_git_state(status)
        update_suffix = self._collect_update_suffix(status)
        logger.debug(
            "Rendering %s%% of %s tokens, bar width %s, git repository: %s",
            metrics.usage_percent,
            status.context_window_size,
            bar.width,
            git.is_repository,
        )
        return self.compose_lines(status, metrics, bar, git, update_suffix)

    @staticmethod
    def format_output(lines: DashboardLines) -> str:
        """Join the lines for stdout, clearing to end of line instead of padding."""
        return f"{lines.line1}{CLEAR_TO_EOL}\n{lines.line2}{CLEAR_TO_EOL}"

    def get_status_line_for_request(self, session_json: dict[str, Any], bar_width: int | None = None) -> str:
        """Get the dashboard for a decoded Claude Code payload.

        Raises:
            StatusInputError: If the payload is not a JSON object
        """
        return self.format_output(self.build_dashboard(normalize_payload(session_json), bar_width))

    def render(self, raw_input: str, bar_width: int | None = None) -> str:
        """Get the dashboard for raw stdin text.

        Raises:
            StatusInputError: If the text is not a JSON object
        """
        return self.format_output(self.build_dashboard(parse_status_input(raw_input), bar_width))
