"""Enumerations used across the status line pipeline."""

from __future__ import annotations

from enum import Enum


class GitStatusKind(str, Enum):
    """Working tree summary reduced from porcelain status output."""

    CLEAN = "clean"
    UNSTAGED_ONLY = "unstaged_only"
    STAGED_ONLY = "staged_only"
    BOTH = "both"


class BarCellKind(str, Enum):
    """Kinds of cell in the usage progress bar."""

    FILLED = "filled"
    EMPTY = "empty"
    THRESHOLD_MARKER = "threshold_marker"


class InstallScope(str, Enum):
    """Where the status line is installed."""

    GLOBAL = "global"
    LOCAL = "local"
