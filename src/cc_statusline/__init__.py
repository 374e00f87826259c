"""Two-line gradient status dashboard for Claude Code."""

from __future__ import annotations

__version__ = "0.1.0"
__application_title__ = "CC Statusline"
__application_binary__ = "cc-statusline"

__all__: list[str] = [
    "__version__",
    "__application_title__",
    "__application_binary__",
]
