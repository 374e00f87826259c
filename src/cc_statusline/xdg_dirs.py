"""XDG Base Directory and Claude directory resolution."""

from __future__ import annotations

import os
from pathlib import Path

from xdg_base_dirs import xdg_cache_home, xdg_config_home

APP_NAME = "cc_statusline"
CLAUDE_DIR_NAME = ".claude"


def get_config_dir() -> Path:
    """Get the XDG config directory for cc_statusline.

    Returns:
        Path to $XDG_CONFIG_HOME/cc_statusline
    """
    return xdg_config_home() / APP_NAME


def get_cache_dir() -> Path:
    """Get the XDG cache directory for cc_statusline.

    Returns:
        Path to $XDG_CACHE_HOME/cc_statusline
    """
    return xdg_cache_home() / APP_NAME


def get_config_file_path() -> Path:
    return get_config_dir() / "config.yaml"


def get_log_file_path() -> Path:
    return get_cache_dir() / "statusline.log"


def ensure_cache_dir() -> Path:
    """Create the cache directory if needed and return it."""
    cache_dir = get_cache_dir()
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir


def expand_path(path: str) -> Path:
    """Expand ``~`` and environment variables in a path."""
    return Path(os.path.expandvars(os.path.expanduser(path)))


def get_claude_dir() -> Path:
    """Get the global Claude configuration directory.

    ``CLAUDE_CONFIG_DIR`` may hold a comma separated list; the first entry wins.

    Returns:
        Path to the global Claude directory, ~/.claude by default
    """
    env_value = os.getenv("CLAUDE_CONFIG_DIR", "").strip()
    if env_value:
        first = env_value.split(",")[0].strip()
        if first:
            return expand_path(first)
    return Path.home() / CLAUDE_DIR_NAME


def get_local_claude_dir(project_dir: str | Path | None = None) -> Path:
    """Get the project-local Claude directory (``./.claude`` by default)."""
    base = Path(project_dir) if project_dir else Path.cwd()
    return base / CLAUDE_DIR_NAME
