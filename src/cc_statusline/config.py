"""Configuration management for cc_statusline."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .git_info import DEFAULT_GIT_TIMEOUT
from .progress_bar import DEFAULT_BAR_WIDTH, normalize_bar_width
from .xdg_dirs import get_config_file_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "CC_STATUSLINE_"


class Config(BaseModel):
    """Main configuration model."""

    bar_width: int = Field(
        default=DEFAULT_BAR_WIDTH,
        description="Progress bar cells when --width is not given (10-100)",
    )
    git_enabled: bool = Field(default=True, description="Show git information on line 2")
    git_timeout: float = Field(default=DEFAULT_GIT_TIMEOUT, gt=0, description="Seconds allowed per git command")
    show_compact_indicator: bool = Field(
        default=False,
        description="Append the tokens remaining until auto-compact to line 1",
    )
    show_tool_counts: bool = Field(default=False, description="Append the skills/agents/MCP tools count to line 1")
    show_background_tasks: bool = Field(default=False, description="Append the background task count to line 1")
    update_check_enabled: bool = Field(default=True, description="Show an update notice for the tracked tool")
    tracked_tool_dir: str = Field(
        default="get-shit-done",
        description="Directory under .claude holding the tracked tool's VERSION file",
    )
    update_cache_file: str = Field(
        default="gsd-update-check.json",
        description="Update check cache file name under <claude dir>/cache",
    )
    tracked_tool_label: str = Field(default="GSD", description="Tool name shown in the update notice")
    debug: bool = Field(default=False, description="Write debug logs to the cache directory")

    @field_validator("bar_width", mode="before")
    @classmethod
    def _normalize_bar_width(cls, value: Any) -> int:
        return normalize_bar_width(value)


ENV_FIELDS: dict[str, str] = {
    f"{ENV_PREFIX}BAR_WIDTH": "bar_width",
    f"{ENV_PREFIX}GIT_ENABLED": "git_enabled",
    f"{ENV_PREFIX}GIT_TIMEOUT": "git_timeout",
    f"{ENV_PREFIX}SHOW_COMPACT_INDICATOR": "show_compact_indicator",
    f"{ENV_PREFIX}SHOW_TOOL_COUNTS": "show_tool_counts",
    f"{ENV_PREFIX}SHOW_BACKGROUND_TASKS": "show_background_tasks",
    f"{ENV_PREFIX}UPDATE_CHECK_ENABLED": "update_check_enabled",
    f"{ENV_PREFIX}DEBUG": "debug",
}


def _load_yaml(config_file: Path) -> dict[str, Any]:
    """Read the YAML config file, returning an empty mapping on any problem."""
    try:
        if not config_file.exists():
            return {}
        with open(config_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.debug("Ignoring unreadable config file %s: %s", config_file, e)
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def _load_env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for env_var, field_name in ENV_FIELDS.items():
        value = os.getenv(env_var)
        if value is not None and value.strip():
            overrides[field_name] = value.strip()
    return overrides


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from the YAML file and environment variables.

    Environment variables override the file. A configuration that fails
    validation falls back to the defaults so the status line still renders.

    Args:
        config_file: Path to config file (defaults to the XDG config location)

    Returns:
        Loaded configuration
    """
    if config_file is None:
        config_file = get_config_file_path()

    config_data = _load_yaml(config_file)
    config_data.update(_load_env_overrides())

    try:
        return Config.model_validate(config_data)
    except ValidationError as e:
        logger.debug("Invalid configuration, using defaults: %s", e)
        return Config()
