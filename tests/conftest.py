"""
Pytest configuration and shared fixtures for cc_statusline tests.
"""

import os
from pathlib import Path

import pytest

from cc_statusline.config import Config


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Point every config, cache and Claude directory at a temporary location."""
    config_home = tmp_path / "xdg_config"
    cache_home = tmp_path / "xdg_cache"
    claude_dir = tmp_path / "claude_home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("XDG_CACHE_HOME", str(cache_home))
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(claude_dir))
    for name in list(os.environ):
        if name.startswith("CC_STATUSLINE_"):
            monkeypatch.delenv(name)
    return {"config_home": config_home, "cache_home": cache_home, "claude_dir": claude_dir}


@pytest.fixture
def claude_dir(isolated_dirs) -> Path:
    """The global Claude directory used by the current test."""
    return isolated_dirs["claude_dir"]


@pytest.fixture
def plain_config():
    """Configuration with the update check disabled."""
    return Config(update_check_enabled=False)


@pytest.fixture
def sample_payload():
    """Payload with the model, cost and a precalculated usage percentage."""
    return {
        "model": {"display_name": "Opus 4.5"},
        "cost": {"total_cost_usd": 12.41},
        "context_window": {"context_window_size": 200000, "used_percentage": 62},
    }


@pytest.fixture
def full_payload(tmp_path):
    """Payload using every recognized field."""
    project = tmp_path / "my-project"
    project.mkdir()
    return {
        "workspace": {"current_dir": str(project)},
        "cwd": "/somewhere/else",
        "model": {"display_name": "Sonnet 4.5"},
        "context_window": {
            "total_input_tokens": 40000,
            "total_output_tokens": 8000,
            "current_usage": {"cache_read_input_tokens": 2000},
            "context_window_size": 200000,
            "remaining_percentage": 75,
        },
        "cost": {"total_cost_usd": 0.5},
        "context": {"skills": ["a", "b"], "agents": ["c"], "mcp_tools": []},
        "background_tasks": [{"id": 1}],
    }
