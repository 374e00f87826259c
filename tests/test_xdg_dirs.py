"""
Tests for the xdg_dirs module.
"""

from pathlib import Path
from unittest.mock import patch

from cc_statusline.xdg_dirs import (
    ensure_cache_dir,
    expand_path,
    get_cache_dir,
    get_claude_dir,
    get_config_dir,
    get_config_file_path,
    get_local_claude_dir,
    get_log_file_path,
)


class TestXDGDirectories:
    """Test XDG directory functions."""

    def test_get_config_dir(self):
        """Test get_config_dir returns correct path."""
        with patch("cc_statusline.xdg_dirs.xdg_config_home") as mock_xdg:
            mock_xdg.return_value = Path("/home/user/.config")
            assert get_config_dir() == Path("/home/user/.config/cc_statusline")

    def test_get_cache_dir(self):
        """Test get_cache_dir returns correct path."""
        with patch("cc_statusline.xdg_dirs.xdg_cache_home") as mock_xdg:
            mock_xdg.return_value = Path("/home/user/.cache")
            assert get_cache_dir() == Path("/home/user/.cache/cc_statusline")

    def test_get_config_file_path(self):
        with patch("cc_statusline.xdg_dirs.xdg_config_home") as mock_xdg:
            mock_xdg.return_value = Path("/home/user/.config")
            assert get_config_file_path() == Path("/home/user/.config/cc_statusline/config.yaml")

    def test_get_log_file_path(self):
        with patch("cc_statusline.xdg_dirs.xdg_cache_home") as mock_xdg:
            mock_xdg.return_value = Path("/home/user/.cache")
            assert get_log_file_path() == Path("/home/user/.cache/cc_statusline/statusline.log")

    def test_ensure_cache_dir(self, isolated_dirs):
        """The cache directory is created on demand."""
        cache_dir = ensure_cache_dir()

        assert cache_dir == isolated_dirs["cache_home"] / "cc_statusline"
        assert cache_dir.is_dir()


class TestClaudeDirectories:
    """Test Claude directory resolution."""

    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path / "custom"))
        assert get_claude_dir() == tmp_path / "custom"

    def test_first_of_several(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CLAUDE_CONFIG_DIR", f"{tmp_path / 'first'}, {tmp_path / 'second'}")
        assert get_claude_dir() == tmp_path / "first"

    def test_default_home(self, monkeypatch):
        monkeypatch.delenv("CLAUDE_CONFIG_DIR")
        assert get_claude_dir() == Path.home() / ".claude"

    def test_blank_env_uses_home(self, monkeypatch):
        monkeypatch.setenv("CLAUDE_CONFIG_DIR", "  ")
        assert get_claude_dir() == Path.home() / ".claude"

    def test_local_dir(self, tmp_path):
        assert get_local_claude_dir(tmp_path) == tmp_path / ".claude"

    def test_local_dir_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert get_local_claude_dir() == Path.cwd() / ".claude"

    def test_expand_path(self, monkeypatch):
        monkeypatch.setenv("CC_TEST_BASE", "/opt/base")
        assert expand_path("$CC_TEST_BASE/claude") == Path("/opt/base/claude")
        assert expand_path("~/claude") == Path.home() / "claude"
