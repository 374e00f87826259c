"""
Tests for the tracked tool update notice.
"""

import json

import pytest

from cc_statusline.version_check import (
    find_version_file,
    get_update_suffix,
    read_installed_version,
    read_latest_version,
)

TOOL_DIR = "get-shit-done"
CACHE_FILE = "gsd-update-check.json"


def write_version(base, version):
    path = base / TOOL_DIR / "VERSION"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(version)
    return path


def write_cache(claude_dir, content):
    path = claude_dir / "cache" / CACHE_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content if isinstance(content, str) else json.dumps(content))
    return path


def suffix(project=None):
    return get_update_suffix(str(project) if project else None, TOOL_DIR, CACHE_FILE, "GSD")


class TestFindVersionFile:
    """Test find_version_file."""

    def test_none_installed(self, tmp_path, claude_dir):
        assert find_version_file(str(tmp_path), TOOL_DIR) is None

    def test_global_install(self, tmp_path, claude_dir):
        expected = write_version(claude_dir, "1.0.0")
        assert find_version_file(str(tmp_path), TOOL_DIR) == expected

    def test_local_preferred(self, tmp_path, claude_dir):
        write_version(claude_dir, "1.0.0")
        local = write_version(tmp_path / ".claude", "0.9.0")
        assert find_version_file(str(tmp_path), TOOL_DIR) == local

    def test_no_working_directory(self, claude_dir):
        expected = write_version(claude_dir, "1.0.0")
        assert find_version_file(None, TOOL_DIR) == expected


class TestReadVersions:
    """Test reading the installed and latest versions."""

    def test_installed_version_stripped(self, tmp_path):
        path = tmp_path / "VERSION"
        path.write_text("1.2.3\n")
        assert read_installed_version(path) == "1.2.3"

    def test_empty_version_file(self, tmp_path):
        path = tmp_path / "VERSION"
        path.write_text("")
        assert read_installed_version(path) == "0.0.0"

    def test_missing_cache(self, tmp_path):
        assert read_latest_version(tmp_path / "missing.json") is None

    def test_cache_latest(self, claude_dir):
        assert read_latest_version(write_cache(claude_dir, {"latest": "1.1.0"})) == "1.1.0"

    @pytest.mark.parametrize("content", [{}, {"latest": None}, {"latest": 5}, {"checked": 123}])
    def test_cache_without_latest(self, claude_dir, content):
        assert read_latest_version(write_cache(claude_dir, content)) == "unknown"

    @pytest.mark.parametrize("content", ["{", "not json", "[1, 2]"])
    def test_malformed_cache(self, claude_dir, content):
        assert read_latest_version(write_cache(claude_dir, content)) is None


class TestGetUpdateSuffix:
    """Test get_update_suffix."""

    def test_newer_version_available(self, tmp_path, claude_dir):
        write_version(claude_dir, "1.0.0")
        write_cache(claude_dir, {"latest": "1.1.0"})
        assert suffix(tmp_path) == "    |  GSD 1.0.0>1.1.0"

    def test_local_version_used(self, tmp_path, claude_dir):
        write_version(claude_dir, "1.0.0")
        write_version(tmp_path / ".claude", "0.9.0")
        write_cache(claude_dir, {"latest": "1.1.0"})
        assert suffix(tmp_path) == "    |  GSD 0.9.0>1.1.0"

    def test_same_version(self, tmp_path, claude_dir):
        write_version(claude_dir, "1.1.0")
        write_cache(claude_dir, {"latest": "1.1.0"})
        assert suffix(tmp_path) == ""

    def test_empty_version_file_reads_as_zero(self, tmp_path, claude_dir):
        write_version(claude_dir, "")
        write_cache(claude_dir, {"latest": "1.1.0"})
        assert suffix(tmp_path) == "    |  GSD 0.0.0>1.1.0"

    def test_not_installed(self, tmp_path, claude_dir):
        write_cache(claude_dir, {"latest": "1.1.0"})
        assert suffix(tmp_path) == ""

    def test_no_cache(self, tmp_path, claude_dir):
        write_version(claude_dir, "1.0.0")
        assert suffix(tmp_path) == ""

    def test_unknown_latest(self, tmp_path, claude_dir):
        write_version(claude_dir, "1.0.0")
        write_cache(claude_dir, {})
        assert suffix(tmp_path) == ""

    def test_malformed_cache(self, tmp_path, claude_dir):
        write_version(claude_dir, "1.0.0")
        write_cache(claude_dir, "{broken")
        assert suffix(tmp_path) == ""

    def test_custom_label(self, tmp_path, claude_dir):
        write_version(claude_dir, "1.0.0")
        write_cache(claude_dir, {"latest": "2.0.0"})
        assert get_update_suffix(str(tmp_path), TOOL_DIR, CACHE_FILE, "Tool") == "    |  Tool 1.0.0>2.0.0"
