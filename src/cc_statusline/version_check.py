"""Update notice for an externally tracked tool installed under ``.claude``.

The tool writes its installed version to ``<claude dir>/<tool>/VERSION`` and a
session hook caches the latest published version as JSON. Both files are
optional; anything missing or malformed just means no notice.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .json_models import UpdateCheckCache
from .xdg_dirs import CLAUDE_DIR_NAME, get_claude_dir

logger = logging.getLogger(__name__)

VERSION_FILE_NAME = "VERSION"
FALLBACK_VERSION = "0.0.0"
UNKNOWN_VERSION = "unknown"
SUFFIX_PREFIX = "    |  "


def find_version_file(working_directory: str | None, tool_dir: str) -> Path | None:
    """Locate the tool's VERSION file, preferring the project-local install.

    Args:
        working_directory: Project directory, may be empty
        tool_dir: Directory name of the tool under ``.claude``

    Returns:
        Path to the VERSION file or None if neither location has one
    """
    candidates: list[Path] = []
    if working_directory:
        candidates.append(Path(working_directory) / CLAUDE_DIR_NAME / tool_dir / VERSION_FILE_NAME)
    candidates.append(get_claude_dir() / tool_dir / VERSION_FILE_NAME)

    for candidate in candidates:
        try:
            if candidate.is_file():
                return candidate
        except OSError:
            continue
    return None


def read_installed_version(version_file: Path) -> str:
    """Read the installed version, ``0.0.0`` when empty or unreadable."""
    try:
        version = version_file.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read %s: %s", version_file, e)
        version = ""
    return version or FALLBACK_VERSION


def read_latest_version(cache_file: Path) -> str | None:
    """Read the cached latest version.

    Returns:
        The latest version, ``unknown`` if the cache has none, or None if the
        cache file is missing or malformed
    """
    try:
        raw = cache_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read %s: %s", cache_file, e)
        return None

    try:
        cache = UpdateCheckCache.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.debug("Malformed update cache %s: %s", cache_file, e)
        return None
    return cache.latest or UNKNOWN_VERSION


def get_update_suffix(
    working_directory: str | None,
    tool_dir: str,
    cache_file_name: str,
    label: str,
) -> str:
    """Build the line 2 suffix announcing a newer version of the tracked tool.

    Args:
        working_directory: Project directory, may be empty
        tool_dir: Directory name of the tool under ``.claude``
        cache_file_name: Name of the update check cache under ``<claude dir>/cache``
        label: Short tool name shown in the suffix

    Returns:
        Suffix text, or an empty string when there is nothing to announce
    """
    version_file = find_version_file(working_directory, tool_dir)
    if version_file is None:
        return ""

    installed = read_installed_version(version_file)
    latest = read_latest_version(get_claude_dir() / "cache" / cache_file_name)
    if latest is None or latest == UNKNOWN_VERSION or installed == UNKNOWN_VERSION:
        return ""
    if installed == latest:
        return ""
    return f"{SUFFIX_PREFIX}{label} {installed}>{latest}"
