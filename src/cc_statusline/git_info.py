"""Summarize the git state of the working directory for line 2."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable
from pathlib import Path

from .enums import GitStatusKind
from .models import GitState

logger = logging.getLogger(__name__)

DEFAULT_GIT_TIMEOUT = 2.0

STAGED_CODES = frozenset("MADRC")
UNSTAGED_CODES = frozenset("MD")
UNTRACKED_PREFIX = "??"


def run_git(args: list[str], cwd: str | Path, timeout: float = DEFAULT_GIT_TIMEOUT) -> str | None:
    """Run a git command and return its stdout.

    Args:
        args: Arguments after ``git``
        cwd: Directory to run in
        timeout: Seconds before the command is abandoned

    Returns:
        Command output, or None if git is missing, times out or exits non-zero
    """
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.debug("git %s timed out after %ss", " ".join(args), timeout)
        return None
    except OSError as e:
        # Covers a missing git binary, a missing cwd and permission errors
        logger.debug("git %s could not run: %s", " ".join(args), e)
        return None

    if result.returncode != 0:
        logger.debug("git %s exited with %s", " ".join(args), result.returncode)
        return None
    return result.stdout


def parse_ahead_behind(output: str) -> tuple[int | None, int | None]:
    """Parse ``git rev-list --left-right --count`` output.

    Returns:
        Tuple of (ahead, behind), each None unless strictly positive
    """
    parts = output.split()
    if len(parts) < 2:
        return None, None
    try:
        ahead, behind = int(parts[0]), int(parts[1])
    except ValueError:
        return None, None
    return (ahead if ahead > 0 else None), (behind if behind > 0 else None)


def classify_porcelain(lines: Iterable[str]) -> GitStatusKind:
    """Reduce ``git status --porcelain`` lines to a single status kind.

    The first column holds the index (staged) state, the second the work tree
    state. Untracked files count as unstaged changes.
    """
    has_staged = False
    has_unstaged = False
    for line in lines:
        if not line:
            continue
        if line[0] in STAGED_CODES:
            has_staged = True
        if line.startswith(UNTRACKED_PREFIX) or (len(line) > 1 and line[1] in UNSTAGED_CODES):
            has_unstaged = True

    if has_staged and has_unstaged:
        return GitStatusKind.BOTH
    if has_unstaged:
        return GitStatusKind.UNSTAGED_ONLY
    if has_staged:
        return GitStatusKind.STAGED_ONLY
    return GitStatusKind.CLEAN


def get_git_state(working_directory: str | None, timeout: float = DEFAULT_GIT_TIMEOUT) -> GitState:
    """Collect branch, upstream, ahead/behind and work tree status.

    Each query fails independently: a failed query leaves its field unset and
    the rest of the summary is still returned. Only a failed repository check
    marks the directory as not a repository.

    Args:
        working_directory: Directory to inspect, may be empty
        timeout: Seconds allowed per git command

    Returns:
        The git state, never raising
    """
    if not working_directory:
        return GitState()

    if run_git(["rev-parse", "--git-dir"], working_directory, timeout) is None:
        return GitState()

    branch_output = run_git(["branch", "--show-current"], working_directory, timeout)
    branch = branch_output.strip() if branch_output else None

    upstream_output = run_git(
        ["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}"],
        working_directory,
        timeout,
    )
    upstream = upstream_output.strip() if upstream_output else None

    ahead = behind = None
    if upstream:
        counts = run_git(["rev-list", "--left-right", "--count", f"HEAD...{upstream}"], working_directory, timeout)
        if counts is not None:
            ahead, behind = parse_ahead_behind(counts)

    porcelain = run_git(["status", "--porcelain"], working_directory, timeout)
    status_kind = classify_porcelain(porcelain.splitlines()) if porcelain is not None else None

    return GitState(
        is_repository=True,
        branch=branch or None,
        upstream=upstream or None,
        ahead_count=ahead,
        behind_count=behind,
        status_kind=status_kind,
    )
