"""Install or remove the status line in Claude Code's settings.json.

One installer serves every variant: what gets written is described by an
``InstallTarget`` and where by an ``InstallScope``.
"""

from __future__ import annotations

import json
import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.prompt import Prompt

from .enums import InstallScope
from .progress_bar import DEFAULT_BAR_WIDTH, MAX_BAR_WIDTH, MIN_BAR_WIDTH
from .xdg_dirs import get_claude_dir, get_local_claude_dir

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.json"
WIDTH_PRESETS: dict[str, int] = {"1": 25, "2": 38, "3": 50}
CUSTOM_WIDTH_CHOICE = "4"


@dataclass(frozen=True)
class InstallTarget:
    """Declarative description of the settings entry managed by the installer."""

    settings_key: str = "statusLine"
    legacy_keys: tuple[str, ...] = ("status_line",)
    command_markers: tuple[str, ...] = ("cc-statusline", "cc_statusline")
    binary_name: str = "cc-statusline"
    module_name: str = "cc_statusline"

    def renderer_command(self) -> str:
        """Command that runs the renderer, preferring the installed console script."""
        binary = shutil.which(self.binary_name)
        if binary:
            return binary
        return f"{sys.executable} -m {self.module_name}"

    def owns(self, entry: Any) -> bool:
        """Whether a settings entry was written by this installer."""
        if not isinstance(entry, dict):
            return False
        command = entry.get("command")
        return isinstance(command, str) and any(marker in command for marker in self.command_markers)


DEFAULT_TARGET = InstallTarget()


@dataclass(frozen=True)
class InstallResult:
    target_dir: Path
    settings_path: Path
    command: str
    created_dir: bool


@dataclass(frozen=True)
class UninstallResult:
    target_dir: Path
    directory_exists: bool
    removed: bool


def resolve_target_dir(scope: InstallScope, project_dir: Path | None = None) -> Path:
    if scope == InstallScope.GLOBAL:
        return get_claude_dir()
    return get_local_claude_dir(project_dir)


def display_location(path: Path, scope: InstallScope) -> str:
    """Shorten a path for display: ``~`` for global installs, ``.`` for local ones."""
    base, label = (Path.home(), "~") if scope == InstallScope.GLOBAL else (Path.cwd(), ".")
    try:
        relative = path.relative_to(base)
    except ValueError:
        return str(path)
    return label if str(relative) == "." else f"{label}/{relative.as_posix()}"


def read_settings(settings_path: Path) -> dict[str, Any]:
    """Read settings.json, starting over from an empty object if it is unusable."""
    try:
        with open(settings_path, encoding="utf-8") as f:
            settings = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Could not parse %s, starting from empty settings: %s", settings_path, e)
        return {}
    return settings if isinstance(settings, dict) else {}


def write_settings(settings_path: Path, settings: dict[str, Any]) -> None:
    settings_path.write_text(json.dumps(settings, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def install(
    scope: InstallScope,
    bar_width: int = DEFAULT_BAR_WIDTH,
    target: InstallTarget = DEFAULT_TARGET,
    project_dir: Path | None = None,
) -> InstallResult:
    """Point Claude Code's status line at the renderer.

    Args:
        scope: Global or project-local install
        bar_width: Width passed to the renderer with ``--width``
        target: Settings entry description
        project_dir: Project root for local installs (defaults to cwd)

    Returns:
        Where and what was written
    """
    target_dir = resolve_target_dir(scope, project_dir)
    created_dir = not target_dir.exists()
    target_dir.mkdir(parents=True, exist_ok=True)

    settings_path = target_dir / SETTINGS_FILE_NAME
    settings = read_settings(settings_path)
    for legacy_key in target.legacy_keys:
        settings.pop(legacy_key, None)

    command = f"{target.renderer_command()} --width {bar_width}"
    settings[target.settings_key] = {"type": "command", "command": command}
    write_settings(settings_path, settings)
    logger.debug("Installed status line in %s", settings_path)

    return InstallResult(
        target_dir=target_dir,
        settings_path=settings_path,
        command=command,
        created_dir=created_dir,
    )


def uninstall(
    scope: InstallScope,
    target: InstallTarget = DEFAULT_TARGET,
    project_dir: Path | None = None,
) -> UninstallResult:
    """Remove the status line entry if this installer wrote it.

    Entries pointing at some other command are left untouched.
    """
    target_dir = resolve_target_dir(scope, project_dir)
    if not target_dir.exists():
        return UninstallResult(target_dir=target_dir, directory_exists=False, removed=False)

    settings_path = target_dir / SETTINGS_FILE_NAME
    if not settings_path.exists():
        return UninstallResult(target_dir=target_dir, directory_exists=True, removed=False)

    settings = read_settings(settings_path)
    if not target.owns(settings.get(target.settings_key)):
        return UninstallResult(target_dir=target_dir, directory_exists=True, removed=False)

    del settings[target.settings_key]
    write_settings(settings_path, settings)
    return UninstallResult(target_dir=target_dir, directory_exists=True, removed=True)


def parse_width_choice(choice: str, custom_value: str | None = None) -> int:
    """Map a width menu answer to a bar width.

    Args:
        choice: Menu answer, ``1``-``3`` for presets or ``4`` for custom
        custom_value: Raw custom width when ``choice`` is ``4``

    Returns:
        Chosen width, the default when the answer is invalid
    """
    choice = choice.strip() or "3"
    if choice == CUSTOM_WIDTH_CHOICE:
        try:
            width = int((custom_value or "").strip())
        except ValueError:
            return DEFAULT_BAR_WIDTH
        return width if MIN_BAR_WIDTH <= width <= MAX_BAR_WIDTH else DEFAULT_BAR_WIDTH
    return WIDTH_PRESETS.get(choice, DEFAULT_BAR_WIDTH)


def prompt_scope(console: Console) -> InstallScope:
    """Ask where to install."""
    global_label = display_location(get_claude_dir(), InstallScope.GLOBAL)
    console.print("\n   [yellow]Where would you like to install?[/yellow]\n")
    console.print(f"   [cyan]1[/cyan]) [bold]Global[/bold] [dim]({global_label})[/dim]")
    console.print("      Available in all your projects\n")
    console.print("   [cyan]2[/cyan]) [bold]Local[/bold]  [dim](./.claude)[/dim]")
    console.print("      This project only\n")
    answer = Prompt.ask("   Choice", default="1", console=console)
    return InstallScope.LOCAL if answer.strip() == "2" else InstallScope.GLOBAL


def prompt_width(console: Console) -> int:
    """Ask for the progress bar width."""
    console.print("\n   [yellow]Progress bar width?[/yellow]\n")
    console.print("   [cyan]1[/cyan]) [bold]Compact[/bold]  [dim]25 bars[/dim]")
    console.print("   [cyan]2[/cyan]) [bold]Medium[/bold]   [dim]38 bars[/dim]")
    console.print("   [cyan]3[/cyan]) [bold]Full[/bold]     [dim]50 bars[/dim]")
    console.print("   [cyan]4[/cyan]) [bold]Custom[/bold]   [dim]Enter your own number[/dim]\n")
    choice = Prompt.ask("   Choice", default="3", console=console)
    if choice.strip() != CUSTOM_WIDTH_CHOICE:
        return parse_width_choice(choice)

    custom_value = Prompt.ask(f"   Number of bars [dim]({MIN_BAR_WIDTH}-{MAX_BAR_WIDTH})[/dim]", console=console)
    width = parse_width_choice(choice, custom_value)
    if custom_value.strip() != str(width):
        console.print(f"   [yellow]⚠[/yellow] Invalid number, using default ({DEFAULT_BAR_WIDTH})\n")
    return width
