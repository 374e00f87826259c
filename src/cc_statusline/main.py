"""Command line entry points for the status line renderer and its installer."""

from __future__ import annotations

import logging
import sys
from typing import Annotated

import typer
from rich.console import Console

from . import __application_title__, __version__
from .config import load_config
from .enums import InstallScope
from .input_normalizer import StatusInputError
from .installer import display_location, install, prompt_scope, prompt_width, uninstall
from .progress_bar import MAX_BAR_WIDTH, MIN_BAR_WIDTH, normalize_bar_width
from .statusline_manager import StatusLineManager
from .xdg_dirs import ensure_cache_dir, get_log_file_path

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="cc-statusline",
    help="Render the Claude Code status line from the JSON payload on stdin.",
    add_completion=False,
)

install_app = typer.Typer(
    name="cc-statusline-install",
    help=f"Install or remove {__application_title__} in Claude Code settings.",
    add_completion=False,
)

console = Console()

WIDTH_FLAG = "--width"


def configure_logging(debug: bool) -> None:
    """Configure logging for one invocation.

    Debug logs go to a file in the cache directory so stdout stays reserved
    for the dashboard.
    """
    if debug:
        try:
            ensure_cache_dir()
            handler = logging.FileHandler(get_log_file_path(), encoding="utf-8")
        except OSError:
            logging.basicConfig(level=logging.ERROR, format="%(message)s")
            return
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(message)s", handlers=[handler])
    else:
        logging.basicConfig(level=logging.ERROR, format="%(message)s")


def width_from_args(args: list[str]) -> str | None:
    """Pick the raw value of the first ``--width`` from the command line.

    Args:
        args: Arguments left over after option parsing

    Returns:
        The value as given, or None when the flag is absent or has no value
    """
    for index, arg in enumerate(args):
        if arg.startswith(f"{WIDTH_FLAG}="):
            return arg.split("=", 1)[1]
        if arg == WIDTH_FLAG:
            return args[index + 1] if index + 1 < len(args) else None
    return None


def is_interactive() -> bool:
    """Whether the installer can prompt on stdin."""
    return sys.stdin.isatty()


@app.command(context_settings={"ignore_unknown_options": True, "allow_extra_args": True})
def statusline(ctx: typer.Context) -> None:
    """Read the status payload from stdin and print the two-line dashboard.

    Options: --width N  progress bar cells (10-100, default 50). Unknown
    arguments are ignored and a missing or invalid width uses the configured one.
    """
    width = width_from_args(ctx.args)
    config = load_config()
    configure_logging(config.debug)

    raw_input = sys.stdin.read()
    manager = StatusLineManager(config)
    try:
        output = manager.render(raw_input, normalize_bar_width(width, default=config.bar_width))
    except StatusInputError as e:
        logger.debug("Rejected status payload: %s", e)
        raise typer.Exit(code=1) from e

    sys.stdout.write(output)
    sys.stdout.flush()


@install_app.command()
def install_command(
    global_: Annotated[bool, typer.Option("--global", "-g", help="Install globally (~/.claude)")] = False,
    local: Annotated[bool, typer.Option("--local", "-l", help="Install for this project (./.claude)")] = False,
    remove: Annotated[bool, typer.Option("--uninstall", "-u", help="Remove the status line configuration")] = False,
    width: Annotated[
        int | None,
        typer.Option("--width", "-w", help=f"Progress bar cells ({MIN_BAR_WIDTH}-{MAX_BAR_WIDTH})"),
    ] = None,
) -> None:
    """Install or uninstall the status line."""
    configure_logging(False)
    console.print(f"\n   [bold]{__application_title__}[/bold] [dim]v{__version__}[/dim]\n")

    if global_ and local:
        console.print("   [red]✗[/red] Cannot specify both --global and --local\n")
        raise typer.Exit(code=1)

    if remove:
        if not (global_ or local):
            console.print("   [red]✗[/red] --uninstall requires --global or --local\n")
            raise typer.Exit(code=1)
        _run_uninstall(InstallScope.GLOBAL if global_ else InstallScope.LOCAL)
        return

    if global_ or local:
        scope = InstallScope.GLOBAL if global_ else InstallScope.LOCAL
        bar_width = normalize_bar_width(width)
    elif not is_interactive():
        console.print("   [dim]Non-interactive mode, defaulting to global install[/dim]\n")
        scope = InstallScope.GLOBAL
        bar_width = normalize_bar_width(width)
    else:
        scope = prompt_scope(console)
        bar_width = normalize_bar_width(width) if width is not None else prompt_width(console)

    _run_install(scope, bar_width)


def _run_install(scope: InstallScope, bar_width: int) -> None:
    result = install(scope, bar_width)
    location = display_location(result.target_dir, scope)
    console.print(f"   Installing to [cyan]{location}[/cyan]\n")
    if result.created_dir:
        console.print(f"   [dim]Created {location}[/dim]")
    console.print("   [green]✓[/green] Configured settings.json")
    console.print(f"   [dim]{result.command}[/dim]\n")
    console.print("   [green]✓[/green] [bold]Installation complete![/bold]")
    console.print("   [cyan]Restart Claude Code[/cyan] to see your new status line.\n")


def _run_uninstall(scope: InstallScope) -> None:
    result = uninstall(scope)
    location = display_location(result.target_dir, scope)
    console.print(f"   Uninstalling from [cyan]{location}[/cyan]\n")
    if not result.directory_exists:
        console.print(f"   [yellow]⚠[/yellow] Directory does not exist: {location}")
        console.print("   Nothing to uninstall.\n")
        return
    if result.removed:
        console.print("   [green]✓[/green] Removed status line from settings.json")
    else:
        console.print("   [yellow]⚠[/yellow] No status line configuration found.")
    console.print("\n   [green]Done![/green] Restart Claude Code to see the change.\n")


def run_statusline() -> None:
    """Console script entry point for the renderer."""
    app()


def run_installer() -> None:
    """Console script entry point for the installer."""
    install_app()
