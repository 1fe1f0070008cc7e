"""Main Typer application: imports and registers all CLI commands.

Entry point: ``cave`` (configured via pyproject.toml console_scripts).

Commands: use, pin, run, list, available, config.
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from cave import __version__
from cave.cli.commands import _shared
from cave.cli.commands.config_cmd import config_app
from cave.cli.commands.run import run_cmd
from cave.cli.commands.use import pin_cmd, use_cmd
from cave.cli.commands.versions import available_cmd, list_cmd
from cave.config import CaveSettings
from cave.core.config_store import ConfigStore
from cave.core.errors import CaveError, HomeNotFoundError
from cave.core.release_check import newer_release

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="cave",
    help="cave: pick, install and run code_aster versions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="use", help="Define the default version.")(use_cmd)
app.command(name="pin", help="Define the directory version.")(pin_cmd)
app.command(
    name="run",
    help="Run code_aster.",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)(run_cmd)
app.command(name="list", help="List downloaded images.")(list_cmd)
app.command(name="available", help="List available images on Docker Hub.")(available_cmd)
app.add_typer(config_app, name="config")


def configure_logging(debug: bool) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=_shared.err_console, show_time=False, show_path=False)],
        force=True,
    )


def _check_release(settings: CaveSettings) -> None:
    try:
        newer = newer_release(__version__, settings.release_url, timeout=settings.request_timeout)
    except CaveError as exc:
        _shared.err_console.print(f"Failed to check for updates: {exc}", highlight=False)
        return
    if newer:
        _shared.err_console.print(
            f"[yellow]A new cave release is available: {newer} "
            f"(installed: {__version__}).[/yellow]"
        )


def _version_callback(value: bool) -> None:
    if value:
        _shared.console.print(f"cave {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
) -> None:
    """Set up logging, load the user configuration and check for a newer release."""
    settings = CaveSettings()
    configure_logging(debug or settings.debug)
    logger.debug("Debug mode enabled")

    try:
        home = settings.home_dir()
    except RuntimeError:
        _shared.fail(HomeNotFoundError())
    try:
        user_config = ConfigStore(home / settings.config_filename).read()
    except CaveError as exc:
        _shared.fail(exc)

    if user_config.auto_release_check:
        _check_release(settings)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
