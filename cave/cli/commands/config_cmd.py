"""``cave config``: toggle options stored in ``~/.caveconfig.json``."""

from __future__ import annotations

import typer

from cave.cli.commands import _shared
from cave.core.errors import CaveError

config_app = typer.Typer(
    name="config",
    help="Configure cave.",
    no_args_is_help=True,
    add_completion=False,
)


def _set(field: str, value: bool, label: str) -> None:
    try:
        _shared.build_manager().config_store.update(**{field: value})
    except CaveError as exc:
        _shared.fail(exc)
    state = "enabled" if value else "disabled"
    _shared.console.print(f"{label} {state}.")


@config_app.command("enable-auto-update")
def enable_auto_update() -> None:
    """Follow stable/testing moves automatically on `cave run`."""
    _set("auto_update", True, "Auto update")


@config_app.command("disable-auto-update")
def disable_auto_update() -> None:
    """Keep the recorded stable/testing version (default)."""
    _set("auto_update", False, "Auto update")


@config_app.command("enable-update-check")
def enable_update_check() -> None:
    """Check for new cave releases (default)."""
    _set("auto_release_check", True, "Release check")


@config_app.command("disable-update-check")
def disable_update_check() -> None:
    """Stop checking for new cave releases."""
    _set("auto_release_check", False, "Release check")


@config_app.command("enable-usage-tracking")
def enable_usage_tracking() -> None:
    """Send anonymous execution reports (default)."""
    _set("version_tracking", True, "Usage tracking")


@config_app.command("disable-usage-tracking")
def disable_usage_tracking() -> None:
    """Stop sending execution reports."""
    _set("version_tracking", False, "Usage tracking")
