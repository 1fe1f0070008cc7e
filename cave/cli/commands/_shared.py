"""Helpers shared by the command modules."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console

from cave.config import CaveSettings
from cave.core.errors import CaveError
from cave.core.version_manager import VersionManager

console = Console()
err_console = Console(stderr=True)


def build_manager() -> VersionManager:
    """Create the VersionManager used by a command (patched in tests)."""
    return VersionManager(CaveSettings())


def fail(exc: CaveError) -> NoReturn:
    """Print *exc* on stderr and exit with status 1."""
    err_console.print(str(exc), style="bold red", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=1)
