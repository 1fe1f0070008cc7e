"""``cave use`` / ``cave pin``: choose the code_aster version.

``use`` records the choice for the user (``~/.cave``); ``pin`` records it
for the current directory (``./.cave``), which takes precedence.
"""

from __future__ import annotations

import typer

from cave.cli.commands import _shared
from cave.core.errors import CaveError
from cave.models.records import Scope

_VERSION_HELP = "code_aster version: stable, testing or MAJOR.MINOR.PATCH (e.g. 17.3.1)."


def _set(version: str, scope: Scope) -> None:
    try:
        record = _shared.build_manager().set_version(version, scope)
    except CaveError as exc:
        _shared.fail(exc)

    where = "this directory" if scope is Scope.PROJECT else "your user"
    if record.alias is not None:
        _shared.console.print(
            f"[bold green]{record.alias.value}[/bold green] ({record.version}) "
            f"set for {where}."
        )
    else:
        _shared.console.print(f"[bold green]{record.version}[/bold green] set for {where}.")


def use_cmd(
    version: str = typer.Argument(..., help=_VERSION_HELP),
) -> None:
    """Define the default version for your user."""
    _set(version, Scope.USER)


def pin_cmd(
    version: str = typer.Argument(..., help=_VERSION_HELP),
) -> None:
    """Define the version for the current directory."""
    _set(version, Scope.PROJECT)
