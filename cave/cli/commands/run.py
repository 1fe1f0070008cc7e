"""``cave run -- [ARGS]``: run code_aster with the current version.

If the last argument ends in ``.export`` it is passed to ``run_aster`` as
the export file and must exist in the current directory.
"""

from __future__ import annotations

from typing import List, Optional

import typer

from cave.cli.commands import _shared
from cave.core.errors import CaveError


def run_cmd(
    args: Optional[List[str]] = typer.Argument(
        None,
        help="Arguments for run_aster, optionally followed by an export file.",
        metavar="ARGS",
    ),
) -> None:
    """Run code_aster in a container using the version from .cave."""
    try:
        _shared.build_manager().run(list(args or []))
    except CaveError as exc:
        _shared.fail(exc)
