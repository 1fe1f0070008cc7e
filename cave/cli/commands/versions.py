"""``cave list`` and ``cave available``: show installed and published versions."""

from __future__ import annotations

import typer
from rich.table import Table

from cave.cli.commands import _shared
from cave.core.errors import CaveError

_PER_LINE = 6
_COLUMN_WIDTH = 12


def format_columns(versions: list[str]) -> list[str]:
    """Lay versions out six per line in fixed-width columns."""
    lines = []
    for i in range(0, len(versions), _PER_LINE):
        chunk = versions[i:i + _PER_LINE]
        lines.append("  " + "".join(f"{v:<{_COLUMN_WIDTH}}" for v in chunk).rstrip())
    return lines


def list_cmd(
    prefix: str = typer.Argument("", help='Only show versions starting with this, e.g. "16".'),
) -> None:
    """List downloaded code_aster images."""
    try:
        versions = _shared.build_manager().local_versions(prefix)
    except CaveError as exc:
        _shared.fail(exc)

    for line in format_columns(versions):
        _shared.console.print(line, highlight=False)


def available_cmd(
    prefix: str = typer.Argument("", help='Only show versions starting with this, e.g. "16".'),
) -> None:
    """List code_aster images available on Docker Hub."""
    try:
        versions = _shared.build_manager().remote_versions(prefix)
    except CaveError as exc:
        _shared.fail(exc)

    if not versions:
        _shared.console.print("No code_aster versions found on simvia dockerhub")
        return

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Tag", min_width=12)
    table.add_column("Date", min_width=15)
    table.add_column("Alias")

    for v in versions:
        style = "bold blue" if v.installed else None
        table.add_row(v.tag, v.date, v.alias, style=style)

    _shared.console.print(table)
    _shared.console.print("[dim]Installed versions are highlighted.[/dim]")
