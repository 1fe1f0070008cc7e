"""Interactive confirmation.

Both places that ask the user something (downloading a missing release,
installing an updated alias target) go through a :class:`Confirmer`, so
tests can answer deterministically.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import typer

logger = logging.getLogger(__name__)


@runtime_checkable
class Confirmer(Protocol):
    def confirm(self, message: str) -> bool:
        """Ask a yes/no question; True only for an affirmative answer."""
        ...


def is_affirmative(answer: str) -> bool:
    """Only ``y`` (any case, surrounding whitespace ignored) means yes."""
    return answer.strip().lower() == "y"


class TerminalConfirmer:
    """Reads one line from stdin. Blocks until the user answers."""

    def confirm(self, message: str) -> bool:
        try:
            answer = typer.prompt(f"{message} (y/n)", default="", show_default=False)
        except typer.Abort:
            # stdin closed before an answer was read
            typer.echo()
            answer = ""
        accepted = is_affirmative(answer)
        logger.debug("Prompt %r answered %r", message, answer)
        return accepted
