"""Registry catalog entries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

UNKNOWN = "unknown"


class TagMetadata(BaseModel):
    """One tag of the upstream image repository.

    ``content_digest`` and ``last_pushed`` come from the first image listed
    under the tag; either is ``"unknown"`` when the registry omits it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    content_digest: str = UNKNOWN
    last_pushed: str = UNKNOWN

    @property
    def is_concrete(self) -> bool:
        """Whether the tag name looks like a release (starts with a digit)."""
        return self.name[:1].isdigit()

    @property
    def short_date(self) -> str:
        """Push date trimmed to the hour, e.g. ``"2024-05-02 14h"``."""
        if len(self.last_pushed) < 13 or self.last_pushed == UNKNOWN:
            return UNKNOWN
        return self.last_pushed[:13].replace("T", " ") + "h"


class RemoteVersion(BaseModel):
    """A catalog release annotated for display by ``cave available``."""

    model_config = ConfigDict(frozen=True)

    tag: str
    date: str
    alias: str = ""
    installed: bool = False
