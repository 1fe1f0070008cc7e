"""User configuration persisted in ``~/.caveconfig.json``."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field


class UserConfig(BaseModel):
    """Global toggles shared by every invocation of ``cave``.

    Read once per invocation and passed explicitly to whatever needs it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    auto_update: bool = False  # follow stable/testing moves on `cave run`
    auto_release_check: bool = True  # look for newer cave releases
    version_tracking: bool = True  # send anonymous execution reports
    user_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
