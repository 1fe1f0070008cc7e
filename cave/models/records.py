"""Persisted resolution record and the scopes it can live in."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from cave.models.versioning import Alias, ConcreteVersion


class Scope(str, Enum):
    """Where a resolution record is stored.

    PROJECT lives in the working directory and wins over USER on read.
    """

    PROJECT = "project"
    USER = "user"


class ResolutionRecord(BaseModel):
    """The version chosen for a scope.

    A record is either *bare* (``alias is None``, encoded ``"22.0.1"``) or
    *pinned* to an alias (encoded ``"stable:22.0.1"``). For a pinned record,
    ``version`` is what the alias pointed at when the record was written.
    """

    model_config = ConfigDict(frozen=True)

    version: ConcreteVersion
    alias: Alias | None = None

    @classmethod
    def bare(cls, version: ConcreteVersion) -> ResolutionRecord:
        return cls(version=version)

    @classmethod
    def pinned(cls, alias: Alias, version: ConcreteVersion) -> ResolutionRecord:
        return cls(version=version, alias=alias)

    @property
    def is_pinned(self) -> bool:
        return self.alias is not None

    def encode(self) -> str:
        """Return the single-line on-disk form of this record."""
        if self.alias is None:
            return self.version.tag
        return f"{self.alias.value}:{self.version.tag}"
