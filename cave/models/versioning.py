"""Version identifiers: concrete code_aster releases and floating aliases."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Alias(str, Enum):
    """Floating identifiers whose concrete target moves over time."""

    STABLE = "stable"
    TESTING = "testing"


class ConcreteVersion(BaseModel):
    """A fully specified ``MAJOR.MINOR.PATCH`` release.

    Ordered by ``(major, minor, patch)``. ``str()`` yields the normalized
    tag name used on Docker Hub (``"17.03.1"`` becomes ``"17.3.1"``).
    """

    model_config = ConfigDict(frozen=True)

    major: int = Field(ge=0, le=99)
    minor: int = Field(ge=0, le=99)
    patch: int = Field(ge=0, le=99)

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def tag(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.tag

    def __lt__(self, other: ConcreteVersion) -> bool:
        if not isinstance(other, ConcreteVersion):
            return NotImplemented
        return self.key < other.key

    def __le__(self, other: ConcreteVersion) -> bool:
        if not isinstance(other, ConcreteVersion):
            return NotImplemented
        return self.key <= other.key

    def __gt__(self, other: ConcreteVersion) -> bool:
        if not isinstance(other, ConcreteVersion):
            return NotImplemented
        return self.key > other.key

    def __ge__(self, other: ConcreteVersion) -> bool:
        if not isinstance(other, ConcreteVersion):
            return NotImplemented
        return self.key >= other.key


class AliasVersion(BaseModel):
    """A request for whatever release an alias currently designates."""

    model_config = ConfigDict(frozen=True)

    alias: Alias

    def __str__(self) -> str:
        return self.alias.value


VersionIdentifier = ConcreteVersion | AliasVersion
