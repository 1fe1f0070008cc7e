"""Version identifier parser.

Classifies a raw request as an alias or a concrete release. Pure: no
network or filesystem access, so malformed input is rejected before any
side effect happens.
"""

from __future__ import annotations

import re

from cave.core.errors import InvalidFormatError
from cave.models.versioning import (
    Alias,
    AliasVersion,
    ConcreteVersion,
    VersionIdentifier,
)

_CONCRETE_RE = re.compile(r"(\d{1,2})\.(\d{1,2})\.(\d{1,2})", re.ASCII)

_ALIASES: dict[str, Alias] = {a.value: a for a in Alias}


def parse_concrete(raw: str) -> ConcreteVersion:
    """Parse ``MAJOR.MINOR.PATCH``; raise InvalidFormatError otherwise."""
    match = _CONCRETE_RE.fullmatch(raw)
    if match is None:
        raise InvalidFormatError(raw)
    major, minor, patch = (int(g) for g in match.groups())
    return ConcreteVersion(major=major, minor=minor, patch=patch)


def parse(raw: str) -> VersionIdentifier:
    """Parse a user request into an alias or a concrete version."""
    alias = _ALIASES.get(raw)
    if alias is not None:
        return AliasVersion(alias=alias)
    return parse_concrete(raw)


def is_concrete_tag(tag: str) -> bool:
    """Whether a registry/local tag is a well-formed concrete version."""
    return _CONCRETE_RE.fullmatch(tag) is not None


def version_sort_key(tag: str) -> tuple[int, ...]:
    """Numeric sort key for dotted tags; non-numeric parts are skipped."""
    return tuple(int(part) for part in tag.split(".") if part.isdigit())
