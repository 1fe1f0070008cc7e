"""cave data models: all Pydantic v2, all frozen (immutable)."""

from cave.models.catalog import RemoteVersion, TagMetadata
from cave.models.records import ResolutionRecord, Scope
from cave.models.telemetry import ExecutionData
from cave.models.user_config import UserConfig
from cave.models.versioning import (
    Alias,
    AliasVersion,
    ConcreteVersion,
    VersionIdentifier,
)

__all__ = [
    # versioning
    "Alias",
    "AliasVersion",
    "ConcreteVersion",
    "VersionIdentifier",
    # records
    "ResolutionRecord",
    "Scope",
    # catalog
    "RemoteVersion",
    "TagMetadata",
    # config
    "UserConfig",
    # telemetry
    "ExecutionData",
]
