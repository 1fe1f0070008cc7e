"""Alias resolution by content digest.

Docker Hub has no notion of "stable points at 17.3.1"; the alias tag and
the release tag simply share an image digest. Resolution therefore reads
the full catalog, notes each alias's digest, then picks the first
release-looking tag carrying the same digest.

When several release tags share the digest, the first one in catalog order
wins. Catalog order is whatever the registry returns; nothing guarantees a
unique match, so ties are logged.
"""

from __future__ import annotations

import logging

from cave.bridge.registry import TagCatalog
from cave.core.errors import AliasUnresolvedError, InvalidFormatError
from cave.core.version_parser import parse_concrete
from cave.models.catalog import TagMetadata
from cave.models.versioning import Alias, ConcreteVersion

logger = logging.getLogger(__name__)


class AliasResolver:
    """Maps ``stable`` / ``testing`` to the release they currently designate.

    The catalog can be passed in to share one fetch between resolution and
    other lookups (``cave available`` does this).
    """

    def __init__(self, catalog: TagCatalog) -> None:
        self._catalog = catalog

    def resolve_all(
        self, catalog: list[TagMetadata] | None = None
    ) -> dict[Alias, ConcreteVersion]:
        """Resolve every alias in one catalog pass.

        Aliases that are missing from the catalog, or whose digest matches no
        release tag, are left out of the result.
        """
        if catalog is None:
            catalog = self._catalog.fetch()

        digests: dict[Alias, str] = {}
        for entry in catalog:
            for alias in Alias:
                if entry.name == alias.value:
                    digests[alias] = entry.content_digest

        resolved: dict[Alias, ConcreteVersion] = {}
        for entry in catalog:
            if not entry.is_concrete:
                continue
            for alias, digest in digests.items():
                if entry.content_digest != digest:
                    continue
                if alias in resolved:
                    logger.debug(
                        "'%s' digest also matches %s; keeping %s",
                        alias.value, entry.name, resolved[alias],
                    )
                    continue
                try:
                    resolved[alias] = parse_concrete(entry.name)
                except InvalidFormatError:
                    logger.debug("Skipping non-release tag %s", entry.name)
        return resolved

    def resolve(
        self, alias: Alias, catalog: list[TagMetadata] | None = None
    ) -> ConcreteVersion:
        """Return the release *alias* points at, or raise AliasUnresolvedError."""
        version = self.resolve_all(catalog).get(alias)
        if version is None:
            raise AliasUnresolvedError(alias.value)
        logger.debug("Resolved %s -> %s", alias.value, version)
        return version
