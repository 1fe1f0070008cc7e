"""Acquisition flow: make sure a concrete release is installed.

1. Already present locally: done, no network.
2. Not in the registry either: VersionNotAvailableError, no prompt.
3. In the registry only: ask, then pull. Declining raises UserAbortedError
   and changes nothing.
"""

from __future__ import annotations

import logging

from cave.bridge.docker import LocalPresenceOracle
from cave.bridge.registry import TagCatalog
from cave.core.connectivity import Connectivity, require_online
from cave.core.errors import UserAbortedError, VersionNotAvailableError
from cave.core.prompts import Confirmer
from cave.models.catalog import TagMetadata
from cave.models.versioning import ConcreteVersion

logger = logging.getLogger(__name__)


class AcquisitionFlow:
    def __init__(
        self,
        runtime: LocalPresenceOracle,
        catalog: TagCatalog,
        confirmer: Confirmer,
        connectivity: Connectivity,
        *,
        catalog_url: str = "",
    ) -> None:
        self._runtime = runtime
        self._catalog = catalog
        self._confirmer = confirmer
        self._connectivity = connectivity
        self._catalog_url = catalog_url

    def is_installed(self, version: ConcreteVersion) -> bool:
        return version.tag in self._runtime.local_versions()

    def exists_remotely(
        self, version: ConcreteVersion, catalog: list[TagMetadata] | None = None
    ) -> bool:
        """Whether the registry publishes *version*.

        A *catalog* already fetched by the caller is reused as is; otherwise
        the network is probed and the catalog read.
        """
        if catalog is not None:
            return any(entry.name == version.tag for entry in catalog)
        require_online(self._connectivity)
        return self._catalog.contains(version.tag)

    def ensure_available(
        self, version: ConcreteVersion, catalog: list[TagMetadata] | None = None
    ) -> ConcreteVersion:
        """Return *version* once it is installed locally.

        Raises
        ------
        VersionNotAvailableError
            Neither installed nor published.
        UserAbortedError
            The user declined the download.
        FetchError
            ``docker pull`` failed.
        """
        if self.is_installed(version):
            logger.debug("%s already installed", version)
            return version

        if not self.exists_remotely(version, catalog):
            raise VersionNotAvailableError(version.tag, self._catalog_url)

        if not self._confirmer.confirm(f"Version '{version}' not installed. Download it?"):
            raise UserAbortedError()

        self._runtime.pull(version.tag)
        return version
