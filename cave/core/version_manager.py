"""Version manager: the central coordinator for cave commands.

Wires the catalog, alias resolver, acquisition flow, resolution store,
reconciler, user configuration and telemetry together, and exposes one
method per user-facing operation. Every collaborator can be injected so
the whole flow runs without Docker or network in tests.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cave.bridge.docker import DockerRuntime, ImageRuntime
from cave.bridge.registry import DockerHubClient, MetadataClient, TagCatalog
from cave.bridge.telemetry import TelemetryReporter, local_timezone_offset
from cave.config import CaveSettings
from cave.core.acquisition import AcquisitionFlow
from cave.core.alias_resolver import AliasResolver
from cave.core.config_store import ConfigStore
from cave.core.connectivity import Connectivity, TcpProbe, require_online
from cave.core.errors import (
    CaveError,
    ExecutionError,
    ExportFileNotFoundError,
    HomeNotFoundError,
    VersionNotInstalledError,
)
from cave.core.prompts import Confirmer, TerminalConfirmer
from cave.core.reconciler import Reconciler, Reconciliation
from cave.core.resolution_store import ResolutionStore
from cave.core.version_parser import parse, version_sort_key
from cave.models.catalog import RemoteVersion
from cave.models.records import ResolutionRecord, Scope
from cave.models.telemetry import ExecutionData
from cave.models.user_config import UserConfig
from cave.models.versioning import AliasVersion

logger = logging.getLogger(__name__)

_EXPORT_SUFFIX = ".export"
_INTERACTIVE_FLAG = "-i"


def split_export_arg(args: list[str], base_dir: Path) -> tuple[str | None, list[str]]:
    """Separate a trailing ``.export`` file from the other run arguments.

    The export file must exist (relative to *base_dir*).
    """
    if args and args[-1].endswith(_EXPORT_SUFFIX):
        export = args[-1]
        if not (base_dir / export).is_file():
            raise ExportFileNotFoundError(export)
        return export, list(args[:-1])
    return None, list(args)


class VersionManager:
    """Resolves, installs, records and runs code_aster versions.

    Parameters
    ----------
    settings:
        Runtime settings. Uses env-derived defaults if not provided.
    runtime:
        Docker adapter (local presence, pull, run).
    metadata_client:
        Registry page fetcher.
    confirmer:
        Answers the interactive prompts.
    connectivity:
        Pre-flight network probe.
    telemetry:
        Execution report sender.
    project_dir:
        Directory for project-scope files; defaults to the CWD.
    home_dir:
        Directory for user-scope files; defaults to ``$HOME``.
    """

    def __init__(
        self,
        settings: CaveSettings | None = None,
        *,
        runtime: ImageRuntime | None = None,
        metadata_client: MetadataClient | None = None,
        confirmer: Confirmer | None = None,
        connectivity: Connectivity | None = None,
        telemetry: TelemetryReporter | None = None,
        project_dir: Path | None = None,
        home_dir: Path | None = None,
    ) -> None:
        self.settings = settings or CaveSettings()
        s = self.settings

        if home_dir is None:
            try:
                home_dir = s.home_dir()
            except RuntimeError as exc:
                raise HomeNotFoundError() from exc
        self.project_dir = Path(project_dir) if project_dir is not None else Path.cwd()
        self.home_dir = Path(home_dir)

        self.runtime: ImageRuntime = runtime or DockerRuntime(s.image)
        self.catalog = TagCatalog(
            metadata_client or DockerHubClient(timeout=s.request_timeout),
            s.registry_tags_url,
        )
        self.resolver = AliasResolver(self.catalog)
        self.confirmer = confirmer or TerminalConfirmer()
        self.connectivity = connectivity or TcpProbe(s.probe_host, s.probe_port, s.probe_timeout)
        self.store = ResolutionStore(self.project_dir, self.home_dir, s.store_filename)
        self.config_store = ConfigStore(self.home_dir / s.config_filename)
        self.acquisition = AcquisitionFlow(
            self.runtime,
            self.catalog,
            self.confirmer,
            self.connectivity,
            catalog_url=s.catalog_url,
        )
        self.reconciler = Reconciler(
            self.resolver, self.runtime, self.store, self.confirmer, self.connectivity
        )
        self.telemetry = telemetry or TelemetryReporter(
            s.telemetry_endpoint,
            local_path=(self.home_dir / s.telemetry_log_path) if s.local_telemetry else None,
            timeout=s.telemetry_timeout,
        )

    # ------------------------------------------------------------------
    # use / pin
    # ------------------------------------------------------------------

    def set_version(self, raw: str, scope: Scope) -> ResolutionRecord:
        """Resolve *raw*, make sure it is installed, and record it at *scope*.

        Nothing is written unless resolution and acquisition both succeed.
        """
        identifier = parse(raw)
        catalog = None
        if isinstance(identifier, AliasVersion):
            require_online(self.connectivity)
            catalog = self.catalog.fetch()
            version = self.resolver.resolve(identifier.alias, catalog)
            record = ResolutionRecord.pinned(identifier.alias, version)
        else:
            version = identifier
            record = ResolutionRecord.bare(version)

        self.acquisition.ensure_available(version, catalog)
        self.store.write(scope, record)
        return record

    # ------------------------------------------------------------------
    # run
    # ------------------------------------------------------------------

    def read_config(self) -> UserConfig:
        return self.config_store.read()

    def current_version(self, config: UserConfig | None = None) -> Reconciliation:
        """Read the effective record and reconcile it against the registry."""
        config = config or self.read_config()
        scope, record = self.store.read()
        return self.reconciler.reconcile(scope, record, config)

    def run(self, args: list[str], config: UserConfig | None = None) -> str:
        """Run code_aster with the current version; return that version.

        Raises ExecutionError when the container exits unsuccessfully.
        """
        config = config or self.read_config()
        version = self.current_version(config).version.tag
        if version not in self.runtime.local_versions():
            raise VersionNotInstalledError(version)

        export, rest = split_export_arg(args, self.project_dir)
        success, elapsed = self.runtime.run(version, export, rest, workdir=self.project_dir)

        if _INTERACTIVE_FLAG not in args and config.version_tracking:
            self._report(config, version, success, elapsed)

        if not success:
            raise ExecutionError(version)
        return version

    def _report(self, config: UserConfig, version: str, success: bool, elapsed: float) -> None:
        try:
            image = self.runtime.image_id(version)
        except CaveError as exc:
            logger.debug("No image id for telemetry: %s", exc)
            image = "unknown"
        self.telemetry.send(
            ExecutionData(
                user_id=config.user_id,
                time_execution=int(elapsed * 1000),
                valid_result=success,
                timezone=local_timezone_offset(),
                version=version,
                id_docker=image,
            )
        )

    # ------------------------------------------------------------------
    # list / available
    # ------------------------------------------------------------------

    def local_versions(self, prefix: str = "") -> list[str]:
        """Installed release tags starting with *prefix*, oldest first."""
        tags = [
            tag for tag in self.runtime.local_versions()
            if tag[:1].isdigit() and tag.startswith(prefix)
        ]
        return sorted(tags, key=version_sort_key)

    def remote_versions(self, prefix: str = "") -> list[RemoteVersion]:
        """Published release tags starting with *prefix*, oldest first."""
        require_online(self.connectivity)
        catalog = self.catalog.fetch()
        resolved = self.resolver.resolve_all(catalog)
        labels: dict[str, list[str]] = {}
        for alias, version in resolved.items():
            labels.setdefault(version.tag, []).append(alias.value)
        installed = self.runtime.local_versions()

        entries = [t for t in catalog if t.is_concrete and t.name.startswith(prefix)]
        entries.sort(key=lambda t: version_sort_key(t.name))
        return [
            RemoteVersion(
                tag=t.name,
                date=t.short_date,
                alias=", ".join(labels.get(t.name, [])),
                installed=t.name in installed,
            )
            for t in entries
        ]
