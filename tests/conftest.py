"""Shared test fixtures for cave.

Every external collaborator (registry, docker, network probe, prompts,
telemetry) is replaced by an in-memory fake so no test touches the network
or needs Docker installed.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from cave.bridge.registry import TagCatalog
from cave.config import CaveSettings
from cave.core.acquisition import AcquisitionFlow
from cave.core.alias_resolver import AliasResolver
from cave.core.errors import FetchError, TransportError
from cave.core.reconciler import Reconciler
from cave.core.resolution_store import ResolutionStore
from cave.core.version_manager import VersionManager
from cave.models.catalog import TagMetadata
from cave.models.telemetry import ExecutionData

CATALOG_URL = "memory://tags?page=0"


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeMetadataClient:
    """Serves a fixed catalog in pages of ``page_size`` entries."""

    def __init__(
        self,
        entries: list[TagMetadata],
        *,
        page_size: int = 3,
        fail_on_page: int | None = None,
    ) -> None:
        self.entries = list(entries)
        self.page_size = page_size
        self.fail_on_page = fail_on_page
        self.requested: list[str] = []

    def fetch_page(self, url: str) -> tuple[list[TagMetadata], str | None]:
        self.requested.append(url)
        page = int(url.rsplit("=", 1)[1])
        if page == self.fail_on_page:
            raise TransportError("Failed to fetch Docker tags: 503")
        start = page * self.page_size
        chunk = self.entries[start:start + self.page_size]
        more = start + self.page_size < len(self.entries)
        return chunk, (f"memory://tags?page={page + 1}" if more else None)


class FakeRuntime:
    """Docker stand-in: a set of installed tags plus recorded pulls/runs."""

    def __init__(
        self,
        installed: set[str] | None = None,
        *,
        fail_pull: bool = False,
        run_succeeds: bool = True,
    ) -> None:
        self.installed = set(installed or ())
        self.fail_pull = fail_pull
        self.run_succeeds = run_succeeds
        self.pulled: list[str] = []
        self.runs: list[tuple[str, str | None, list[str]]] = []

    def local_versions(self) -> set[str]:
        return set(self.installed)

    def pull(self, version: str) -> None:
        if self.fail_pull:
            raise FetchError(version, "manifest unknown")
        self.pulled.append(version)
        self.installed.add(version)

    def run(self, version, export_file, args, *, workdir=None):
        self.runs.append((version, export_file, list(args)))
        return self.run_succeeds, 1.25

    def image_id(self, version: str) -> str:
        return f"img-{version}"


class FakeConfirmer:
    """Answers prompts from a queue; records every question asked."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answers.pop(0) if self.answers else False


class FakeConnectivity:
    def __init__(self, online: bool = True) -> None:
        self.online = online
        self.calls = 0

    def is_online(self) -> bool:
        self.calls += 1
        return self.online


class RecordingTelemetry:
    def __init__(self) -> None:
        self.sent: list[ExecutionData] = []

    def send(self, data: ExecutionData) -> bool:
        self.sent.append(data)
        return True


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def make_catalog() -> list[TagMetadata]:
    """A small Docker Hub listing.

    stable -> 16.7.2 (sha:aaa), testing -> 17.3.1 (sha:bbb). ``latest``
    shares testing's digest but is not a release tag.
    """
    return [
        TagMetadata(name="testing", content_digest="sha:bbb", last_pushed="2025-03-02T10:15:00Z"),
        TagMetadata(name="latest", content_digest="sha:bbb", last_pushed="2025-03-02T10:15:00Z"),
        TagMetadata(name="17.3.1", content_digest="sha:bbb", last_pushed="2025-03-02T10:14:00Z"),
        TagMetadata(name="stable", content_digest="sha:aaa", last_pushed="2025-01-20T08:00:00Z"),
        TagMetadata(name="17.2.0", content_digest="sha:ccc", last_pushed="2024-12-01T09:30:00Z"),
        TagMetadata(name="16.7.2", content_digest="sha:aaa", last_pushed="2025-01-20T07:59:00Z"),
        TagMetadata(name="16.7.1", content_digest="sha:ddd", last_pushed="2024-10-11T16:45:00Z"),
    ]


@pytest.fixture
def catalog_entries() -> list[TagMetadata]:
    return make_catalog()


@pytest.fixture
def metadata_client(catalog_entries: list[TagMetadata]) -> FakeMetadataClient:
    return FakeMetadataClient(catalog_entries)


@pytest.fixture
def tag_catalog(metadata_client: FakeMetadataClient) -> TagCatalog:
    return TagCatalog(metadata_client, CATALOG_URL)


@pytest.fixture
def resolver(tag_catalog: TagCatalog) -> AliasResolver:
    return AliasResolver(tag_catalog)


# ---------------------------------------------------------------------------
# Engine pieces
# ---------------------------------------------------------------------------


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def store(project_dir: Path, home_dir: Path) -> ResolutionStore:
    return ResolutionStore(project_dir, home_dir)


@pytest.fixture
def runtime() -> FakeRuntime:
    return FakeRuntime({"16.7.1"})


@pytest.fixture
def connectivity() -> FakeConnectivity:
    return FakeConnectivity()


@pytest.fixture
def make_acquisition(
    runtime: FakeRuntime,
    tag_catalog: TagCatalog,
    connectivity: FakeConnectivity,
) -> Callable[..., tuple[AcquisitionFlow, FakeConfirmer]]:
    def _factory(*answers: bool) -> tuple[AcquisitionFlow, FakeConfirmer]:
        confirmer = FakeConfirmer(*answers)
        flow = AcquisitionFlow(
            runtime,
            tag_catalog,
            confirmer,
            connectivity,
            catalog_url="https://hub.docker.com/r/simvia/code_aster",
        )
        return flow, confirmer

    return _factory


@pytest.fixture
def make_reconciler(
    resolver: AliasResolver,
    runtime: FakeRuntime,
    store: ResolutionStore,
    connectivity: FakeConnectivity,
) -> Callable[..., tuple[Reconciler, FakeConfirmer]]:
    def _factory(*answers: bool) -> tuple[Reconciler, FakeConfirmer]:
        confirmer = FakeConfirmer(*answers)
        return Reconciler(resolver, runtime, store, confirmer, connectivity), confirmer

    return _factory


@pytest.fixture
def settings() -> CaveSettings:
    return CaveSettings(registry_tags_url=CATALOG_URL, local_telemetry=False)


@pytest.fixture
def make_manager(
    settings: CaveSettings,
    runtime: FakeRuntime,
    metadata_client: FakeMetadataClient,
    connectivity: FakeConnectivity,
    project_dir: Path,
    home_dir: Path,
) -> Callable[..., VersionManager]:
    """Factory fixture: a VersionManager wired entirely to fakes."""

    def _factory(*answers: bool, telemetry: RecordingTelemetry | None = None) -> VersionManager:
        return VersionManager(
            settings,
            runtime=runtime,
            metadata_client=metadata_client,
            confirmer=FakeConfirmer(*answers),
            connectivity=connectivity,
            telemetry=telemetry or RecordingTelemetry(),
            project_dir=project_dir,
            home_dir=home_dir,
        )

    return _factory
