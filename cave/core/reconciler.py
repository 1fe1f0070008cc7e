"""Auto-update reconciliation for alias-pinned records.

A bare record is terminal: its version is used as-is. A record pinned to
an alias is re-resolved on every ``cave run`` when auto-update is on and
the network is reachable:

- same target as recorded      -> UNCHANGED, nothing written
- new target already installed -> ADOPTED, record rewritten silently
- new target not installed     -> ask; INSTALLED (pull + rewrite) or
                                  DECLINED (nothing written)

Every exit either writes one complete record or writes nothing.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

from cave.bridge.docker import LocalPresenceOracle
from cave.core.alias_resolver import AliasResolver
from cave.core.connectivity import Connectivity
from cave.core.prompts import Confirmer
from cave.core.resolution_store import ResolutionStore
from cave.models.records import ResolutionRecord, Scope
from cave.models.user_config import UserConfig
from cave.models.versioning import ConcreteVersion

logger = logging.getLogger(__name__)


class ReconcileOutcome(str, Enum):
    SKIPPED = "skipped"  # bare record, auto-update off, or offline
    UNCHANGED = "unchanged"
    ADOPTED = "adopted"
    INSTALLED = "installed"
    DECLINED = "declined"


class Reconciliation(BaseModel):
    """Result of one reconciliation pass."""

    model_config = ConfigDict(frozen=True)

    version: ConcreteVersion
    outcome: ReconcileOutcome
    record: ResolutionRecord


class Reconciler:
    """Detects and acts on drift between a pinned alias and the registry."""

    def __init__(
        self,
        resolver: AliasResolver,
        runtime: LocalPresenceOracle,
        store: ResolutionStore,
        confirmer: Confirmer,
        connectivity: Connectivity,
    ) -> None:
        self._resolver = resolver
        self._runtime = runtime
        self._store = store
        self._confirmer = confirmer
        self._connectivity = connectivity

    def reconcile(
        self, scope: Scope, record: ResolutionRecord, config: UserConfig
    ) -> Reconciliation:
        """Return the version to run for *record*, updating the store if needed.

        *scope* is where *record* was read from; an adopted update is written
        back there.
        """
        stored = record.version
        if record.alias is None or not config.auto_update:
            return Reconciliation(version=stored, outcome=ReconcileOutcome.SKIPPED, record=record)
        if not self._connectivity.is_online():
            logger.debug("Offline; keeping %s", record.encode())
            return Reconciliation(version=stored, outcome=ReconcileOutcome.SKIPPED, record=record)

        alias = record.alias
        live = self._resolver.resolve(alias)
        if live == stored:
            return Reconciliation(version=stored, outcome=ReconcileOutcome.UNCHANGED, record=record)

        updated = ResolutionRecord.pinned(alias, live)
        if live.tag in self._runtime.local_versions():
            self._store.write(scope, updated)
            logger.info("'%s' moved %s -> %s (already installed)", alias.value, stored, live)
            return Reconciliation(version=live, outcome=ReconcileOutcome.ADOPTED, record=updated)

        if not self._confirmer.confirm(f"{alias.value} version updated. Install new version?"):
            logger.debug("Update to %s declined; keeping %s", live, stored)
            return Reconciliation(version=stored, outcome=ReconcileOutcome.DECLINED, record=record)

        self._runtime.pull(live.tag)
        self._store.write(scope, updated)
        logger.info("'%s' moved %s -> %s (installed)", alias.value, stored, live)
        return Reconciliation(version=live, outcome=ReconcileOutcome.INSTALLED, record=updated)
