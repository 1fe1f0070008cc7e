"""Fire-and-forget execution reports.

One :class:`~cave.models.telemetry.ExecutionData` is sent per
non-interactive ``cave run``. Delivery never affects the outcome of the
command: every failure is logged at DEBUG level and dropped.

Two transports:

- HTTP: JSON POST to ``CAVE_TELEMETRY_ENDPOINT``
- local: one JSON line appended to a file (``CAVE_LOCAL_TELEMETRY=true``)
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import requests

from cave.models.telemetry import ExecutionData

logger = logging.getLogger(__name__)


def local_timezone_offset(now: datetime | None = None) -> str:
    """Return the local UTC offset as ``+HH:MM``."""
    stamp = (now or datetime.now().astimezone()).strftime("%z") or "+0000"
    return f"{stamp[:3]}:{stamp[3:5]}"


class TelemetryReporter:
    """Sends execution reports; never raises.

    Parameters
    ----------
    endpoint:
        HTTP endpoint receiving JSON reports.
    local_path:
        When set, reports are appended to this file instead of posted.
    timeout:
        HTTP timeout in seconds.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        local_path: Path | None = None,
        timeout: float = 3.0,
        session: requests.Session | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._local_path = local_path
        self._timeout = timeout
        self._session = session

    def send(self, data: ExecutionData) -> bool:
        """Deliver *data*; return whether delivery succeeded."""
        try:
            if self._local_path is not None:
                with self._local_path.open("a", encoding="utf-8") as fh:
                    fh.write(data.model_dump_json() + "\n")
            else:
                http = self._session or requests.Session()
                resp = http.post(self._endpoint, json=data.model_dump(), timeout=self._timeout)
                resp.raise_for_status()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Telemetry not delivered: %s", exc)
            return False
        logger.debug("Telemetry delivered for version %s", data.version)
        return True
