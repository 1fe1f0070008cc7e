"""Pre-flight network reachability probe.

A fast TCP connect to a well-known endpoint, so that an offline machine
fails immediately with NoConnectivityError instead of waiting on DNS or
HTTP timeouts.
"""

from __future__ import annotations

import logging
import socket
from typing import Protocol, runtime_checkable

from cave.core.errors import NoConnectivityError

logger = logging.getLogger(__name__)


@runtime_checkable
class Connectivity(Protocol):
    def is_online(self) -> bool:
        ...


class TcpProbe:
    """Online when a TCP connection to ``host:port`` opens within *timeout*."""

    def __init__(self, host: str = "8.8.8.8", port: int = 53, timeout: float = 2.0) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout

    def is_online(self) -> bool:
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                return True
        except OSError as exc:
            logger.debug("Probe to %s:%s failed: %s", self.host, self.port, exc)
            return False


def require_online(probe: Connectivity) -> None:
    """Raise NoConnectivityError unless *probe* reports the network as up."""
    if not probe.is_online():
        raise NoConnectivityError()
