"""Check GitHub for a newer cave release."""

from __future__ import annotations

import logging

import requests

from cave.core.errors import TransportError
from cave.core.version_parser import version_sort_key

logger = logging.getLogger(__name__)


def latest_release(url: str, *, timeout: float = 5.0, session: requests.Session | None = None) -> str:
    """Return the tag name of the latest published release (``v`` stripped)."""
    http = session or requests.Session()
    try:
        resp = http.get(url, timeout=timeout, headers={"Accept": "application/vnd.github+json"})
    except requests.RequestException as exc:
        raise TransportError(str(exc)) from exc
    if not resp.ok:
        raise TransportError(f"Failed to fetch latest release: {resp.status_code}")
    try:
        tag = resp.json()["tag_name"]
    except (ValueError, KeyError, TypeError) as exc:
        raise TransportError(f"Malformed release response: {exc}") from exc
    return str(tag).lstrip("v")


def newer_release(current: str, url: str, **kwargs) -> str | None:
    """Return the latest release if it is newer than *current*, else None."""
    latest = latest_release(url, **kwargs)
    if version_sort_key(latest) > version_sort_key(current):
        logger.debug("Newer cave release available: %s > %s", latest, current)
        return latest
    return None
