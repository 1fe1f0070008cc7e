"""Docker Hub tag catalog client.

The catalog is exposed as a paginated fetcher: ``fetch_page(url)`` returns
one page of :class:`TagMetadata` plus the URL of the next page (or None).
:func:`iter_catalog` walks every page lazily. Any non-success status or
unparsable body aborts the whole listing with :class:`TransportError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

import requests

from cave.core.errors import TransportError
from cave.models.catalog import UNKNOWN, TagMetadata

logger = logging.getLogger(__name__)


@runtime_checkable
class MetadataClient(Protocol):
    """Anything that can fetch one page of the tag catalog."""

    def fetch_page(self, url: str) -> tuple[list[TagMetadata], str | None]:
        """Return the entries on *url* and the next page URL, if any."""
        ...


def iter_catalog(client: MetadataClient, start_url: str) -> Iterator[TagMetadata]:
    """Yield every tag, following ``next`` links until they run out."""
    url: str | None = start_url
    while url is not None:
        entries, url = client.fetch_page(url)
        yield from entries


def _entry_from_json(raw: dict[str, Any]) -> TagMetadata:
    images = raw.get("images") or []
    first = images[0] if images else {}
    return TagMetadata(
        name=raw["name"],
        content_digest=first.get("digest") or UNKNOWN,
        last_pushed=first.get("last_pushed") or UNKNOWN,
    )


class DockerHubClient:
    """Paginated reader for ``/v2/repositories/<image>/tags``.

    Parameters
    ----------
    timeout:
        Per-request timeout in seconds.
    session:
        Optional ``requests.Session`` (injected by tests).
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()

    def fetch_page(self, url: str) -> tuple[list[TagMetadata], str | None]:
        logger.debug("Fetching tag page %s", url)
        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise TransportError(str(exc)) from exc

        if not resp.ok:
            raise TransportError(f"Failed to fetch Docker tags: {resp.status_code}")

        try:
            body = resp.json()
            entries = [_entry_from_json(item) for item in body["results"]]
            next_url = body.get("next")
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise TransportError(f"Malformed tag listing: {exc}") from exc

        return entries, next_url


class TagCatalog:
    """The full tag listing of one image repository.

    Each call to :meth:`fetch` reads the catalog afresh; nothing is cached
    between calls.
    """

    def __init__(self, client: MetadataClient, start_url: str) -> None:
        self._client = client
        self._start_url = start_url

    def fetch(self) -> list[TagMetadata]:
        """Read every page; a failing page aborts with TransportError."""
        tags = list(iter_catalog(self._client, self._start_url))
        logger.debug("Catalog holds %d tags", len(tags))
        return tags

    def contains(self, tag: str) -> bool:
        return any(entry.name == tag for entry in self.fetch())
