"""Tests for the Docker Hub catalog client and TagCatalog."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from conftest import CATALOG_URL, FakeMetadataClient
from cave.bridge.registry import DockerHubClient, MetadataClient, TagCatalog, iter_catalog
from cave.core.errors import TransportError

PAGE_1 = "https://hub.docker.com/v2/repositories/simvia/code_aster/tags?page_size=100"
PAGE_2 = PAGE_1 + "&page=2"


def _response(status: int = 200, body: object = None) -> MagicMock:
    resp = MagicMock()
    resp.ok = 200 <= status < 300
    resp.status_code = status
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


def _session(*responses: MagicMock) -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = list(responses)
    return session


class TestDockerHubClient:
    def test_parses_entries(self):
        body = {
            "next": PAGE_2,
            "results": [
                {
                    "name": "17.3.1",
                    "images": [
                        {"digest": "sha256:abc", "last_pushed": "2025-03-02T10:14:33Z"},
                        {"digest": "sha256:other", "last_pushed": "2025-03-01T00:00:00Z"},
                    ],
                },
                {"name": "stable", "images": []},
                {"name": "old"},
            ],
        }
        session = _session(_response(body=body))
        entries, next_url = DockerHubClient(session=session, timeout=4).fetch_page(PAGE_1)

        assert next_url == PAGE_2
        assert [e.name for e in entries] == ["17.3.1", "stable", "old"]
        assert entries[0].content_digest == "sha256:abc"
        assert entries[0].last_pushed == "2025-03-02T10:14:33Z"
        assert entries[1].content_digest == "unknown"
        assert entries[2].last_pushed == "unknown"
        session.get.assert_called_once_with(PAGE_1, timeout=4)

    def test_last_page(self):
        session = _session(_response(body={"next": None, "results": []}))
        assert DockerHubClient(session=session).fetch_page(PAGE_1) == ([], None)

    def test_http_error(self):
        session = _session(_response(status=503))
        with pytest.raises(TransportError, match="503"):
            DockerHubClient(session=session).fetch_page(PAGE_1)

    def test_connection_error(self):
        session = MagicMock(spec=requests.Session)
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(TransportError, match="refused"):
            DockerHubClient(session=session).fetch_page(PAGE_1)

    @pytest.mark.parametrize(
        "body",
        [ValueError("Expecting value"), {"next": None}, {"results": [{"images": []}]}, ["x"]],
    )
    def test_malformed_body(self, body):
        session = _session(_response(body=body))
        with pytest.raises(TransportError, match="Malformed"):
            DockerHubClient(session=session).fetch_page(PAGE_1)

    def test_satisfies_protocol(self):
        assert isinstance(DockerHubClient(session=MagicMock()), MetadataClient)


class TestTagCatalog:
    def test_iter_follows_next_links(self, catalog_entries, metadata_client):
        names = [t.name for t in iter_catalog(metadata_client, CATALOG_URL)]
        assert names == [t.name for t in catalog_entries]
        assert metadata_client.requested == [
            "memory://tags?page=0",
            "memory://tags?page=1",
            "memory://tags?page=2",
        ]

    def test_fetch_reads_afresh_each_call(self, tag_catalog, metadata_client):
        tag_catalog.fetch()
        tag_catalog.fetch()
        assert len(metadata_client.requested) == 6

    def test_contains(self, tag_catalog):
        assert tag_catalog.contains("16.7.1")
        assert tag_catalog.contains("stable")
        assert not tag_catalog.contains("99.99.99")

    def test_failure_midway_yields_no_partial_listing(self, catalog_entries):
        catalog = TagCatalog(FakeMetadataClient(catalog_entries, fail_on_page=2), CATALOG_URL)
        with pytest.raises(TransportError):
            catalog.fetch()
