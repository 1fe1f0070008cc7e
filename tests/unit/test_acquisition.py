"""Tests for AcquisitionFlow: install-if-missing with confirmation."""

from __future__ import annotations

import pytest

from cave.core.errors import (
    FetchError,
    NoConnectivityError,
    UserAbortedError,
    VersionNotAvailableError,
)
from cave.core.version_parser import parse_concrete


class TestEnsureAvailable:
    def test_installed_is_a_no_op(self, make_acquisition, runtime, metadata_client, connectivity):
        flow, confirmer = make_acquisition()
        assert flow.ensure_available(parse_concrete("16.7.1")).tag == "16.7.1"
        assert confirmer.prompts == []
        assert runtime.pulled == []
        assert metadata_client.requested == []
        assert connectivity.calls == 0

    def test_download_on_yes(self, make_acquisition, runtime):
        flow, confirmer = make_acquisition(True)
        flow.ensure_available(parse_concrete("17.3.1"))
        assert confirmer.prompts == ["Version '17.3.1' not installed. Download it?"]
        assert runtime.pulled == ["17.3.1"]

    def test_decline_aborts(self, make_acquisition, runtime):
        flow, _ = make_acquisition(False)
        with pytest.raises(UserAbortedError):
            flow.ensure_available(parse_concrete("17.3.1"))
        assert runtime.pulled == []

    def test_unknown_version_never_prompts(self, make_acquisition, runtime):
        flow, confirmer = make_acquisition(True)
        with pytest.raises(VersionNotAvailableError) as info:
            flow.ensure_available(parse_concrete("99.99.99"))
        assert confirmer.prompts == []
        assert runtime.pulled == []
        assert "is not available" in str(info.value)
        assert "https://hub.docker.com/r/simvia/code_aster" in str(info.value)

    def test_offline(self, make_acquisition, connectivity):
        connectivity.online = False
        flow, confirmer = make_acquisition(True)
        with pytest.raises(NoConnectivityError):
            flow.ensure_available(parse_concrete("17.3.1"))
        assert confirmer.prompts == []

    def test_pull_failure_propagates(self, make_acquisition, runtime):
        runtime.fail_pull = True
        flow, _ = make_acquisition(True)
        with pytest.raises(FetchError) as info:
            flow.ensure_available(parse_concrete("17.3.1"))
        assert "manifest unknown" in str(info.value)

    def test_supplied_catalog_is_reused(
        self, make_acquisition, catalog_entries, metadata_client, connectivity, runtime
    ):
        flow, _ = make_acquisition(True)
        flow.ensure_available(parse_concrete("17.3.1"), catalog_entries)
        assert runtime.pulled == ["17.3.1"]
        assert metadata_client.requested == []
        assert connectivity.calls == 0

    def test_supplied_catalog_without_version(self, make_acquisition, catalog_entries):
        flow, confirmer = make_acquisition(True)
        with pytest.raises(VersionNotAvailableError):
            flow.ensure_available(parse_concrete("18.0.0"), catalog_entries)
        assert confirmer.prompts == []
