"""Tests for the ingress boundary helpers."""

from __future__ import annotations

import os
from unittest.mock import MagicMock, patch

import pytest

from spot_feed.activities.fetch_feed import TransportError
from spot_feed.activities.parse_feed import ParseError, UpstreamError
from spot_feed.activities.submit_features import SubmitError
from spot_feed.core.config import ConfigError
from spot_feed.core.exceptions import ContractError, PipelineError
from spot_feed.core.ingress import error_status_code, get_blob_service_client
from spot_feed.models.message import UpstreamErrorEntry


class TestGetBlobServiceClient:
    """Blob client factory."""

    def test_missing_connection_string(self) -> None:
        with (
            patch.dict(os.environ, {}, clear=True),
            pytest.raises(ContractError, match="AzureWebJobsStorage") as exc_info,
        ):
            get_blob_service_client()
        assert exc_info.value.code == "MISSING_CONNECTION_STRING"

    def test_builds_from_connection_string(self) -> None:
        sentinel = MagicMock()
        with (
            patch.dict(os.environ, {"AzureWebJobsStorage": "UseDevelopmentStorage=true"}),
            patch(
                "azure.storage.blob.BlobServiceClient.from_connection_string",
                return_value=sentinel,
            ) as mock_factory,
        ):
            assert get_blob_service_client() is sentinel
        mock_factory.assert_called_once_with("UseDevelopmentStorage=true")


class TestErrorStatusCode:
    """HTTP status mapping for the on-demand run endpoint."""

    @pytest.mark.parametrize(
        "err",
        [
            TransportError("down"),
            ParseError("bad xml"),
            UpstreamError([UpstreamErrorEntry("E-0160", "not found")]),
        ],
    )
    def test_upstream_failures_are_bad_gateway(self, err: PipelineError) -> None:
        assert error_status_code(err) == 502

    @pytest.mark.parametrize(
        "err",
        [ConfigError("SPOT_MAP_SHARES", None, "no shares provided"), SubmitError("no blob")],
    )
    def test_local_failures_are_server_errors(self, err: PipelineError) -> None:
        assert error_status_code(err) == 500
