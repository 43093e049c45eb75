"""Thin ingress boundary helpers for Azure Functions entrypoints.

Keeps host-specific wiring out of the pipeline so that
``function_app.py`` contains only trigger bindings and handoff:

- **get_blob_service_client**: creates an ``azure.storage.blob``
  client from the ``AzureWebJobsStorage`` environment variable,
  failing fast with a structured error if unconfigured.
- **error_status_code**: maps a ``PipelineError`` to the HTTP status
  returned by the on-demand run endpoint.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from spot_feed.core.exceptions import ContractError, PipelineError

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

# Stages whose failures come from the upstream feed rather than from us.
_UPSTREAM_STAGES = frozenset({"fetch_feed", "parse_feed"})


def get_blob_service_client() -> BlobServiceClient:
    """Create a ``BlobServiceClient`` from the ``AzureWebJobsStorage`` env var.

    Raises:
        ContractError: If the environment variable is not set.
    """
    from azure.storage.blob import BlobServiceClient

    connection_string = os.environ.get("AzureWebJobsStorage", "")  # noqa: SIM112
    if not connection_string:
        msg = "AzureWebJobsStorage environment variable is not set"
        raise ContractError(msg, stage="ingress", code="MISSING_CONNECTION_STRING")

    return BlobServiceClient.from_connection_string(connection_string)


def error_status_code(exc: PipelineError) -> int:
    """Return the HTTP status code describing *exc* to an HTTP caller.

    Upstream feed failures (transport, parse, upstream error codes) are a
    bad gateway; configuration problems and sink failures are ours.
    """
    if exc.stage in _UPSTREAM_STAGES:
        return 502
    return 500
