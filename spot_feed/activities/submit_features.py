"""Submit features activity: hand a run's collection to Blob Storage.

Writes the merged FeatureCollection as GeoJSON twice: once under a
per-run path (the audit trail) and once to ``features/latest.geojson``
(what downstream map layers poll).  Writes use ``overwrite=True`` so a
re-submitted run lands on the same blobs.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from spot_feed.core.constants import DEFAULT_OUTPUT_CONTAINER
from spot_feed.core.exceptions import PermanentError
from spot_feed.utils.blob_paths import build_collection_path, build_latest_path

if TYPE_CHECKING:
    from spot_feed.models.feature import FeatureCollection

logger = logging.getLogger("spot_feed.activities.submit_features")

GEOJSON_CONTENT_TYPE = "application/geo+json"


class SubmitError(PermanentError):
    """Raised when the collection cannot be written to the sink."""

    default_stage = "submit_features"
    default_code = "FEATURE_SUBMIT_FAILED"


def submit_features(
    collection: FeatureCollection,
    *,
    container: str = DEFAULT_OUTPUT_CONTAINER,
    timestamp: str = "",
    blob_service_client: object | None = None,
) -> dict[str, object]:
    """Store *collection* as GeoJSON in the output container.

    Args:
        collection: The merged output of one run.
        container: Output blob container.
        timestamp: Run timestamp (ISO 8601). Defaults to current UTC.
        blob_service_client: Optional ``BlobServiceClient``.  If ``None``,
            paths are built and returned without writing (useful for
            testing and local dev).

    Returns:
        A dict with ``blob_path``, ``latest_path``, ``container`` and
        ``feature_count``.

    Raises:
        SubmitError: If a blob upload fails.
    """
    try:
        ts = datetime.fromisoformat(timestamp) if timestamp else datetime.now(UTC)
    except ValueError:
        ts = datetime.now(UTC)

    blob_path = build_collection_path(timestamp=ts)
    latest_path = build_latest_path()

    if blob_service_client is not None:
        payload = collection.to_json().encode("utf-8")
        for path in (blob_path, latest_path):
            _upload_blob(blob_service_client, container, path, payload)

    logger.info(
        "Feature collection submitted | container=%s | path=%s | features=%d",
        container,
        blob_path,
        len(collection.features),
    )

    return {
        "blob_path": blob_path,
        "latest_path": latest_path,
        "container": container,
        "feature_count": len(collection.features),
    }


def _upload_blob(
    blob_service_client: object,
    container: str,
    blob_path: str,
    payload: bytes,
) -> None:
    """Upload *payload* to ``container/blob_path``.

    Raises:
        SubmitError: If the upload fails.
    """
    try:
        from azure.storage.blob import BlobServiceClient, ContentSettings

        if not isinstance(blob_service_client, BlobServiceClient):
            msg = f"Expected BlobServiceClient, got {type(blob_service_client).__name__}"
            raise SubmitError(msg)

        blob_client = blob_service_client.get_blob_client(container=container, blob=blob_path)
        blob_client.upload_blob(
            payload,
            overwrite=True,
            content_settings=ContentSettings(content_type=GEOJSON_CONTENT_TYPE),
        )
    except SubmitError:
        raise
    except Exception as exc:
        msg = f"Failed to upload feature collection to {container}/{blob_path}: {exc}"
        raise SubmitError(msg) from exc
