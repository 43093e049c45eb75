"""Deterministic blob path generation for submitted feature collections.

Layout within the output container::

    features/{YYYY}/{MM}/{DD}/{YYYYMMDDTHHMMSSZ}.geojson   one blob per run
    features/latest.geojson                                  most recent run

Same run timestamp, same path: re-submitting a run overwrites its blob.
"""

from __future__ import annotations

from datetime import UTC, datetime

FEATURES_PREFIX = "features"
LATEST_BLOB_NAME = "latest.geojson"


def build_collection_path(*, timestamp: datetime | None = None) -> str:
    """Build the blob path for one run's feature collection.

    Format: ``features/{YYYY}/{MM}/{DD}/{YYYYMMDDTHHMMSSZ}.geojson``

    Args:
        timestamp: Run timestamp. Defaults to current UTC time; aware
            values are converted to UTC, naive values are taken as UTC.
    """
    ts = timestamp or datetime.now(UTC)
    ts = ts.replace(tzinfo=UTC) if ts.tzinfo is None else ts.astimezone(UTC)
    return (
        f"{FEATURES_PREFIX}/{ts.year:04d}/{ts.month:02d}/{ts.day:02d}/"
        f"{ts.strftime('%Y%m%dT%H%M%SZ')}.geojson"
    )


def build_latest_path() -> str:
    """Return the blob path that always holds the most recent collection."""
    return f"{FEATURES_PREFIX}/{LATEST_BLOB_NAME}"
