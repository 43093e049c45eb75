"""Tests for feature collection blob path generation."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

from spot_feed.utils.blob_paths import build_collection_path, build_latest_path


class TestBuildCollectionPath:
    """Per-run path layout."""

    def test_layout(self) -> None:
        ts = datetime(2026, 3, 7, 8, 5, 9, tzinfo=UTC)
        assert build_collection_path(timestamp=ts) == "features/2026/03/07/20260307T080509Z.geojson"

    def test_converts_to_utc(self) -> None:
        ts = datetime(2026, 3, 7, 1, 0, 0, tzinfo=timezone(timedelta(hours=-7)))
        assert build_collection_path(timestamp=ts) == "features/2026/03/07/20260307T080000Z.geojson"

    def test_naive_taken_as_utc(self) -> None:
        ts = datetime(2026, 12, 31, 23, 59, 59)
        assert build_collection_path(timestamp=ts) == "features/2026/12/31/20261231T235959Z.geojson"

    def test_deterministic(self) -> None:
        ts = datetime(2026, 3, 7, tzinfo=UTC)
        assert build_collection_path(timestamp=ts) == build_collection_path(timestamp=ts)

    def test_defaults_to_now(self) -> None:
        assert build_collection_path().startswith(f"features/{datetime.now(UTC).year:04d}/")


def test_latest_path() -> None:
    assert build_latest_path() == "features/latest.geojson"
