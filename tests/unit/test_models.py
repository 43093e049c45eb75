"""Tests for the share, feature, and schema models."""

from __future__ import annotations

import json

import pytest

from spot_feed.models.feature import (
    FeatureCollection,
    FeatureProperties,
    MessageMetadata,
    NormalizedFeature,
    PointGeometry,
)
from spot_feed.models.schema import INPUT_SCHEMA, SchemaType, get_schema
from spot_feed.models.share import ShareConfig


def _feature(messenger_id: str = "0-1") -> NormalizedFeature:
    return NormalizedFeature(
        id=f"spot-{messenger_id}",
        geometry=PointGeometry(coordinates=[-105.0, 39.7, 1609.0]),
        properties=FeatureProperties(
            callsign="Ranger One",
            time="2026-02-15T11:55:00+00:00",
            start="2026-02-15T11:55:00+00:00",
            metadata=MessageMetadata(
                messengerName="Ranger One",
                messengerId=messenger_id,
                modelId="SPOT3",
                batteryState="GOOD",
                dateTime="2026-02-15T11:55:00+0000",
            ),
        ),
    )


class TestShareConfig:
    """ShareConfig invariants."""

    def test_empty_share_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="share_id"):
            ShareConfig(share_id="")

    def test_frozen(self) -> None:
        share = ShareConfig(share_id="abc123")
        with pytest.raises(AttributeError):
            share.share_id = "other"  # type: ignore[misc]

    def test_repr_masks_password(self) -> None:
        text = repr(ShareConfig(share_id="abc123", password="s3cret"))
        assert "abc123" in text
        assert "s3cret" not in text


class TestFeatureCollection:
    """GeoJSON serialisation."""

    def test_empty_collection(self) -> None:
        assert FeatureCollection().to_dict() == {"type": "FeatureCollection", "features": []}

    def test_json_uses_upstream_key_spelling(self) -> None:
        document = json.loads(FeatureCollection(features=[_feature()]).to_json())
        feature = document["features"][0]
        assert feature["type"] == "Feature"
        assert feature["geometry"] == {"type": "Point", "coordinates": [-105.0, 39.7, 1609.0]}
        assert feature["properties"]["metadata"]["messengerId"] == "0-1"
        assert "messenger_id" not in feature["properties"]["metadata"]

    def test_preserves_order(self) -> None:
        collection = FeatureCollection(features=[_feature(str(i)) for i in range(3)])
        assert [f["id"] for f in collection.to_dict()["features"]] == ["spot-0", "spot-1", "spot-2"]


class TestSchemas:
    """Input and output schemas."""

    def test_input_schema(self) -> None:
        schema = get_schema("input")
        assert schema is INPUT_SCHEMA
        assert schema["required"] == ["SPOT_MAP_SHARES"]
        assert schema["properties"]["SPOT_MAP_SHARES"]["items"]["required"] == ["ShareId"]

    def test_output_schema_describes_collection(self) -> None:
        schema = get_schema(SchemaType.OUTPUT)
        assert schema["title"] == "FeatureCollection"
        assert "features" in schema["properties"]
        assert "MessageMetadata" in json.dumps(schema)

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValueError):
            get_schema("sideways")
