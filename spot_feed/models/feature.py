"""Pydantic GeoJSON models for the pipeline output.

One ``NormalizedFeature`` is produced per fresh SPOT message; a run's
features are gathered into a single ``FeatureCollection`` that is handed
to the submission sink.

Output shape::

    {
      "type": "Feature",
      "id": "spot-<messengerId>",
      "geometry": {"type": "Point", "coordinates": [lon, lat, alt]},
      "properties": {
        "callsign": "...",
        "time": "<ISO 8601>",
        "start": "<ISO 8601>",
        "metadata": {"messengerName": ..., "messengerId": ..., "modelId": ...,
                     "batteryState": ..., "dateTime": ...}
      }
    }
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class PointGeometry(BaseModel):
    """GeoJSON Point with ``[longitude, latitude, altitude]`` coordinates."""

    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(default_factory=list)


class MessageMetadata(BaseModel):
    """Upstream message fields carried through verbatim."""

    messenger_name: str = Field(alias="messengerName")
    messenger_id: str = Field(alias="messengerId")
    model_id: str = Field(alias="modelId")
    battery_state: str = Field(alias="batteryState")
    date_time: str = Field(alias="dateTime")

    model_config = {"populate_by_name": True}


class FeatureProperties(BaseModel):
    """Feature properties consumed by the downstream map.

    Attributes:
        callsign: Display name for the position (messenger name, or the
            share's callsign override).
        time: Report time as ISO 8601.
        start: Same as ``time``; the position is valid from its report.
        metadata: Original upstream message fields.
    """

    callsign: str
    time: str
    start: str
    metadata: MessageMetadata


class NormalizedFeature(BaseModel):
    """A single GeoJSON Point feature for one SPOT message."""

    type: Literal["Feature"] = "Feature"
    id: str
    geometry: PointGeometry
    properties: FeatureProperties


class FeatureCollection(BaseModel):
    """The complete output of one pipeline run."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[NormalizedFeature] = Field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON-shaped dict (upstream key spelling)."""
        return self.model_dump(by_alias=True)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise to a GeoJSON string."""
        return self.model_dump_json(by_alias=True, indent=indent)
