"""Typed document model for the SPOT feed XML.

``RawMessage`` mirrors one ``<message>`` entry exactly as the feed
reports it (all values are the upstream strings).  ``UpstreamErrorEntry``
mirrors one ``<error>`` entry of an ``<errors>`` block.
"""

from __future__ import annotations

from dataclasses import dataclass

# XML element name for each RawMessage field, in upstream spelling.
MESSAGE_FIELD_ELEMENTS: dict[str, str] = {
    "messenger_name": "messengerName",
    "messenger_id": "messengerId",
    "model_id": "modelId",
    "battery_state": "batteryState",
    "date_time": "dateTime",
    "latitude": "latitude",
    "longitude": "longitude",
    "altitude": "altitude",
}


@dataclass(frozen=True, slots=True)
class RawMessage:
    """A single position report parsed from the feed, before mapping.

    Attributes:
        messenger_name: Human-readable device name.
        messenger_id: Upstream device identifier.
        model_id: Device model (e.g. ``"SPOT3"``).
        battery_state: Battery status string (e.g. ``"GOOD"``).
        date_time: Report timestamp in upstream format
            (e.g. ``"2026-02-15T12:00:00+0000"``).
        latitude: Latitude as a numeric string.
        longitude: Longitude as a numeric string.
        altitude: Altitude as a numeric string.
    """

    messenger_name: str
    messenger_id: str
    model_id: str
    battery_state: str
    date_time: str
    latitude: str
    longitude: str
    altitude: str


@dataclass(frozen=True, slots=True)
class UpstreamErrorEntry:
    """One error reported in the feed's ``<errors>`` block."""

    code: str
    description: str = ""
