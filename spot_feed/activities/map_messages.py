"""Map messages activity: freshness filter and GeoJSON field mapping.

Pure transformation from ``RawMessage`` to ``NormalizedFeature``: no I/O
and no logging, so mapping the same messages with the same ``now``
always yields identical features.

Messages older than the freshness window (whole minutes, ``> 30`` by
default) are dropped without error; SPOT keeps serving positions for
days after a device goes quiet.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from spot_feed.activities.parse_feed import ParseError
from spot_feed.core.constants import DEFAULT_FRESHNESS_MINUTES, FEATURE_ID_PREFIX
from spot_feed.models.feature import (
    FeatureProperties,
    MessageMetadata,
    NormalizedFeature,
    PointGeometry,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from spot_feed.models.message import RawMessage

# Upstream format, e.g. "2026-02-15T12:00:00+0000".
_SPOT_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_ONE_MINUTE = timedelta(minutes=1)


def map_messages(
    messages: Iterable[RawMessage],
    *,
    now: datetime | None = None,
    freshness_minutes: int = DEFAULT_FRESHNESS_MINUTES,
    callsign: str | None = None,
) -> list[NormalizedFeature]:
    """Drop stale messages and map the rest to point features.

    Args:
        messages: Parsed messages, in feed order.
        now: Reference time for the freshness window.  Defaults to the
            current UTC time; naive values are taken as UTC.
        freshness_minutes: Maximum age in whole minutes to keep.
        callsign: Optional share-level callsign replacing the messenger
            name in ``properties.callsign``.

    Returns:
        One feature per fresh message, in input order.

    Raises:
        ParseError: If a timestamp or coordinate cannot be parsed.
    """
    ref = _as_utc(now or datetime.now(UTC))
    features: list[NormalizedFeature] = []
    for message in messages:
        reported = parse_report_time(message.date_time)
        if message_age_minutes(reported, ref) > freshness_minutes:
            continue
        features.append(to_feature(message, reported, callsign=callsign))
    return features


def message_age_minutes(reported: datetime, now: datetime) -> int:
    """Return the whole minutes elapsed between *reported* and *now*.

    Partial minutes are floored, so a message 30 min 59 s old is 30
    minutes old.  Timestamps in the future give a negative age.
    """
    return (now - reported) // _ONE_MINUTE


def parse_report_time(value: str) -> datetime:
    """Parse an upstream ``dateTime`` value into an aware UTC datetime.

    Raises:
        ParseError: If *value* is not an ISO 8601 timestamp.
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        try:
            parsed = datetime.strptime(value, _SPOT_DATETIME_FORMAT)
        except ValueError as exc:
            msg = f"Unparseable message dateTime: {value!r}"
            raise ParseError(msg) from exc
    return _as_utc(parsed)


def to_feature(
    message: RawMessage,
    reported: datetime,
    *,
    callsign: str | None = None,
) -> NormalizedFeature:
    """Map one message to its GeoJSON point feature."""
    timestamp = reported.isoformat()
    return NormalizedFeature(
        id=f"{FEATURE_ID_PREFIX}{message.messenger_id}",
        geometry=PointGeometry(
            coordinates=[
                _to_coordinate(message.longitude, "longitude"),
                _to_coordinate(message.latitude, "latitude"),
                _to_coordinate(message.altitude, "altitude"),
            ],
        ),
        properties=FeatureProperties(
            callsign=callsign or message.messenger_name,
            time=timestamp,
            start=timestamp,
            metadata=MessageMetadata(
                messenger_name=message.messenger_name,
                messenger_id=message.messenger_id,
                model_id=message.model_id,
                battery_state=message.battery_state,
                date_time=message.date_time,
            ),
        ),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_coordinate(value: str, name: str) -> float:
    """Convert a coordinate string to a finite float (no range check)."""
    try:
        number = float(value)
    except ValueError as exc:
        msg = f"Message {name} is not numeric: {value!r}"
        raise ParseError(msg) from exc
    if not math.isfinite(number):
        msg = f"Message {name} is not finite: {value!r}"
        raise ParseError(msg)
    return number
