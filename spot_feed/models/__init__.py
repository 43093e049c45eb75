"""Data models and schemas.

Defines the data structures used throughout the pipeline:
- ShareConfig: One configured SPOT share feed
- RawMessage / UpstreamErrorEntry: Typed view of the feed XML
- NormalizedFeature / FeatureCollection: GeoJSON output
"""

from spot_feed.models.feature import (
    FeatureCollection,
    FeatureProperties,
    MessageMetadata,
    NormalizedFeature,
    PointGeometry,
)
from spot_feed.models.message import RawMessage, UpstreamErrorEntry
from spot_feed.models.share import ShareConfig

__all__ = [
    "FeatureCollection",
    "FeatureProperties",
    "MessageMetadata",
    "NormalizedFeature",
    "PointGeometry",
    "RawMessage",
    "ShareConfig",
    "UpstreamErrorEntry",
]
