"""Shared pipeline constants.

Upstream endpoint layout, upstream error codes, and default settings
used by the fetcher, parser, mapper, and sink.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Upstream SPOT feed API
# ---------------------------------------------------------------------------

DEFAULT_API_BASE_URL: str = "https://api.findmespot.com"
"""Host serving the public SPOT share feeds."""

FEED_PATH_TEMPLATE: str = "/spot-main-web/consumer/rest-api/2.0/public/feed/{share_id}/latest.xml"
"""Path of the latest-messages feed for one share."""

FEED_PASSWORD_PARAM: str = "feedPassword"
"""Query parameter carrying the optional share password."""

NO_MESSAGES_ERROR_CODE: str = "E-0195"
"""Upstream code meaning the share currently has no displayable messages."""

# ---------------------------------------------------------------------------
# Pipeline defaults
# ---------------------------------------------------------------------------

DEFAULT_FRESHNESS_MINUTES: int = 30
"""Messages older than this many whole minutes are dropped."""

DEFAULT_OUTPUT_CONTAINER: str = "spot-features"
"""Blob container receiving submitted feature collections."""

FEATURE_ID_PREFIX: str = "spot-"
"""Prefix of every output feature id (followed by the messenger id)."""
