"""Fetch feed activity: download the latest XML for one SPOT share.

Issues exactly one GET per share per run against the public SPOT feed
API and returns the body verbatim.  An empty body is a normal answer
(the share has no traffic yet) and is returned as ``""``.

No retries and no timeout override: a transport failure surfaces as
``TransportError`` and, because runs are all-or-nothing, fails the run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from spot_feed.core.constants import (
    DEFAULT_API_BASE_URL,
    FEED_PASSWORD_PARAM,
    FEED_PATH_TEMPLATE,
)
from spot_feed.core.exceptions import TransientError

if TYPE_CHECKING:
    from spot_feed.models.share import ShareConfig

logger = logging.getLogger("spot_feed.activities.fetch_feed")


class TransportError(TransientError):
    """Raised when the feed endpoint cannot be reached."""

    default_stage = "fetch_feed"
    default_code = "FEED_TRANSPORT_FAILED"


def build_feed_url(share: ShareConfig, *, base_url: str = DEFAULT_API_BASE_URL) -> httpx.URL:
    """Build the latest-messages URL for *share*.

    The share id is percent-encoded as a single path segment.  The
    password, when present, is attached as the ``feedPassword`` query
    parameter.
    """
    path = FEED_PATH_TEMPLATE.format(share_id=quote(share.share_id, safe=""))
    url = httpx.URL(base_url.rstrip("/") + path)
    if share.password:
        url = url.copy_merge_params({FEED_PASSWORD_PARAM: share.password})
    return url


async def fetch_feed(
    share: ShareConfig,
    *,
    base_url: str = DEFAULT_API_BASE_URL,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Request the latest feed XML for *share* and return the raw body.

    Args:
        share: The share to request.
        base_url: Feed host (``SPOT_API_BASE_URL``).
        client: Optional ``httpx.AsyncClient`` to send the request with.
            When ``None`` a short-lived client is opened for this request
            only, so concurrent shares never share connection state.

    Returns:
        The response body text, possibly empty.

    Raises:
        TransportError: If the request fails at the HTTP transport level.
    """
    url = build_feed_url(share, base_url=base_url)
    logger.info("Requesting SPOT feed | share=%s", share.share_id)

    try:
        if client is None:
            async with httpx.AsyncClient() as owned_client:
                resp = await owned_client.get(url)
        else:
            resp = await client.get(url)
    except httpx.HTTPError as exc:
        msg = f"Request for share {share.share_id} failed: {exc}"
        raise TransportError(msg, share_id=share.share_id) from exc

    if not resp.is_success:
        logger.warning(
            "SPOT feed responded with non-success status | share=%s | status=%d",
            share.share_id,
            resp.status_code,
        )

    return resp.text
