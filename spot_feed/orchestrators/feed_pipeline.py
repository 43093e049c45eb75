"""Run controller for the SPOT feed pipeline.

Coordinates one run:

1. Fan-out: one asyncio task per share running fetch -> parse -> map.
2. Fan-in: a single ``asyncio.gather`` barrier waits for every share.
3. Merge: non-empty feature lists in configuration order.
4. Submit: the merged collection goes to the sink exactly once, in a
   worker thread so blocking uploads do not stall the event loop.

Failure is all-or-nothing.  The first share to fail aborts the run and
nothing is submitted; shares already in flight are left to finish on
their own (there is no cancellation).  Per-share isolation would be a
deliberate behaviour change, not a fix.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from spot_feed.activities.fetch_feed import fetch_feed
from spot_feed.activities.map_messages import map_messages
from spot_feed.activities.parse_feed import parse_feed
from spot_feed.activities.submit_features import submit_features
from spot_feed.core.config import SpotFeedConfig
from spot_feed.core.exceptions import PipelineError
from spot_feed.models.feature import FeatureCollection

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    import httpx

    from spot_feed.models.feature import NormalizedFeature
    from spot_feed.models.share import ShareConfig

logger = logging.getLogger("spot_feed.orchestrators.feed_pipeline")


async def process_share(
    share: ShareConfig,
    *,
    config: SpotFeedConfig,
    now: datetime,
    client: httpx.AsyncClient | None = None,
) -> list[NormalizedFeature]:
    """Fetch, parse, and map a single share.

    Raises:
        PipelineError: Any stage failure, tagged with the share id.
    """
    try:
        body = await fetch_feed(share, base_url=config.api_base_url, client=client)
        messages = parse_feed(body, share_id=share.share_id)
        features = map_messages(
            messages,
            now=now,
            freshness_minutes=config.freshness_minutes,
            callsign=share.callsign,
        )
    except PipelineError as exc:
        if not exc.share_id:
            exc.share_id = share.share_id
        raise

    logger.info(
        "Share processed | share=%s | messages=%d | fresh=%d",
        share.share_id,
        len(messages),
        len(features),
    )
    return features


async def run_feed_pipeline(
    shares: Iterable[ShareConfig],
    *,
    config: SpotFeedConfig | None = None,
    sink: Callable[[FeatureCollection], object] | None = None,
    now: datetime | None = None,
    client: httpx.AsyncClient | None = None,
) -> FeatureCollection:
    """Run every share concurrently and merge the results.

    Args:
        shares: Shares to poll, in the order their features should appear.
        config: Pipeline settings; defaults apply when ``None``.
        sink: Callable receiving the merged collection once, after every
            share has succeeded.
        now: Freshness reference shared by all shares. Defaults to the
            current UTC time, captured once per run.
        client: Optional ``httpx.AsyncClient`` for all requests (tests).

    Returns:
        The merged ``FeatureCollection``.

    Raises:
        PipelineError: The first share failure; nothing is submitted.
    """
    share_list = list(shares)
    config = config or SpotFeedConfig(shares=tuple(share_list))
    ref = now or datetime.now(UTC)

    logger.info("Feed run started | shares=%d", len(share_list))

    # No return_exceptions: the first failure propagates and the remaining
    # share tasks run to completion unobserved. A later failure among them is
    # only reported by asyncio as "Task exception was never retrieved".
    results = await asyncio.gather(
        *(process_share(share, config=config, now=ref, client=client) for share in share_list)
    )

    collection = FeatureCollection()
    for features in results:
        if not features:
            continue
        collection.features.extend(features)

    logger.info(
        "Feed run completed | shares=%d | features=%d",
        len(share_list),
        len(collection.features),
    )
    if config.debug:
        logger.info("Feed run result | collection=%s", collection.to_json())

    if sink is not None:
        # The blob sink does blocking uploads; keep them off the event loop.
        await asyncio.to_thread(sink, collection)
    return collection


async def run_from_env() -> FeatureCollection:
    """Host entry point: load configuration, run, and submit to Blob Storage.

    Raises:
        ConfigError: If configuration is missing or invalid (before any
            network activity).
        PipelineError: Any share or sink failure.
    """
    from spot_feed.core.ingress import get_blob_service_client

    config = SpotFeedConfig.from_env()
    now = datetime.now(UTC)
    sink = functools.partial(
        submit_features,
        container=config.output_container,
        timestamp=now.isoformat(),
        blob_service_client=get_blob_service_client(),
    )
    return await run_feed_pipeline(config.shares, config=config, sink=sink, now=now)
