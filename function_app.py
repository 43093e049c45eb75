"""Azure Functions entry point: SPOT Feed Ingest.

This module registers all Azure Functions (timer and HTTP triggers)
using the Python v2 programming model.

All business logic lives in the spot_feed package. This file is purely
the wiring layer between Azure Functions bindings and application code.
"""

from __future__ import annotations

import json
import logging

import azure.functions as func

from spot_feed.core.exceptions import PipelineError
from spot_feed.core.ingress import error_status_code
from spot_feed.orchestrators.feed_pipeline import run_from_env

app = func.FunctionApp()

logger = logging.getLogger("spot_feed.function_app")


# ---------------------------------------------------------------------------
# Timer: scheduled run
# ---------------------------------------------------------------------------


@app.function_name("spot_feed_timer")
@app.timer_trigger(schedule="0 */5 * * * *", arg_name="timer", run_on_startup=False)
async def spot_feed_timer(timer: func.TimerRequest) -> None:
    """Poll every configured share and submit the merged collection.

    Any failure propagates so the invocation is recorded as failed in
    Application Insights; the next tick is the only retry.
    """
    if timer.past_due:
        logger.warning("Timer is past due, running anyway")

    collection = await run_from_env()

    logger.info("Scheduled run completed | features=%d", len(collection.features))


# ---------------------------------------------------------------------------
# HTTP: on-demand run
# ---------------------------------------------------------------------------


@app.function_name("spot_feed_run")
@app.route(route="spot/run", methods=["POST"])
async def spot_feed_run(req: func.HttpRequest) -> func.HttpResponse:
    """Run the pipeline now and return the submitted collection."""
    try:
        collection = await run_from_env()
    except PipelineError as exc:
        logger.exception("On-demand run failed | stage=%s | code=%s", exc.stage, exc.code)
        return func.HttpResponse(
            json.dumps(exc.to_error_dict()),
            status_code=error_status_code(exc),
            mimetype="application/json",
        )

    return func.HttpResponse(
        collection.to_json(),
        status_code=200,
        mimetype="application/geo+json",
    )


# ---------------------------------------------------------------------------
# HTTP: configuration / output schemas
# ---------------------------------------------------------------------------


@app.function_name("spot_feed_schema")
@app.route(route="spot/schema/{kind}", methods=["GET"])
def spot_feed_schema(req: func.HttpRequest) -> func.HttpResponse:
    """Return the JSON schema for ``input`` (configuration) or ``output``."""
    from spot_feed.models.schema import get_schema

    kind = req.route_params.get("kind", "")
    try:
        schema = get_schema(kind)
    except ValueError:
        return func.HttpResponse(f"Unknown schema type: {kind}", status_code=404)

    return func.HttpResponse(json.dumps(schema), status_code=200, mimetype="application/json")
