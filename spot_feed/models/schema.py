"""JSON schemas describing the pipeline's configuration and output.

Served by the ``spot_feed_schema`` HTTP function so that the host UI can
render a configuration form and validate what the sink receives.
"""

from __future__ import annotations

import enum
from typing import Any

from spot_feed.models.feature import FeatureCollection


class SchemaType(enum.Enum):
    """Which schema is being requested."""

    INPUT = "input"
    OUTPUT = "output"


INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["SPOT_MAP_SHARES"],
    "properties": {
        "SPOT_MAP_SHARES": {
            "type": "array",
            "description": "SPOT Share IDs to pull data from",
            "display": "table",
            "items": {
                "type": "object",
                "required": ["ShareId"],
                "properties": {
                    "ShareId": {
                        "type": "string",
                        "description": "SPOT Share ID",
                    },
                    "Password": {
                        "type": "string",
                        "description": "Optional password protecting the share feed",
                    },
                    "CallSign": {
                        "type": "string",
                        "description": "Human readable name of the operator, used as the callsign",
                    },
                },
            },
        },
        "DEBUG": {
            "type": "boolean",
            "default": False,
            "description": "Print results in logs",
        },
    },
}


def get_schema(schema_type: SchemaType | str) -> dict[str, Any]:
    """Return the JSON schema for *schema_type*.

    Raises:
        ValueError: If *schema_type* is not ``"input"`` or ``"output"``.
    """
    kind = SchemaType(schema_type)
    if kind is SchemaType.INPUT:
        return INPUT_SCHEMA
    return FeatureCollection.model_json_schema(by_alias=True)
