"""Pipeline configuration loaded from environment variables.

Azure Functions app settings (or ``local.settings.json`` for local dev)
are the source of truth.  ``SPOT_MAP_SHARES`` holds the shares to poll as
a JSON array::

    [{"ShareId": "0abc123", "Password": "optional", "CallSign": "optional"}]

Fail-fast validation:
    ``from_env()`` raises ``ConfigError`` when the share list is missing
    or malformed, or when a numeric value is out of range, before any
    network activity takes place.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any

from spot_feed.core.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_FRESHNESS_MINUTES,
    DEFAULT_OUTPUT_CONTAINER,
)
from spot_feed.core.exceptions import ValidationError
from spot_feed.models.share import ShareConfig

SHARES_KEY = "SPOT_MAP_SHARES"

# Accepted spellings of the share id key; "ShareID" appears in older configs.
_SHARE_ID_KEYS = ("ShareId", "ShareID")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class ConfigError(ValidationError):
    """Raised when configuration is missing or out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class SpotFeedConfig:
    """Immutable pipeline configuration, scoped to one run.

    Attributes:
        shares: Shares to poll, in configuration order.
        debug: Log the full merged collection after each run.
        api_base_url: Host serving the SPOT share feeds.
        freshness_minutes: Messages older than this many whole minutes
            are dropped.
        output_container: Blob container for submitted collections.
    """

    shares: tuple[ShareConfig, ...] = field(default_factory=tuple)
    debug: bool = False
    api_base_url: str = DEFAULT_API_BASE_URL
    freshness_minutes: int = DEFAULT_FRESHNESS_MINUTES
    output_container: str = DEFAULT_OUTPUT_CONTAINER

    @classmethod
    def from_env(cls) -> SpotFeedConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigError: If ``SPOT_MAP_SHARES`` is absent or malformed,
                or a setting is out of range.
            ValueError: If ``SPOT_FRESHNESS_MINUTES`` is not an integer.
        """
        config = cls(
            shares=tuple(resolve_shares(os.getenv(SHARES_KEY))),
            debug=os.getenv("DEBUG", "false").strip().lower() in _TRUE_VALUES,
            api_base_url=os.getenv("SPOT_API_BASE_URL", DEFAULT_API_BASE_URL),
            freshness_minutes=int(
                os.getenv("SPOT_FRESHNESS_MINUTES", str(DEFAULT_FRESHNESS_MINUTES))
            ),
            output_container=os.getenv("SPOT_OUTPUT_CONTAINER", DEFAULT_OUTPUT_CONTAINER),
        )
        _validate(config)
        return config


def resolve_shares(raw: Any) -> list[ShareConfig]:
    """Validate and normalise the configured share list.

    Args:
        raw: The ``SPOT_MAP_SHARES`` value, either already decoded (a list
            of dicts) or as the JSON string stored in app settings.

    Returns:
        One ``ShareConfig`` per entry, in configuration order.

    Raises:
        ConfigError: If the list is absent or not a list, or an entry has
            no non-empty ``ShareId``.
    """
    if raw is None:
        raise ConfigError(SHARES_KEY, None, "no shares provided")

    if isinstance(raw, str):
        if not raw.strip():
            raise ConfigError(SHARES_KEY, raw, "no shares provided")
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(SHARES_KEY, raw, f"not valid JSON ({exc.msg})") from exc

    if not isinstance(raw, list):
        raise ConfigError(SHARES_KEY, type(raw).__name__, "must be an array")

    shares: list[ShareConfig] = []
    for idx, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigError(f"{SHARES_KEY}[{idx}]", type(entry).__name__, "must be an object")

        share_id = _first_text(entry, _SHARE_ID_KEYS)
        if not share_id:
            raise ConfigError(f"{SHARES_KEY}[{idx}].ShareId", share_id, "must not be empty")

        shares.append(
            ShareConfig(
                share_id=share_id,
                password=_first_text(entry, ("Password",)) or None,
                callsign=_first_text(entry, ("CallSign",)) or None,
            )
        )
    return shares


def _first_text(entry: dict[str, Any], keys: tuple[str, ...]) -> str:
    """Return the first non-blank string value among *keys*, stripped."""
    for key in keys:
        value = entry.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def _validate(config: SpotFeedConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigError``."""
    if config.freshness_minutes <= 0:
        raise ConfigError(
            "SPOT_FRESHNESS_MINUTES",
            config.freshness_minutes,
            "must be > 0 (minutes)",
        )

    if not config.api_base_url.startswith(("http://", "https://")):
        raise ConfigError(
            "SPOT_API_BASE_URL",
            config.api_base_url,
            "must be an http(s) URL",
        )

    if not config.output_container:
        raise ConfigError(
            "SPOT_OUTPUT_CONTAINER",
            config.output_container,
            "must not be empty",
        )
