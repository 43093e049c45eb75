"""Shared pytest fixtures for the SPOT Feed Ingest test suite."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"

# Reference "now" matching the timestamps in the sample feeds.
FEED_NOW = datetime(2026, 2, 15, 12, 0, 0, tzinfo=UTC)


def read_feed(name: str) -> str:
    """Return the text of a sample feed in the data directory."""
    return (DATA_DIR / name).read_text(encoding="utf-8")


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def feed_now() -> datetime:
    """Freshness reference time for the sample feeds."""
    return FEED_NOW


# ---------------------------------------------------------------------------
# Sample feed fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def single_message_feed() -> str:
    """One message reported five minutes before ``feed_now``."""
    return read_feed("feed_single_message.xml")


@pytest.fixture()
def mixed_freshness_feed() -> str:
    """Two fresh messages (10 and 20 min old) and one stale (2 h old)."""
    return read_feed("feed_mixed_freshness.xml")


@pytest.fixture()
def no_messages_feed() -> str:
    """Feed reporting only the benign E-0195 code."""
    return read_feed("feed_no_messages.xml")


@pytest.fixture()
def unknown_errors_feed() -> str:
    """Feed reporting two non-benign error codes."""
    return read_feed("feed_unknown_errors.xml")


@pytest.fixture()
def benign_and_unknown_errors_feed() -> str:
    """Feed reporting E-0195 alongside a non-benign code."""
    return read_feed("feed_benign_and_unknown_errors.xml")


@pytest.fixture()
def empty_message_response_feed() -> str:
    """Feed with a present but empty ``<feedMessageResponse/>``."""
    return read_feed("feed_empty_message_response.xml")


@pytest.fixture()
def missing_feed_message_response_feed() -> str:
    """``<response>`` without a ``<feedMessageResponse>`` section."""
    return read_feed("feed_missing_feed_message_response.xml")


@pytest.fixture()
def missing_response_feed() -> str:
    """Document whose root is not ``<response>``."""
    return read_feed("feed_missing_response.xml")


@pytest.fixture()
def missing_latitude_feed() -> str:
    """A message without its ``<latitude>`` element."""
    return read_feed("feed_message_missing_latitude.xml")
