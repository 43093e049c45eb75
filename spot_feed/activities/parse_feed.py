"""Parse feed activity: turn a SPOT feed XML body into raw messages.

Expected document shapes::

    <response>
      <feedMessageResponse>
        <count>2</count>
        <messages>
          <message>
            <messengerId>0-1234567</messengerId>
            <messengerName>Trail Team</messengerName>
            ...
          </message>
        </messages>
      </feedMessageResponse>
    </response>

    <response>
      <errors>
        <error><code>E-0195</code><description>No displayable messages...</description></error>
      </errors>
    </response>

Classification rules, in order:

1. Empty or whitespace-only body: no messages yet, returns ``[]``.
2. Not XML, or no top-level ``<response>``: ``ParseError``.
3. Any ``<error>`` code other than ``E-0195``: ``UpstreamError`` carrying
   every such description, joined with ``", "``.
4. ``E-0195`` alone: the share has nothing to show, returns ``[]``.
5. No ``<feedMessageResponse>``: ``ParseError``.
6. ``<feedMessageResponse>`` without child elements: returns ``[]``.
7. Otherwise every ``<messages>/<message>`` entry in document order;
   a missing field is a ``ParseError``, never a silent gap.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from spot_feed.core.constants import NO_MESSAGES_ERROR_CODE
from spot_feed.core.exceptions import ContractError, PermanentError
from spot_feed.models.message import MESSAGE_FIELD_ELEMENTS, RawMessage, UpstreamErrorEntry

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("spot_feed.activities.parse_feed")

# Fields that must carry text: the mapper cannot build a feature without them.
_NON_EMPTY_FIELDS = frozenset({"messenger_id", "date_time", "latitude", "longitude", "altitude"})


class ParseError(ContractError):
    """Raised when the feed body is not the expected XML document."""

    default_stage = "parse_feed"
    default_code = "FEED_PARSE_FAILED"


class UpstreamError(PermanentError):
    """Raised when the feed reports an error other than "no messages".

    Attributes:
        errors: Every non-benign error entry reported by the feed.
    """

    default_stage = "parse_feed"
    default_code = "FEED_UPSTREAM_ERROR"

    def __init__(
        self,
        errors: list[UpstreamErrorEntry],
        *,
        share_id: str = "",
    ) -> None:
        self.errors = tuple(errors)
        message = ", ".join(e.description for e in self.errors)
        super().__init__(message, share_id=share_id)

    @property
    def upstream_codes(self) -> tuple[str, ...]:
        """Upstream error codes in the order the feed reported them."""
        return tuple(e.code for e in self.errors)


def parse_feed(raw_body: str, *, share_id: str = "") -> list[RawMessage]:
    """Parse a SPOT feed body into ``RawMessage`` objects.

    Args:
        raw_body: Response body returned by ``fetch_feed``.
        share_id: Share the body belongs to (for logs and errors only).

    Returns:
        Messages in document order; empty for every benign "no data" case.

    Raises:
        ParseError: If the body is not XML or lacks ``<response>`` or
            ``<feedMessageResponse>``, or a message lacks a field.
        UpstreamError: If the feed reports a non-benign error code.
    """
    if not raw_body or not raw_body.strip():
        return []

    root = _parse_xml(raw_body, share_id)
    if _local_name(root) != "response":
        msg = f"Feed for share {share_id or '?'} has no <response> element"
        raise ParseError(msg, share_id=share_id)

    no_messages = False
    errors_elem = _child(root, "errors")
    if errors_elem is not None:
        unknown: list[UpstreamErrorEntry] = []
        for entry in _error_entries(errors_elem):
            if entry.code == NO_MESSAGES_ERROR_CODE:
                no_messages = True
            else:
                unknown.append(entry)
        if unknown:
            raise UpstreamError(unknown, share_id=share_id)

    if no_messages:
        logger.info("SPOT feed has no messages | share=%s", share_id)
        return []

    response = _child(root, "feedMessageResponse")
    if response is None:
        msg = f"Feed for share {share_id or '?'} has no <feedMessageResponse> element"
        raise ParseError(msg, share_id=share_id)

    if not _children(response):
        return []

    logger.info(
        "SPOT feed parsed | share=%s | reported_count=%s",
        share_id,
        _child_text(response, "count") or "?",
    )

    messages_elem = _child(response, "messages")
    if messages_elem is None:
        msg = f"Feed for share {share_id or '?'} has no <messages> element"
        raise ParseError(msg, share_id=share_id)

    return [
        _to_raw_message(elem, idx, share_id)
        for idx, elem in enumerate(_children(messages_elem, "message"))
    ]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse_xml(raw_body: str, share_id: str) -> _Element:
    """Parse *raw_body* with a parser that never resolves entities or fetches."""
    from lxml import etree  # type: ignore[attr-defined]

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        return etree.fromstring(raw_body.strip().encode("utf-8"), parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Feed for share {share_id or '?'} is not valid XML: {exc}"
        raise ParseError(msg, share_id=share_id) from exc


def _local_name(elem: _Element) -> str:
    """Return the tag without any namespace (``""`` for comments/PIs)."""
    tag = elem.tag
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _children(elem: _Element, name: str = "") -> list[_Element]:
    """Return child elements, optionally restricted to local name *name*."""
    return [
        child
        for child in elem
        if _local_name(child) and (not name or _local_name(child) == name)
    ]


def _child(elem: _Element, name: str) -> _Element | None:
    matches = _children(elem, name)
    return matches[0] if matches else None


def _child_text(elem: _Element, name: str) -> str | None:
    """Return the stripped text of child *name*, or ``None`` if absent."""
    child = _child(elem, name)
    if child is None:
        return None
    return (child.text or "").strip()


def _error_entries(errors_elem: _Element) -> list[UpstreamErrorEntry]:
    entries: list[UpstreamErrorEntry] = []
    for error in _children(errors_elem, "error"):
        code = _child_text(error, "code") or ""
        description = _child_text(error, "description") or _child_text(error, "text") or code
        entries.append(UpstreamErrorEntry(code=code, description=description))
    return entries


def _to_raw_message(elem: _Element, idx: int, share_id: str) -> RawMessage:
    values: dict[str, str] = {}
    for attr, tag in MESSAGE_FIELD_ELEMENTS.items():
        text = _child_text(elem, tag)
        if text is None or (not text and attr in _NON_EMPTY_FIELDS):
            msg = f"Message {idx} in feed for share {share_id or '?'} is missing <{tag}>"
            raise ParseError(msg, share_id=share_id)
        values[attr] = text
    return RawMessage(**values)
