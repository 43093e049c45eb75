"""Data model for one configured SPOT share.

A share is the upstream feed subscription the pipeline polls.  Shares
are resolved from configuration once per run and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ShareConfig:
    """One SPOT share feed to poll.

    Attributes:
        share_id: Opaque upstream share identifier (never empty).
        password: Optional feed password, sent as a query parameter.
        callsign: Optional operator callsign overriding the messenger
            name in the output features.
    """

    share_id: str
    password: str | None = None
    callsign: str | None = None

    def __post_init__(self) -> None:
        if not self.share_id:
            msg = "share_id must not be empty"
            raise ValueError(msg)

    def __repr__(self) -> str:
        # Keep the password out of logs and tracebacks.
        masked = "***" if self.password else None
        return (
            f"ShareConfig(share_id={self.share_id!r}, password={masked!r}, "
            f"callsign={self.callsign!r})"
        )
