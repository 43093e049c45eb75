"""Feed pipeline exception taxonomy.

Every error raised by the feed pipeline inherits from ``PipelineError``
and carries structured context so the run controller, the HTTP entry
point, and the logs all describe a failure the same way.

Taxonomy categories
-------------------
- ``ValidationError``: bad configuration or input, never retryable.
- ``TransientError``: network-level failures reaching the feed host.
- ``PermanentError``: the feed or the sink reported a hard failure.
- ``ContractError``: the payload does not have the expected shape.

A run never retries on its own; ``retryable`` only tells the caller
(timer schedule, operator, HTTP client) whether trying again later is
worthwhile.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all feed-pipeline errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"fetch_feed"``, ``"parse_feed"``).
        code: Machine-readable error code (e.g. ``"FEED_PARSE_FAILED"``).
        retryable: Whether a later run may succeed.
        share_id: Share whose pipeline failed, when known.
    """

    default_stage: str = ""
    default_code: str = ""
    default_retryable: bool = False
    # Fixed by the category base classes; None derives it from ``retryable``.
    category_name: str | None = None

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool | None = None,
        share_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = self.default_retryable if retryable is None else retryable
        self.share_id = share_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the category name used in logs and error payloads."""
        if self.category_name is not None:
            return self.category_name
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "share_id": self.share_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(PipelineError):
    """Configuration or input validation failure. Never retryable."""

    category_name = "validation"


class TransientError(PipelineError):
    """Temporary failure that may succeed on a later run."""

    category_name = "transient"
    default_retryable = True


class PermanentError(PipelineError):
    """Hard failure reported by the feed or the sink."""

    category_name = "permanent"


class ContractError(PipelineError):
    """Payload shape differs from what the pipeline expects."""

    category_name = "contract"
