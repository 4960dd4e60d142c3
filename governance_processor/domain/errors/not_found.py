"""Errors for aggregates that are absent from the store.

These are data errors. Handlers raise them only when no reconciliation
path exists (or the chain reader has no record either).
"""

from __future__ import annotations

from typing import Any

from governance_processor.domain.exceptions import ProcessorError


class RecordNotFoundError(ProcessorError):
    """Base error for a referenced aggregate that does not exist.

    Attributes:
        record_type: Name of the aggregate type.
        key: Identity that was looked up.
        details: Additional context for logging.
    """

    record_type: str = "record"

    def __init__(self, key: Any, details: dict[str, Any] | None = None) -> None:
        """Initialize the error.

        Args:
            key: Identity that was looked up.
            details: Additional context for logging.
        """
        self.key = key
        self.details = details or {}
        super().__init__(f"No {self.record_type} found for {key!r}")


class ListingNotFoundError(RecordNotFoundError):
    """Raised when a listing event references an unknown listing address."""

    record_type = "listing"


class ChallengeNotFoundError(RecordNotFoundError):
    """Raised when a challenge id is unknown locally and on-chain."""

    record_type = "challenge"


class PollNotFoundError(RecordNotFoundError):
    """Raised when a vote references a poll that was never created."""

    record_type = "poll"


class AppealNotFoundError(RecordNotFoundError):
    """Raised when an appeal event references an unknown challenge id."""

    record_type = "appeal"


class ProposalNotFoundError(RecordNotFoundError):
    """Raised when a parameter proposal is unknown locally and on-chain."""

    record_type = "proposal"


class MultiSigNotFoundError(RecordNotFoundError):
    """Raised when an owner event references an unknown multisig wallet."""

    record_type = "multisig"
