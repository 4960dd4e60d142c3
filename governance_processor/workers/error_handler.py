"""Category-specific error handling for event batches.

Errors raised while applying an event are classified into data errors
(the event itself cannot be applied, retrying the batch fails the same
way) and transport errors (the store, chain or watermark was unavailable,
retrying later may succeed). The batch policy then decides:

- ABORT (default): every error aborts the batch; the watermark stays put
  and the next cycle retries the same window.
- SKIP: data errors are dead-lettered and the batch continues; transport
  errors still abort.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from governance_processor.domain.errors import (
    ChainReadError,
    EventDecodeError,
    PersistenceError,
    RecordNotFoundError,
    WatermarkUpdateError,
)

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Categories of errors encountered while processing events."""

    # Data - the event cannot be applied as delivered
    DECODE = "decode"
    MISSING_RECORD = "missing_record"

    # Transport - a collaborator failed
    CHAIN_READ = "chain_read"
    PERSISTENCE = "persistence"
    WATERMARK = "watermark"
    TIMEOUT = "timeout"
    NETWORK = "network"

    # Unknown - requires investigation
    UNKNOWN = "unknown"


class ErrorAction(Enum):
    """Action to take when an event fails."""

    ABORT_BATCH = "abort_batch"
    DEAD_LETTER = "dead_letter"


class BatchErrorPolicy(Enum):
    """How a batch reacts to a failing event."""

    ABORT = "abort"
    SKIP = "skip"


DATA_CATEGORIES: frozenset[ErrorCategory] = frozenset(
    {ErrorCategory.DECODE, ErrorCategory.MISSING_RECORD}
)


@dataclass(frozen=True)
class ErrorDecision:
    """Decision about how to handle an error.

    Attributes:
        action: The action to take
        category: The error category
        log_level: Logging level for the failure
        context: Additional context for logging/debugging
    """

    action: ErrorAction
    category: ErrorCategory
    log_level: str = "error"
    context: dict[str, Any] | None = None

    @property
    def is_data_error(self) -> bool:
        return self.category in DATA_CATEGORIES

    @property
    def aborts_batch(self) -> bool:
        return self.action is ErrorAction.ABORT_BATCH


# Error type to category mapping
ERROR_CATEGORIES: dict[type[Exception], ErrorCategory] = {}


def register_error_category(
    error_type: type[Exception],
    category: ErrorCategory,
) -> None:
    """Register an error type with its category.

    Args:
        error_type: The exception type
        category: The category to assign
    """
    ERROR_CATEGORIES[error_type] = category


def categorize_error(error: Exception) -> ErrorCategory:
    """Determine the category of an error.

    Registered types are checked first; otherwise the error's type name
    is matched against common driver naming patterns.
    """
    for error_type, category in ERROR_CATEGORIES.items():
        if isinstance(error, error_type):
            return category

    error_name = type(error).__name__.lower()
    if "timeout" in error_name:
        return ErrorCategory.TIMEOUT
    if any(p in error_name for p in ("connection", "network", "socket")):
        return ErrorCategory.NETWORK
    if any(p in error_name for p in ("operational", "interface", "database")):
        return ErrorCategory.PERSISTENCE

    return ErrorCategory.UNKNOWN


class ErrorHandler:
    """Decides the action for a failed event under a batch policy.

    Usage:
        handler = ErrorHandler(BatchErrorPolicy.SKIP)

        try:
            await handler_for(event).handle(decoded)
        except Exception as e:
            decision = handler.handle(e, {"event_hash": event.hash})
            if decision.aborts_batch:
                raise
            await dead_letters.dead_letter(event, e)
    """

    def __init__(self, policy: BatchErrorPolicy = BatchErrorPolicy.ABORT) -> None:
        self._policy = policy

    @property
    def policy(self) -> BatchErrorPolicy:
        return self._policy

    def handle(
        self,
        error: Exception,
        context: dict[str, Any] | None = None,
    ) -> ErrorDecision:
        """Classify an error and decide the action.

        Args:
            error: The exception raised while applying an event
            context: Optional context for logging

        Returns:
            ErrorDecision with action and details
        """
        category = categorize_error(error)

        if category in DATA_CATEGORIES and self._policy is BatchErrorPolicy.SKIP:
            logger.warning(
                "Data error - dead-lettering event: %s (category=%s, context=%s)",
                error,
                category.value,
                context,
            )
            return ErrorDecision(
                action=ErrorAction.DEAD_LETTER,
                category=category,
                log_level="warning",
                context=context,
            )

        logger.error(
            "Aborting batch: %s (category=%s, policy=%s, context=%s)",
            error,
            category.value,
            self._policy.value,
            context,
        )
        return ErrorDecision(
            action=ErrorAction.ABORT_BATCH,
            category=category,
            log_level="error",
            context=context,
        )


register_error_category(EventDecodeError, ErrorCategory.DECODE)
register_error_category(RecordNotFoundError, ErrorCategory.MISSING_RECORD)
register_error_category(ChainReadError, ErrorCategory.CHAIN_READ)
register_error_category(PersistenceError, ErrorCategory.PERSISTENCE)
register_error_category(WatermarkUpdateError, ErrorCategory.WATERMARK)

# Standard library exceptions raised by drivers
register_error_category(TimeoutError, ErrorCategory.TIMEOUT)
register_error_category(ConnectionError, ErrorCategory.NETWORK)
