"""Errors raised by external collaborators (store, chain, watermark).

These are transport/infra errors: the batch is aborted, the watermark is
not advanced and the next cycle retries the same window.
"""

from __future__ import annotations

from governance_processor.domain.exceptions import ProcessorError


class PersistenceError(ProcessorError):
    """Raised when the aggregate store cannot complete an operation.

    Attributes:
        operation: Name of the store operation that failed.
    """

    def __init__(self, operation: str, message: str = "") -> None:
        """Initialize the error.

        Args:
            operation: Name of the store operation that failed.
            message: Optional detail from the underlying driver.
        """
        self.operation = operation
        super().__init__(f"Persistence operation '{operation}' failed: {message}")


class DuplicateRecordError(PersistenceError):
    """Raised when create() is called for an identity that already exists."""

    def __init__(self, record_type: str, key: object) -> None:
        self.record_type = record_type
        self.key = key
        super().__init__("create", f"{record_type} {key!r} already exists")


class ChainReadError(ProcessorError):
    """Raised when an on-chain read fails.

    Attributes:
        contract_address: Contract that was being read.
        operation: Chain reader method that failed.
    """

    def __init__(self, contract_address: str, operation: str, message: str = "") -> None:
        """Initialize the error.

        Args:
            contract_address: Contract that was being read.
            operation: Chain reader method that failed.
            message: Optional detail from the RPC client.
        """
        self.contract_address = contract_address
        self.operation = operation
        super().__init__(
            f"Chain read '{operation}' on {contract_address} failed: {message}"
        )


class WatermarkUpdateError(ProcessorError):
    """Raised when persisting the watermark fails.

    The timestamp and the hash set are written by two separate calls, so a
    failure can leave one of them updated. The stage tells which one failed.

    Attributes:
        stage: Either "timestamp" or "hashes".
        timestamp: The timestamp that was being written.
    """

    def __init__(self, stage: str, timestamp: int, cause: Exception) -> None:
        """Initialize the error.

        Args:
            stage: Either "timestamp" or "hashes".
            timestamp: The timestamp that was being written.
            cause: The underlying store error.
        """
        self.stage = stage
        self.timestamp = timestamp
        self.cause = cause
        super().__init__(
            f"Error updating watermark {stage} for timestamp {timestamp}: {cause}"
        )
