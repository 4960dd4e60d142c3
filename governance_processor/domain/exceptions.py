"""Base exception classes for the governance processor domain layer."""


class ProcessorError(Exception):
    """Base exception for all domain errors.

    All processor-specific exceptions MUST inherit from this class so that
    the batch error policy can classify them consistently.

    Subclasses:
    - EventDecodeError
    - RecordNotFoundError (and per-aggregate variants)
    - ChainReadError
    - PersistenceError
    - WatermarkUpdateError
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
