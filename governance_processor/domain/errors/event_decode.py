"""Errors raised while decoding raw contract events into typed payloads.

A decode failure is a data error: the event itself is malformed, so
retrying the same batch will fail the same way.
"""

from __future__ import annotations

from governance_processor.domain.exceptions import ProcessorError


class EventDecodeError(ProcessorError):
    """Raised when a contract event payload is missing or has a bad field.

    Attributes:
        event_hash: Hash of the offending event.
        event_type: Normalised event name.
        field_name: Payload key that could not be decoded.
    """

    def __init__(
        self,
        event_hash: str,
        event_type: str,
        field_name: str,
        reason: str = "missing",
    ) -> None:
        """Initialize the decode error.

        Args:
            event_hash: Hash of the offending event.
            event_type: Normalised event name.
            field_name: Payload key that could not be decoded.
            reason: Short description of what was wrong with the field.
        """
        self.event_hash = event_hash
        self.event_type = event_type
        self.field_name = field_name
        self.reason = reason
        super().__init__(
            f"Cannot decode {event_type} event {event_hash}: "
            f"field '{field_name}' is {reason}"
        )
