"""
Domain layer - pure governance types for the event processor.

This layer contains:
- Aggregate models (Listing, Challenge, Poll, Appeal, proposals, ...)
- Contract events and their typed payloads
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or workers.
"""

from governance_processor.domain.exceptions import ProcessorError

__all__: list[str] = ["ProcessorError"]
