"""Base class for per-domain event handlers.

Each handler owns a slice of the governance state machine and declares the
(contract, event name) pairs it applies. The dispatcher routes a decoded
event to every handler that declares its pair.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from governance_processor.application.services.base import LoggingMixin
from governance_processor.domain.events.decoder import DecodedEvent, EventKey


class EventHandler(LoggingMixin, ABC):
    """A handler for one governance sub-domain.

    Subclasses set handled_events and implement handle(). Handlers write
    through the repositories immediately; there is no staging between
    events of a batch.
    """

    handled_events: ClassVar[frozenset[EventKey]] = frozenset()

    def handles(self, key: EventKey) -> bool:
        return key in self.handled_events

    @abstractmethod
    async def handle(self, decoded: DecodedEvent[Any]) -> bool:
        """Apply one event.

        Args:
            decoded: The event and its typed payload.

        Returns:
            True if the event changed (or re-confirmed) state, False if
            the handler had nothing to do for it.

        Raises:
            ProcessorError: On data or transport failures.
        """
        ...
