"""In-memory GovernanceEventRepository for development and tests."""

from __future__ import annotations

from governance_processor.application.ports.governance_event_repository import (
    GovernanceEventRepository,
)
from governance_processor.domain.models.governance_event import GovernanceEvent


class GovernanceEventRepositoryStub(GovernanceEventRepository):
    """Audit records keyed by event hash."""

    def __init__(self) -> None:
        self._events: dict[str, GovernanceEvent] = {}

    async def get_governance_event(self, event_hash: str) -> GovernanceEvent | None:
        return self._events.get(event_hash)

    async def update_governance_event(self, event: GovernanceEvent) -> None:
        self._events[event.event_hash] = event

    async def events_for_listing(self, listing_address: str) -> list[GovernanceEvent]:
        return [e for e in self._events.values() if e.listing_address == listing_address]

    def count(self) -> int:
        return len(self._events)

    def reset(self) -> None:
        self._events.clear()
