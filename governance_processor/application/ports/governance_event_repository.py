"""GovernanceEventRepository port (registry event audit log)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.models.governance_event import GovernanceEvent


@runtime_checkable
class GovernanceEventRepository(Protocol):
    """Repository interface for governance events keyed by event hash."""

    async def get_governance_event(self, event_hash: str) -> GovernanceEvent | None:
        ...

    async def update_governance_event(self, event: GovernanceEvent) -> None:
        """Insert or replace the audit record for an event hash."""
        ...

    async def events_for_listing(self, listing_address: str) -> list[GovernanceEvent]:
        """Audit records for a listing, ordered by creation timestamp."""
        ...
