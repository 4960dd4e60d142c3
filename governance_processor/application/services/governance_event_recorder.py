"""Audit trail of registry events per listing."""

from __future__ import annotations

from typing import Any

from governance_processor.application.ports.governance_event_repository import (
    GovernanceEventRepository,
)
from governance_processor.domain.events.decoder import DecodedEvent
from governance_processor.domain.models.governance_event import GovernanceEvent


class GovernanceEventRecorder:
    """Writes one GovernanceEvent per registry event, keyed by event hash.

    The write is an upsert, so redelivered events overwrite their own
    record instead of duplicating it.
    """

    def __init__(self, repository: GovernanceEventRepository) -> None:
        self._repository = repository

    async def record(self, decoded: DecodedEvent[Any], listing_address: str) -> None:
        event = decoded.event
        await self._repository.update_governance_event(
            GovernanceEvent(
                listing_address=listing_address,
                event_type=decoded.name,
                creation_date_ts=event.timestamp,
                last_updated_date_ts=event.timestamp,
                event_hash=event.hash,
                block_data=event.block_data,
                payload=dict(event.payload),
            )
        )
