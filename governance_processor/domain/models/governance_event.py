"""Per-event audit record for registry (TCR) events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from governance_processor.domain.models.block_data import BlockData


@dataclass(frozen=True)
class GovernanceEvent:
    """A registry event as it applied to one listing.

    Attributes:
        listing_address: Listing the event concerns (empty if unknown).
        event_type: Normalised event name.
        payload: Raw event payload.
        creation_date_ts: Event block timestamp.
        last_updated_date_ts: Event block timestamp.
        event_hash: Event hash (identity).
        block_data: Where the event was emitted.
    """

    listing_address: str
    event_type: str
    creation_date_ts: int
    last_updated_date_ts: int
    event_hash: str
    block_data: BlockData
    payload: dict[str, Any] = field(default_factory=dict)
