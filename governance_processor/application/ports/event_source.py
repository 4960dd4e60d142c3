"""EventSource port: retrieval of crawled contract events.

Usage:
    events = await source.retrieve_events(
        from_timestamp=watermark.last_timestamp,
        exclude_hashes=watermark.hashes,
    )
"""

from __future__ import annotations

from collections.abc import Collection
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.events.contract_event import ContractEvent


@runtime_checkable
class EventSource(Protocol):
    """Read side of the crawler's event log."""

    async def retrieve_events(
        self,
        from_timestamp: int,
        exclude_hashes: Collection[str],
        contract_address: str | None = None,
    ) -> list[ContractEvent]:
        """Retrieve events at or after a timestamp.

        Events are returned in the source's stable order: timestamp
        ascending, then (block_number, tx_index, log_index). Events whose
        hash is in exclude_hashes are omitted.

        Args:
            from_timestamp: Inclusive lower bound (epoch seconds).
            exclude_hashes: Hashes already processed at from_timestamp.
            contract_address: Only events emitted by this contract, if given.

        Returns:
            Ordered list of events, empty when nothing is new.

        Raises:
            PersistenceError: If the event log cannot be read.
        """
        ...
