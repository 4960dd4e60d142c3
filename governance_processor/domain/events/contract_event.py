"""Raw contract event as retrieved from the crawler's event log."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from governance_processor.domain.events.contract_names import normalize_event_name
from governance_processor.domain.models.block_data import BlockData


@dataclass(frozen=True)
class ContractEvent:
    """An immutable smart-contract event.

    Within one timestamp, events are ordered by
    (block_number, tx_index, log_index) as emitted by the source.

    Attributes:
        contract_name: Crawler contract name (e.g. "CivilTCRContract").
        event_type: Raw event name (may carry a leading underscore).
        contract_address: Emitting contract address.
        timestamp: Block timestamp (epoch seconds).
        hash: Unique event hash.
        payload: Decoded log arguments keyed by field name.
        block_number: Block height.
        tx_hash: Transaction hash.
        tx_index: Transaction index in the block.
        block_hash: Block hash.
        log_index: Log index in the block.
    """

    contract_name: str
    event_type: str
    contract_address: str
    timestamp: int
    hash: str
    payload: dict[str, Any] = field(default_factory=dict, hash=False)
    block_number: int = 0
    tx_hash: str = ""
    tx_index: int = 0
    block_hash: str = ""
    log_index: int = 0

    @property
    def name(self) -> str:
        """Normalised event name."""
        return normalize_event_name(self.event_type)

    @property
    def ordering_key(self) -> tuple[int, int, int, int]:
        """Source ordering: timestamp, then block/tx/log position."""
        return (self.timestamp, self.block_number, self.tx_index, self.log_index)

    @property
    def block_data(self) -> BlockData:
        return BlockData(
            block_number=self.block_number,
            tx_hash=self.tx_hash,
            tx_index=self.tx_index,
            block_hash=self.block_hash,
            log_index=self.log_index,
        )
