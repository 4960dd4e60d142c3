"""Token transfer record (CVL token Transfer events)."""

from __future__ import annotations

from dataclasses import dataclass

from governance_processor.domain.models.block_data import BlockData


@dataclass(frozen=True)
class TokenTransfer:
    """A single token transfer.

    Attributes:
        to_address: Receiving wallet.
        from_address: Sending wallet.
        amount: Amount in the token's smallest unit.
        transfer_date: Block timestamp of the transfer.
        event_hash: Hash of the Transfer event (identity).
        block_data: Where the event was emitted.
    """

    to_address: str
    from_address: str
    amount: int
    transfer_date: int
    event_hash: str
    block_data: BlockData
