"""Block coordinates of the log that produced an event."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BlockData:
    """Where an event was emitted on chain.

    Attributes:
        block_number: Block height.
        tx_hash: Transaction hash.
        tx_index: Position of the transaction in the block.
        block_hash: Block hash.
        log_index: Position of the log in the block.
    """

    block_number: int
    tx_hash: str
    tx_index: int
    block_hash: str
    log_index: int
