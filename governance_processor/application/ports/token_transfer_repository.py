"""TokenTransferRepository port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.models.token_transfer import TokenTransfer


@runtime_checkable
class TokenTransferRepository(Protocol):
    """Repository interface for token transfers keyed by event hash."""

    async def get_transfer(self, event_hash: str) -> TokenTransfer | None:
        ...

    async def create_transfer(self, transfer: TokenTransfer) -> None:
        """Insert a new transfer.

        Raises:
            DuplicateRecordError: If a transfer with this event hash exists.
        """
        ...

    async def transfers_for_address(self, address: str) -> list[TokenTransfer]:
        """Transfers sent or received by an address, oldest first."""
        ...
