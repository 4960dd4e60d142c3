"""In-memory TokenTransferRepository for development and tests."""

from __future__ import annotations

from governance_processor.application.ports.token_transfer_repository import (
    TokenTransferRepository,
)
from governance_processor.domain.errors import DuplicateRecordError
from governance_processor.domain.models.token_transfer import TokenTransfer


class TokenTransferRepositoryStub(TokenTransferRepository):
    """Stores transfers keyed by event hash, in insertion order."""

    def __init__(self) -> None:
        self._transfers: dict[str, TokenTransfer] = {}

    async def get_transfer(self, event_hash: str) -> TokenTransfer | None:
        return self._transfers.get(event_hash)

    async def create_transfer(self, transfer: TokenTransfer) -> None:
        if transfer.event_hash in self._transfers:
            raise DuplicateRecordError("token_transfer", transfer.event_hash)
        self._transfers[transfer.event_hash] = transfer

    async def transfers_for_address(self, address: str) -> list[TokenTransfer]:
        address = address.lower()
        return [
            t
            for t in self._transfers.values()
            if address in (t.from_address.lower(), t.to_address.lower())
        ]

    def reset(self) -> None:
        self._transfers.clear()
