"""MultiSigRepository port: wallets and their owner rows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.models.multisig import MultiSig, MultiSigOwner


@runtime_checkable
class MultiSigRepository(Protocol):
    """Repository interface for multisig wallets.

    Wallets are keyed by contract address. Owner rows are keyed by
    (owner address, multisig address).
    """

    async def get_multisig(self, contract_address: str) -> MultiSig | None:
        ...

    async def update_multisig(self, multisig: MultiSig) -> None:
        """Insert or replace a wallet."""
        ...

    async def get_owners(self, multisig_address: str) -> list[MultiSigOwner]:
        """Owner rows of a wallet, in insertion order."""
        ...

    async def add_owner(self, owner: MultiSigOwner) -> None:
        """Insert an owner row.

        Raises:
            DuplicateRecordError: If the row already exists.
        """
        ...

    async def remove_owner(self, owner: MultiSigOwner) -> None:
        """Delete an owner row. Deleting a missing row is a no-op."""
        ...
