"""In-memory MultiSigRepository for development and tests."""

from __future__ import annotations

from governance_processor.application.ports.multisig_repository import (
    MultiSigRepository,
)
from governance_processor.domain.errors import DuplicateRecordError
from governance_processor.domain.models.multisig import MultiSig, MultiSigOwner


class MultiSigRepositoryStub(MultiSigRepository):
    """Stores wallets by address and owner rows as an ordered list."""

    def __init__(self) -> None:
        self._wallets: dict[str, MultiSig] = {}
        self._owners: list[MultiSigOwner] = []

    async def get_multisig(self, contract_address: str) -> MultiSig | None:
        return self._wallets.get(contract_address)

    async def update_multisig(self, multisig: MultiSig) -> None:
        self._wallets[multisig.contract_address] = multisig

    async def get_owners(self, multisig_address: str) -> list[MultiSigOwner]:
        return [o for o in self._owners if o.multisig_address == multisig_address]

    async def add_owner(self, owner: MultiSigOwner) -> None:
        if owner in self._owners:
            raise DuplicateRecordError(
                "multisig_owner", (owner.owner_address, owner.multisig_address)
            )
        self._owners.append(owner)

    async def remove_owner(self, owner: MultiSigOwner) -> None:
        if owner in self._owners:
            self._owners.remove(owner)

    def reset(self) -> None:
        self._wallets.clear()
        self._owners.clear()
