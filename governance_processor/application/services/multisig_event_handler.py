"""MultiSig wallet events: wallet creation and owner changes.

Owner changes are checked against the wallet's current owners on chain,
so a stale addition (owner already removed again) or a stale removal
(owner re-added) does not change stored rows.
"""

from __future__ import annotations

from typing import Any

from governance_processor.application.ports.chain_reader import ChainReader
from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.domain.events.decoder import DecodedEvent
from governance_processor.domain.events.payloads import (
    MultiSigInstantiationPayload,
    MultiSigOwnerPayload,
)
from governance_processor.domain.models import MultiSig, MultiSigOwner


class MultiSigEventHandler(EventHandler):
    """Keeps MultiSig and MultiSigOwner records in line with the chain."""

    handled_events = frozenset(
        {
            (ContractName.MULTISIG_FACTORY, "ContractInstantiation"),
            (ContractName.MULTISIG, "OwnerAddition"),
            (ContractName.MULTISIG, "OwnerRemoval"),
        }
    )

    def __init__(
        self, repositories: ProcessorRepositories, chain_reader: ChainReader
    ) -> None:
        self._repos = repositories
        self._chain = chain_reader
        self._init_logger()

    async def handle(self, decoded: DecodedEvent[Any]) -> bool:
        payload = decoded.payload
        if isinstance(payload, MultiSigInstantiationPayload):
            await self._sync_wallet(payload.multisig_address)
            return True
        return await self._owner_changed(decoded, payload)

    async def _chain_owners(self, multisig_address: str) -> tuple[str, ...]:
        owners = await self._chain.read_multisig_owners(multisig_address)
        return tuple(dict.fromkeys(owner.lower() for owner in owners))

    async def _sync_wallet(self, multisig_address: str) -> None:
        """Write the wallet with its chain owners and add missing owner rows."""
        owners = await self._chain_owners(multisig_address)
        await self._repos.multisigs.update_multisig(
            MultiSig(contract_address=multisig_address, owner_addresses=owners)
        )
        rows = await self._repos.multisigs.get_owners(multisig_address)
        stored = {row.owner_address for row in rows}
        for owner in owners:
            if owner not in stored:
                await self._repos.multisigs.add_owner(
                    MultiSigOwner(owner_address=owner, multisig_address=multisig_address)
                )
        self._log_operation("sync_wallet", multisig_address=multisig_address).info(
            "multisig_synced", owners=len(owners)
        )

    async def _owner_changed(
        self, decoded: DecodedEvent[Any], payload: MultiSigOwnerPayload
    ) -> bool:
        address = payload.multisig_address
        wallet = await self._repos.multisigs.get_multisig(address)
        if wallet is None:
            await self._sync_wallet(address)
            return True

        chain_owners = await self._chain_owners(address)
        rows = await self._repos.multisigs.get_owners(address)
        stored = {row.owner_address for row in rows}
        row = MultiSigOwner(owner_address=payload.owner, multisig_address=address)
        log = self._log_operation(
            "owner_changed", multisig_address=address, owner=payload.owner
        )

        if decoded.name == "OwnerAddition":
            if payload.owner not in chain_owners or payload.owner in stored:
                log.debug("owner_addition_skipped")
                return False
            await self._repos.multisigs.add_owner(row)
        else:
            if payload.owner in chain_owners or payload.owner not in stored:
                log.debug("owner_removal_skipped")
                return False
            await self._repos.multisigs.remove_owner(row)

        await self._repos.multisigs.update_multisig(wallet.with_owners(chain_owners))
        log.info("multisig_owner_changed", change=decoded.name)
        return True
