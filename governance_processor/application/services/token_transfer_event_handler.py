"""CVL token Transfer events."""

from __future__ import annotations

from typing import Any

from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.domain.events.decoder import DecodedEvent
from governance_processor.domain.events.payloads import TransferPayload
from governance_processor.domain.models import TokenTransfer


class TokenTransferEventHandler(EventHandler):
    """Records one TokenTransfer per Transfer event, keyed by event hash."""

    handled_events = frozenset({(ContractName.CVL_TOKEN, "Transfer")})

    def __init__(self, repositories: ProcessorRepositories) -> None:
        self._repos = repositories
        self._init_logger()

    async def handle(self, decoded: DecodedEvent[Any]) -> bool:
        payload: TransferPayload = decoded.payload
        event = decoded.event
        log = self._log_operation("transfer", event_hash=event.hash)

        if await self._repos.token_transfers.get_transfer(event.hash) is not None:
            log.debug("transfer_already_recorded")
            return False

        await self._repos.token_transfers.create_transfer(
            TokenTransfer(
                to_address=payload.to_address,
                from_address=payload.from_address,
                amount=payload.value,
                transfer_date=event.timestamp,
                event_hash=event.hash,
                block_data=event.block_data,
            )
        )
        log.info("transfer_recorded", amount=payload.value)
        return True
