"""Government parameterizer events (appellate-controlled parameters)."""

from __future__ import annotations

from typing import Any

from governance_processor.application.ports.chain_reader import ChainReader
from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.application.services.poll_outcome import PollOutcomeRecorder
from governance_processor.application.services.reconciliation import ChainReconciler
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.domain.events.decoder import DecodedEvent
from governance_processor.domain.events.payloads import (
    GovernmentProposalCreatedPayload,
    ProposalPayload,
)
from governance_processor.domain.models import (
    GovernmentParameter,
    GovernmentParameterProposal,
)

_GOVERNMENT = ContractName.GOVERNMENT


class GovernmentEventHandler(EventHandler):
    """Applies government contract events.

    Same pattern as the parameterizer: a missing proposal is rebuilt from
    chain without a create, and the government parameter and proposal are
    written by two independent updates.
    """

    handled_events = frozenset(
        {
            (_GOVERNMENT, "GovtReparameterizationProposal"),
            (_GOVERNMENT, "ProposalPassed"),
            (_GOVERNMENT, "ProposalFailed"),
            (_GOVERNMENT, "ProposalExpired"),
        }
    )

    def __init__(
        self,
        repositories: ProcessorRepositories,
        chain_reader: ChainReader,
        reconciler: ChainReconciler,
        outcomes: PollOutcomeRecorder,
    ) -> None:
        self._repos = repositories
        self._chain = chain_reader
        self._reconciler = reconciler
        self._outcomes = outcomes
        self._init_logger()

    async def handle(self, decoded: DecodedEvent[Any]) -> bool:
        payload = decoded.payload
        if isinstance(payload, GovernmentProposalCreatedPayload):
            await self._proposed(decoded, payload)
            return True

        ts = decoded.event.timestamp
        proposal = await self._reconciler.government_proposal(
            decoded.event.contract_address.lower(), payload.prop_id, ts
        )
        if decoded.name == "ProposalPassed":
            await self._promote(proposal)
            await self._repos.government_proposals.update_government_proposal(
                proposal.accept(ts)
            )
        else:
            await self._repos.government_proposals.update_government_proposal(
                proposal.expire(ts)
            )

        if decoded.name != "ProposalExpired" and proposal.poll_id:
            await self._outcomes.record(
                proposal.poll_id, decoded.name == "ProposalPassed", ts
            )
        self._log_operation(
            "government_proposal", prop_id=payload.prop_id
        ).info("government_proposal_closed", outcome=decoded.name)
        return True

    async def _proposed(
        self, decoded: DecodedEvent[Any], payload: GovernmentProposalCreatedPayload
    ) -> None:
        on_chain = await self._chain.read_on_chain_government_proposal(
            decoded.event.contract_address.lower(), payload.prop_id
        )
        proposal = GovernmentParameterProposal(
            prop_id=payload.prop_id,
            name=payload.name,
            value=payload.value,
            app_expiry=on_chain.app_expiry if on_chain is not None else 0,
            poll_id=payload.poll_id,
            last_updated_date_ts=decoded.event.timestamp,
        )
        repo = self._repos.government_proposals
        if await repo.get_government_proposal(payload.prop_id) is None:
            await repo.create_government_proposal(proposal)
        else:
            await repo.update_government_proposal(proposal)

    async def _promote(self, proposal: GovernmentParameterProposal) -> None:
        await self._repos.government_parameters.update_government_parameter(
            GovernmentParameter(name=proposal.name, value=proposal.value)
        )
