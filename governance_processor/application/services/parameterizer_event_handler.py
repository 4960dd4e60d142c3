"""Parameterizer events: reparameterization proposals and their challenges.

Proposal transitions load the proposal by prop id and fall back to the
chain when it is absent (ChainReconciler.proposal). The parameter and the
proposal are then written by two independent update calls, parameter
first; a failure between them leaves the parameter promoted and the
proposal not yet marked accepted, and the batch is retried.
"""

from __future__ import annotations

from typing import Any

from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.application.services.poll_outcome import PollOutcomeRecorder
from governance_processor.application.services.reconciliation import ChainReconciler
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.domain.events.decoder import DecodedEvent
from governance_processor.domain.events.payloads import (
    ProposalChallengedPayload,
    ProposalChallengeResolvedPayload,
    ProposalCreatedPayload,
    ProposalPayload,
)
from governance_processor.domain.models import (
    ChallengeType,
    Parameter,
    ParameterProposal,
    Poll,
)

# A proposal whose challenge fails is only applied if processed within
# this window after its application expiry.
PROCESS_BY_GRACE_SECONDS = 604800

_PARAMETERIZER = ContractName.PARAMETERIZER


class ParameterizerEventHandler(EventHandler):
    """Applies parameterizer contract events."""

    handled_events = frozenset(
        {
            (_PARAMETERIZER, "ReparameterizationProposal"),
            (_PARAMETERIZER, "NewChallenge"),
            (_PARAMETERIZER, "ChallengeFailed"),
            (_PARAMETERIZER, "ChallengeSucceeded"),
            (_PARAMETERIZER, "ProposalAccepted"),
            (_PARAMETERIZER, "ProposalExpired"),
        }
    )

    def __init__(
        self,
        repositories: ProcessorRepositories,
        reconciler: ChainReconciler,
        outcomes: PollOutcomeRecorder,
    ) -> None:
        self._repos = repositories
        self._reconciler = reconciler
        self._outcomes = outcomes
        self._init_logger()

    async def handle(self, decoded: DecodedEvent[Any]) -> bool:
        payload = decoded.payload
        name = decoded.name
        if isinstance(payload, ProposalCreatedPayload):
            await self._proposed(decoded, payload)
        elif isinstance(payload, ProposalChallengedPayload):
            await self._challenged(decoded, payload)
        elif isinstance(payload, ProposalChallengeResolvedPayload):
            await self._challenge_resolved(
                decoded, payload, passed=name == "ChallengeFailed"
            )
        elif name == "ProposalAccepted":
            await self._accepted(decoded, payload)
        else:
            await self._expired(decoded, payload)
        return True

    async def _proposal(self, decoded: DecodedEvent[Any], prop_id: str) -> ParameterProposal:
        return await self._reconciler.proposal(
            decoded.event.contract_address.lower(), prop_id, decoded.event.timestamp
        )

    async def _promote(self, proposal: ParameterProposal) -> None:
        """Copy the proposal's value into the live parameter."""
        existing = await self._repos.parameters.get_parameter(proposal.name)
        parameter = Parameter(name=proposal.name, value=proposal.value)
        if existing is None:
            await self._repos.parameters.create_parameter(parameter)
        else:
            await self._repos.parameters.update_parameter(parameter)

    async def _proposed(
        self, decoded: DecodedEvent[Any], payload: ProposalCreatedPayload
    ) -> None:
        proposal = ParameterProposal(
            prop_id=payload.prop_id,
            name=payload.name,
            value=payload.value,
            deposit=payload.deposit,
            app_expiry=payload.app_end_date,
            challenge_id=0,
            proposer=payload.proposer,
            last_updated_date_ts=decoded.event.timestamp,
        )
        if await self._repos.proposals.get_proposal(payload.prop_id) is None:
            await self._repos.proposals.create_proposal(proposal)
        else:
            await self._repos.proposals.update_proposal(proposal)
        self._log_operation("propose", prop_id=payload.prop_id).info(
            "proposal_created", name=payload.name, value=payload.value
        )

    async def _challenged(
        self, decoded: DecodedEvent[Any], payload: ProposalChallengedPayload
    ) -> None:
        ts = decoded.event.timestamp
        await self._reconciler.record_challenge(
            decoded.event.contract_address.lower(),
            payload.challenge_id,
            "",
            ts,
            challenger=payload.challenger,
            challenge_type=ChallengeType.PARAMETERIZER,
        )
        if await self._repos.polls.get_poll(payload.challenge_id) is None:
            await self._repos.polls.create_poll(
                Poll(
                    poll_id=payload.challenge_id,
                    commit_end_date=payload.commit_end_date,
                    reveal_end_date=payload.reveal_end_date,
                    last_updated_date_ts=ts,
                )
            )
        proposal = await self._proposal(decoded, payload.prop_id)
        await self._repos.proposals.update_proposal(
            proposal.with_challenge(payload.challenge_id, ts)
        )
        self._log_operation(
            "challenge_proposal",
            prop_id=payload.prop_id,
            challenge_id=payload.challenge_id,
        ).info("proposal_challenged")

    async def _challenge_resolved(
        self,
        decoded: DecodedEvent[Any],
        payload: ProposalChallengeResolvedPayload,
        *,
        passed: bool,
    ) -> None:
        """Resolve a proposal challenge.

        Args:
            decoded: The resolution event.
            payload: Its payload.
            passed: True when the proposal survived (ChallengeFailed).
        """
        ts = decoded.event.timestamp
        log = self._log_operation(
            "resolve_proposal_challenge",
            prop_id=payload.prop_id,
            challenge_id=payload.challenge_id,
        )
        await self._outcomes.record(payload.challenge_id, passed, ts)

        proposal = await self._proposal(decoded, payload.prop_id)
        if passed:
            promoted = ts < proposal.app_expiry + PROCESS_BY_GRACE_SECONDS
            if promoted:
                await self._promote(proposal)
            else:
                log.warning("proposal_past_process_by", app_expiry=proposal.app_expiry)
            await self._repos.proposals.update_proposal(proposal.accept(ts))
        else:
            await self._repos.proposals.update_proposal(proposal.expire(ts))

        challenge, _ = await self._reconciler.challenge(
            decoded.event.contract_address.lower(),
            payload.challenge_id,
            "",
            ts,
            challenge_type=ChallengeType.PARAMETERIZER,
        )
        await self._repos.challenges.update_challenge(
            challenge.resolve(payload.total_tokens, ts, reward_pool=payload.reward_pool)
        )
        log.info("proposal_challenge_resolved", outcome="failed" if passed else "succeeded")

    async def _accepted(self, decoded: DecodedEvent[Any], payload: ProposalPayload) -> None:
        proposal = await self._proposal(decoded, payload.prop_id)
        await self._promote(proposal)
        await self._repos.proposals.update_proposal(
            proposal.accept(decoded.event.timestamp)
        )
        self._log_operation("accept_proposal", prop_id=payload.prop_id).info(
            "parameter_updated", name=proposal.name, value=proposal.value
        )

    async def _expired(self, decoded: DecodedEvent[Any], payload: ProposalPayload) -> None:
        proposal = await self._proposal(decoded, payload.prop_id)
        await self._repos.proposals.update_proposal(
            proposal.expire(decoded.event.timestamp)
        )
