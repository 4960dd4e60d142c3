"""Appeals of challenge outcomes and challenges against granted appeals."""

from __future__ import annotations

from typing import Any

from governance_processor.application.ports.chain_reader import ChainReader
from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.application.services.governance_event_recorder import (
    GovernanceEventRecorder,
)
from governance_processor.application.services.reconciliation import ChainReconciler
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.domain.events.decoder import DecodedEvent
from governance_processor.domain.events.payloads import (
    AppealDecisionPayload,
    AppealGrantedPayload,
    AppealRequestedPayload,
    ChallengeResolvedPayload,
    GrantedAppealChallengedPayload,
)
from governance_processor.domain.models import Appeal, ChallengeType, GovernanceState

_TCR = ContractName.CIVIL_TCR

_DECISION_STATES: dict[str, GovernanceState] = {
    "GrantedAppealConfirmed": GovernanceState.GRANTED_APPEAL_CONFIRMED,
    "GrantedAppealOverturned": GovernanceState.GRANTED_APPEAL_OVERTURNED,
}


class AppealEventHandler(EventHandler):
    """Applies appeal events to appeals, challenges and listings.

    Overturn and decision events resolve the challenge named by the
    event's ChallengeID.
    """

    handled_events = frozenset(
        {
            (_TCR, "AppealRequested"),
            (_TCR, "AppealGranted"),
            (_TCR, "GrantedAppealChallenged"),
            (_TCR, "GrantedAppealConfirmed"),
            (_TCR, "GrantedAppealOverturned"),
            (_TCR, "FailedChallengeOverturned"),
            (_TCR, "SuccessfulChallengeOverturned"),
        }
    )

    def __init__(
        self,
        repositories: ProcessorRepositories,
        chain_reader: ChainReader,
        reconciler: ChainReconciler,
        recorder: GovernanceEventRecorder,
    ) -> None:
        self._repos = repositories
        self._chain = chain_reader
        self._reconciler = reconciler
        self._recorder = recorder
        self._init_logger()

    async def handle(self, decoded: DecodedEvent[Any]) -> bool:
        payload = decoded.payload
        if isinstance(payload, AppealRequestedPayload):
            await self._requested(decoded, payload)
        elif isinstance(payload, AppealGrantedPayload):
            await self._granted(decoded, payload)
        elif isinstance(payload, GrantedAppealChallengedPayload):
            await self._granted_appeal_challenged(decoded, payload)
        elif isinstance(payload, AppealDecisionPayload):
            await self._decided(decoded, payload)
        else:
            await self._overturned(decoded, payload)

        await self._recorder.record(decoded, payload.listing_address)
        return True

    async def _set_listing_state(
        self, decoded: DecodedEvent[Any], listing_address: str, state: GovernanceState
    ) -> None:
        ts = decoded.event.timestamp
        listing = await self._reconciler.listing(
            decoded.event.contract_address.lower(), listing_address, ts
        )
        await self._repos.listings.update_listing(listing.with_state(state, ts))

    async def _requested(
        self, decoded: DecodedEvent[Any], payload: AppealRequestedPayload
    ) -> None:
        ts = decoded.event.timestamp
        tcr = decoded.event.contract_address.lower()
        existing = await self._repos.appeals.get_appeal(payload.challenge_id)
        on_chain = await self._chain.read_on_chain_appeal(tcr, payload.challenge_id)
        phase_expiry = on_chain.appeal_phase_expiry if on_chain is not None else 0

        appeal = Appeal(
            original_challenge_id=payload.challenge_id,
            requester=payload.requester,
            appeal_fee_paid=payload.appeal_fee_paid,
            appeal_phase_expiry=phase_expiry,
            statement=payload.statement,
            last_updated_date_ts=ts,
        )
        if existing is None:
            await self._repos.appeals.create_appeal(appeal)
        else:
            await self._repos.appeals.update_appeal(appeal)

        await self._set_listing_state(
            decoded, payload.listing_address, GovernanceState.APPEAL_REQUESTED
        )
        self._log_operation(
            "appeal_requested", challenge_id=payload.challenge_id
        ).info("appeal_requested", requester=payload.requester)

    async def _granted(
        self, decoded: DecodedEvent[Any], payload: AppealGrantedPayload
    ) -> None:
        ts = decoded.event.timestamp
        tcr = decoded.event.contract_address.lower()
        appeal = await self._reconciler.appeal(tcr, payload.challenge_id, ts)
        on_chain = await self._chain.read_on_chain_appeal(tcr, payload.challenge_id)
        expiry = (
            on_chain.open_to_challenge_expiry
            if on_chain is not None
            else appeal.open_to_challenge_expiry or 0
        )
        await self._repos.appeals.update_appeal(appeal.grant(expiry, ts))
        await self._set_listing_state(
            decoded, payload.listing_address, GovernanceState.APPEAL_GRANTED
        )
        self._log_operation("appeal_granted", challenge_id=payload.challenge_id).info(
            "appeal_granted", open_to_challenge_expiry=expiry
        )

    async def _granted_appeal_challenged(
        self, decoded: DecodedEvent[Any], payload: GrantedAppealChallengedPayload
    ) -> None:
        ts = decoded.event.timestamp
        tcr = decoded.event.contract_address.lower()
        await self._reconciler.record_challenge(
            tcr,
            payload.appeal_challenge_id,
            payload.listing_address,
            ts,
            challenge_type=ChallengeType.APPEAL,
            statement=payload.statement,
        )
        appeal = await self._reconciler.appeal(tcr, payload.challenge_id, ts)
        await self._repos.appeals.update_appeal(
            appeal.with_appeal_challenge(payload.appeal_challenge_id, ts)
        )
        await self._set_listing_state(
            decoded, payload.listing_address, GovernanceState.GRANTED_APPEAL_CHALLENGED
        )

    async def _resolve_challenge(
        self,
        decoded: DecodedEvent[Any],
        challenge_id: int,
        listing_address: str,
        total_tokens: int,
        reward_pool: int | None,
    ) -> None:
        ts = decoded.event.timestamp
        challenge, _ = await self._reconciler.challenge(
            decoded.event.contract_address.lower(), challenge_id, listing_address, ts
        )
        await self._repos.challenges.update_challenge(
            challenge.resolve(total_tokens, ts, reward_pool=reward_pool)
        )

    async def _decided(
        self, decoded: DecodedEvent[Any], payload: AppealDecisionPayload
    ) -> None:
        await self._resolve_challenge(
            decoded,
            payload.challenge_id,
            payload.listing_address,
            payload.total_tokens,
            payload.reward_pool,
        )
        state = _DECISION_STATES[decoded.name]
        await self._set_listing_state(decoded, payload.listing_address, state)
        self._log_operation(
            "appeal_decided",
            challenge_id=payload.challenge_id,
            appeal_challenge_id=payload.appeal_challenge_id,
        ).info("granted_appeal_decided", state=state.value)

    async def _overturned(
        self, decoded: DecodedEvent[Any], payload: ChallengeResolvedPayload
    ) -> None:
        ts = decoded.event.timestamp
        await self._resolve_challenge(
            decoded,
            payload.challenge_id,
            payload.listing_address,
            payload.total_tokens,
            payload.reward_pool,
        )
        listing = await self._reconciler.listing(
            decoded.event.contract_address.lower(), payload.listing_address, ts
        )
        if decoded.name == "SuccessfulChallengeOverturned":
            updated = listing.after_challenge_kept(ts)
        else:
            updated = listing.after_challenge_lost(ts)
        await self._repos.listings.update_listing(updated)
        self._log_operation(
            "challenge_overturned", challenge_id=payload.challenge_id
        ).info("challenge_overturned", state=updated.last_governance_state.value)
