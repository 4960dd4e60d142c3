"""Registry challenges: creation, resolution and reward claims.

Deposit arithmetic is guarded so that replaying a batch reproduces the
same listing: the stake is deducted only when the challenge is first
recorded, and the reward is credited only when the challenge first
resolves.
"""

from __future__ import annotations

from typing import Any

from governance_processor.application.ports.chain_reader import ChainReader
from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.application.services.governance_event_recorder import (
    GovernanceEventRecorder,
)
from governance_processor.application.services.poll_outcome import PollOutcomeRecorder
from governance_processor.application.services.reconciliation import ChainReconciler
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.domain.events.decoder import DecodedEvent
from governance_processor.domain.events.payloads import (
    ChallengeCreatedPayload,
    ChallengeResolvedPayload,
    RewardClaimedPayload,
)
from governance_processor.domain.models import Challenge, Poll

_TCR = ContractName.CIVIL_TCR


class ChallengeEventHandler(EventHandler):
    """Applies Challenge, ChallengeFailed, ChallengeSucceeded and RewardClaimed."""

    handled_events = frozenset(
        {
            (_TCR, "Challenge"),
            (_TCR, "ChallengeFailed"),
            (_TCR, "ChallengeSucceeded"),
            (_TCR, "RewardClaimed"),
        }
    )

    def __init__(
        self,
        repositories: ProcessorRepositories,
        chain_reader: ChainReader,
        reconciler: ChainReconciler,
        outcomes: PollOutcomeRecorder,
        recorder: GovernanceEventRecorder,
    ) -> None:
        self._repos = repositories
        self._chain = chain_reader
        self._reconciler = reconciler
        self._outcomes = outcomes
        self._recorder = recorder
        self._init_logger()

    async def handle(self, decoded: DecodedEvent[Any]) -> bool:
        payload = decoded.payload
        if isinstance(payload, ChallengeCreatedPayload):
            await self._challenge(decoded, payload)
            listing_address = payload.listing_address
        elif isinstance(payload, RewardClaimedPayload):
            listing_address = await self._reward_claimed(decoded, payload)
        else:
            await self._resolve(decoded, payload, kept=decoded.name == "ChallengeFailed")
            listing_address = payload.listing_address

        await self._recorder.record(decoded, listing_address)
        return True

    async def _challenge(
        self, decoded: DecodedEvent[Any], payload: ChallengeCreatedPayload
    ) -> None:
        ts = decoded.event.timestamp
        tcr = decoded.event.contract_address.lower()
        log = self._log_operation(
            "challenge",
            listing_address=payload.listing_address,
            challenge_id=payload.challenge_id,
        )

        challenge, created = await self._reconciler.record_challenge(
            tcr,
            payload.challenge_id,
            payload.listing_address,
            ts,
            challenger=payload.challenger,
            statement=payload.statement,
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

        listing = await self._reconciler.listing(tcr, payload.listing_address, ts)
        stake = challenge.stake if created else 0
        await self._repos.listings.update_listing(
            listing.with_challenge(payload.challenge_id, ts, stake=stake)
        )
        log.info("listing_challenged", stake_locked=stake)

    async def _resolve(
        self,
        decoded: DecodedEvent[Any],
        payload: ChallengeResolvedPayload,
        *,
        kept: bool,
    ) -> None:
        """Resolve a challenge.

        Args:
            decoded: The resolution event.
            payload: Its payload.
            kept: True when the listing survived (ChallengeFailed).
        """
        ts = decoded.event.timestamp
        tcr = decoded.event.contract_address.lower()
        log = self._log_operation(
            "resolve_challenge",
            listing_address=payload.listing_address,
            challenge_id=payload.challenge_id,
        )

        listing = await self._reconciler.listing(tcr, payload.listing_address, ts)
        challenge, _ = await self._reconciler.challenge(
            tcr, payload.challenge_id, payload.listing_address, ts
        )
        first_resolution = not challenge.resolved

        if kept:
            reward = 0
            if first_resolution:
                reward = await self._chain.determine_reward(tcr, payload.challenge_id)
            updated = listing.after_challenge_kept(ts, reward=reward)
        else:
            updated = listing.after_challenge_lost(ts)
        await self._repos.listings.update_listing(updated)

        await self._repos.challenges.update_challenge(
            await self._resolved_challenge(tcr, challenge, payload, ts)
        )
        await self._outcomes.record(challenge.poll_id, kept, ts)
        log.info(
            "challenge_resolved",
            outcome="failed" if kept else "succeeded",
            state=updated.last_governance_state.value,
            first_resolution=first_resolution,
        )

    async def _resolved_challenge(
        self,
        tcr: str,
        challenge: Challenge,
        payload: ChallengeResolvedPayload,
        ts: int,
    ) -> Challenge:
        """Resolve with final stake/reward pool unless an appeal was granted."""
        appeal = await self._repos.appeals.get_appeal(challenge.challenge_id)
        if appeal is not None and appeal.granted:
            return challenge.resolve(payload.total_tokens, ts)

        on_chain = await self._chain.read_on_chain_challenge(tcr, challenge.challenge_id)
        if on_chain is None:
            return challenge.resolve(
                payload.total_tokens, ts, reward_pool=payload.reward_pool
            )
        reward_pool = (
            payload.reward_pool if payload.reward_pool is not None else on_chain.reward_pool
        )
        return challenge.resolve(
            payload.total_tokens, ts, stake=on_chain.stake, reward_pool=reward_pool
        )

    async def _reward_claimed(
        self, decoded: DecodedEvent[Any], payload: RewardClaimedPayload
    ) -> str:
        """Refresh the challenge's reward pool and total tokens from chain.

        Returns:
            The listing address of the challenge, for the audit record.
        """
        ts = decoded.event.timestamp
        tcr = decoded.event.contract_address.lower()
        challenge, _ = await self._reconciler.challenge(tcr, payload.challenge_id, "", ts)
        on_chain = await self._chain.read_on_chain_challenge(tcr, payload.challenge_id)
        if on_chain is not None:
            await self._repos.challenges.update_challenge(
                challenge.with_rewards(on_chain.reward_pool, on_chain.total_tokens, ts)
            )
        self._log_operation(
            "reward_claimed", challenge_id=payload.challenge_id, voter=payload.voter
        ).info("reward_claimed", reward=payload.reward)
        return challenge.listing_address
