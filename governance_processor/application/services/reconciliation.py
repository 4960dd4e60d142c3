"""ChainReconciler: fallback to on-chain state for missing aggregates.

When an event references an aggregate that was never recorded locally,
the reconciler rebuilds it from the chain reader. Listings, challenges
and appeals are persisted with create() as soon as they are rebuilt.
Parameter proposals are returned WITHOUT being persisted; the handler's
subsequent update (an upsert) is the durable write.

Every rebuilt record is stamped with the triggering event's timestamp.
"""

from __future__ import annotations

from dataclasses import replace

from governance_processor.application.ports.chain_reader import ChainReader
from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.ports.time_authority import (
    TimeAuthorityProtocol,
)
from governance_processor.application.services.base import LoggingMixin
from governance_processor.domain.errors import (
    AppealNotFoundError,
    ChallengeNotFoundError,
    ListingNotFoundError,
    ProposalNotFoundError,
)
from governance_processor.domain.models import (
    Appeal,
    Challenge,
    ChallengeType,
    GovernanceState,
    GovernmentParameterProposal,
    Listing,
    ParameterProposal,
    Poll,
)


class ChainReconciler(LoggingMixin):
    """Loads aggregates from the store, rebuilding them from chain if absent."""

    def __init__(
        self,
        repositories: ProcessorRepositories,
        chain_reader: ChainReader,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._repos = repositories
        self._chain = chain_reader
        self._time = time_authority
        self._init_logger()

    async def listing(
        self, tcr_address: str, listing_address: str, event_ts: int
    ) -> Listing:
        """Return the stored listing, reconciling it from chain if absent.

        A reconciled listing is APP_WHITELISTED when the registry reports
        it whitelisted (approval dated at the event), otherwise APPLIED.

        Raises:
            ListingNotFoundError: If the registry has no such listing.
            ChainReadError: If a chain read fails.
        """
        existing = await self._repos.listings.get_listing(listing_address)
        if existing is not None:
            return existing

        log = self._log_operation(
            "reconcile_listing", listing_address=listing_address, tcr=tcr_address
        )
        on_chain = await self._chain.read_on_chain_listing(tcr_address, listing_address)
        if on_chain is None:
            log.warning("listing_missing_on_chain")
            raise ListingNotFoundError(listing_address, {"tcr_address": tcr_address})
        newsroom = await self._chain.read_newsroom(listing_address)

        owner = newsroom.owner if newsroom is not None else on_chain.owner
        state = (
            GovernanceState.APP_WHITELISTED
            if on_chain.whitelisted
            else GovernanceState.APPLIED
        )
        listing = Listing(
            contract_address=listing_address,
            name=newsroom.name if newsroom is not None else "",
            whitelisted=on_chain.whitelisted,
            last_governance_state=state,
            charter_uri=newsroom.charter_uri if newsroom is not None else "",
            owner=owner or None,
            owner_addresses=(owner,) if owner else (),
            app_expiry=on_chain.app_expiry,
            unstaked_deposit=on_chain.unstaked_deposit,
            challenge_id=on_chain.challenge_id or None,
            approval_date_ts=event_ts if on_chain.whitelisted else None,
            created_date_ts=event_ts,
            last_updated_date_ts=event_ts,
        )
        await self._repos.listings.create_listing(listing)
        log.info("listing_reconciled", state=state.value)
        return listing

    async def challenge(
        self,
        contract_address: str,
        challenge_id: int,
        listing_address: str,
        event_ts: int,
        challenge_type: ChallengeType = ChallengeType.LISTING,
        statement: str = "",
    ) -> tuple[Challenge, bool]:
        """Return the stored challenge, reconciling it from chain if absent.

        Used by events that act on an existing challenge; creation events
        go through record_challenge().

        Returns:
            (challenge, created): created is True when the challenge was
            not in the store before this call.

        Raises:
            ChallengeNotFoundError: If the contract has no such challenge.
        """
        existing = await self._repos.challenges.get_challenge(challenge_id)
        if existing is not None:
            return existing, False

        on_chain = await self._chain.read_on_chain_challenge(
            contract_address, challenge_id
        )
        if on_chain is None:
            self._log_operation(
                "reconcile_challenge", challenge_id=challenge_id
            ).warning("challenge_missing_on_chain")
            raise ChallengeNotFoundError(
                challenge_id, {"contract_address": contract_address}
            )
        challenge = Challenge(
            challenge_id=challenge_id,
            listing_address=listing_address,
            statement=statement,
            reward_pool=on_chain.reward_pool,
            challenger=on_chain.challenger,
            resolved=on_chain.resolved,
            stake=on_chain.stake,
            total_tokens=on_chain.total_tokens,
            request_appeal_expiry=on_chain.request_appeal_expiry,
            challenge_type=challenge_type,
            last_updated_date_ts=event_ts,
        )
        await self._repos.challenges.create_challenge(challenge)
        self._log_operation(
            "reconcile_challenge",
            challenge_id=challenge_id,
            challenge_type=challenge_type.value,
        ).info("challenge_recorded")
        return challenge, True

    async def record_challenge(
        self,
        contract_address: str,
        challenge_id: int,
        listing_address: str,
        event_ts: int,
        *,
        challenger: str = "",
        statement: str = "",
        challenge_type: ChallengeType = ChallengeType.LISTING,
    ) -> tuple[Challenge, bool]:
        """Record a challenge announced by a creation event.

        The event itself identifies the challenge. Stake, reward pool,
        total tokens and the appeal deadline are filled in from the chain
        when it has the challenge, and left at zero otherwise.

        Returns:
            (challenge, created), as for challenge().
        """
        existing = await self._repos.challenges.get_challenge(challenge_id)
        if existing is not None:
            return existing, False

        log = self._log_operation(
            "record_challenge",
            challenge_id=challenge_id,
            challenge_type=challenge_type.value,
        )
        challenge = Challenge(
            challenge_id=challenge_id,
            listing_address=listing_address,
            statement=statement,
            challenger=challenger,
            challenge_type=challenge_type,
            last_updated_date_ts=event_ts,
        )
        on_chain = await self._chain.read_on_chain_challenge(
            contract_address, challenge_id
        )
        if on_chain is None:
            log.warning("challenge_recorded_without_chain_data")
        else:
            challenge = replace(
                challenge,
                reward_pool=on_chain.reward_pool,
                challenger=on_chain.challenger or challenger,
                resolved=on_chain.resolved,
                stake=on_chain.stake,
                total_tokens=on_chain.total_tokens,
                request_appeal_expiry=on_chain.request_appeal_expiry,
            )
        await self._repos.challenges.create_challenge(challenge)
        log.info("challenge_recorded", stake=challenge.stake)
        return challenge, True

    async def appeal(
        self, tcr_address: str, challenge_id: int, event_ts: int
    ) -> Appeal:
        """Return the stored appeal, reconciling it from chain if absent.

        Raises:
            AppealNotFoundError: If the registry has no appeal for the id.
        """
        existing = await self._repos.appeals.get_appeal(challenge_id)
        if existing is not None:
            return existing

        on_chain = await self._chain.read_on_chain_appeal(tcr_address, challenge_id)
        if on_chain is None:
            raise AppealNotFoundError(challenge_id, {"tcr_address": tcr_address})
        appeal = Appeal(
            original_challenge_id=challenge_id,
            requester=on_chain.requester,
            appeal_fee_paid=on_chain.appeal_fee_paid,
            appeal_phase_expiry=on_chain.appeal_phase_expiry,
            granted=on_chain.granted,
            open_to_challenge_expiry=on_chain.open_to_challenge_expiry or None,
            appeal_challenge_id=on_chain.appeal_challenge_id or None,
            last_updated_date_ts=event_ts,
        )
        await self._repos.appeals.create_appeal(appeal)
        self._log_operation("reconcile_appeal", challenge_id=challenge_id).info(
            "appeal_reconciled"
        )
        return appeal

    async def poll(self, poll_id: int, event_ts: int) -> Poll:
        """Return the stored poll, or rebuild it from chain.

        Unlike the other aggregates a poll is never fatal when missing: a
        poll the voting contract does not know is created bare so that its
        outcome can still be recorded. The result is not persisted.
        """
        existing = await self._repos.polls.get_poll(poll_id)
        if existing is not None:
            return existing
        on_chain = await self._chain.read_on_chain_poll(poll_id)
        if on_chain is None:
            return Poll(poll_id=poll_id, last_updated_date_ts=event_ts)
        return Poll(
            poll_id=poll_id,
            commit_end_date=on_chain.commit_end_date,
            reveal_end_date=on_chain.reveal_end_date,
            vote_quorum=on_chain.vote_quorum,
            votes_for=on_chain.votes_for,
            votes_against=on_chain.votes_against,
            last_updated_date_ts=event_ts,
        )

    async def proposal(
        self, contract_address: str, prop_id: str, event_ts: int
    ) -> ParameterProposal:
        """Return the stored proposal, or one rebuilt from chain (unsaved).

        A rebuilt proposal is never accepted; it is expired when the
        current time has reached its application expiry. It is stamped
        with the triggering event's timestamp.

        Raises:
            ProposalNotFoundError: If the parameterizer has no such proposal.
        """
        existing = await self._repos.proposals.get_proposal(prop_id)
        if existing is not None:
            return existing

        log = self._log_operation("reconcile_proposal", prop_id=prop_id)
        on_chain = await self._chain.read_on_chain_proposal(contract_address, prop_id)
        if on_chain is None:
            log.warning("proposal_missing_on_chain")
            raise ProposalNotFoundError(prop_id, {"contract_address": contract_address})
        now = self._time.epoch_seconds()
        proposal = ParameterProposal(
            prop_id=prop_id,
            name=on_chain.name,
            value=on_chain.value,
            deposit=on_chain.deposit,
            app_expiry=on_chain.app_expiry,
            challenge_id=on_chain.challenge_id,
            proposer=on_chain.proposer,
            accepted=False,
            expired=now >= on_chain.app_expiry,
            last_updated_date_ts=event_ts,
        )
        log.info("proposal_reconciled", name=proposal.name, expired=proposal.expired)
        return proposal

    async def government_proposal(
        self, contract_address: str, prop_id: str, event_ts: int
    ) -> GovernmentParameterProposal:
        """Government counterpart of proposal(); the result is not persisted."""
        existing = await self._repos.government_proposals.get_government_proposal(
            prop_id
        )
        if existing is not None:
            return existing

        on_chain = await self._chain.read_on_chain_government_proposal(
            contract_address, prop_id
        )
        if on_chain is None:
            raise ProposalNotFoundError(prop_id, {"contract_address": contract_address})
        now = self._time.epoch_seconds()
        return GovernmentParameterProposal(
            prop_id=prop_id,
            name=on_chain.name,
            value=on_chain.value,
            app_expiry=on_chain.app_expiry,
            poll_id=on_chain.poll_id,
            accepted=False,
            expired=now >= on_chain.app_expiry,
            last_updated_date_ts=event_ts,
        )
