"""PLCR voting events: poll creation, vote commits and vote reveals."""

from __future__ import annotations

from typing import Any

from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.domain.errors import PollNotFoundError
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.domain.events.decoder import DecodedEvent
from governance_processor.domain.events.payloads import (
    PollCreatedPayload,
    VoteCommittedPayload,
    VoteRevealedPayload,
)
from governance_processor.domain.models import Poll, UserChallengeData

_PLCR = ContractName.PLCR_VOTING


class VotingEventHandler(EventHandler):
    """Maintains polls and per-voter participation records.

    VoteRevealed carries the poll's running tallies, so votes are written
    as absolute values rather than accumulated.
    """

    handled_events = frozenset(
        {
            (_PLCR, "PollCreated"),
            (_PLCR, "VoteCommitted"),
            (_PLCR, "VoteRevealed"),
        }
    )

    def __init__(self, repositories: ProcessorRepositories) -> None:
        self._repos = repositories
        self._init_logger()

    async def handle(self, decoded: DecodedEvent[Any]) -> bool:
        payload = decoded.payload
        ts = decoded.event.timestamp
        if isinstance(payload, PollCreatedPayload):
            await self._poll_created(payload, ts)
        elif isinstance(payload, VoteCommittedPayload):
            await self._vote_committed(payload, ts)
        else:
            await self._vote_revealed(payload, ts)
        return True

    async def _poll_created(self, payload: PollCreatedPayload, ts: int) -> None:
        existing = await self._repos.polls.get_poll(payload.poll_id)
        if existing is None:
            await self._repos.polls.create_poll(
                Poll(
                    poll_id=payload.poll_id,
                    commit_end_date=payload.commit_end_date,
                    reveal_end_date=payload.reveal_end_date,
                    vote_quorum=payload.vote_quorum,
                    last_updated_date_ts=ts,
                )
            )
        else:
            await self._repos.polls.update_poll(
                existing.with_schedule(
                    payload.commit_end_date,
                    payload.reveal_end_date,
                    payload.vote_quorum,
                    ts,
                )
            )
        self._log_operation("poll_created", poll_id=payload.poll_id).info(
            "poll_recorded", existed=existing is not None
        )

    async def _vote_committed(self, payload: VoteCommittedPayload, ts: int) -> None:
        poll = await self._repos.polls.get_poll(payload.poll_id)
        record = await self._repos.user_challenge_data.get_user_challenge_data(
            payload.poll_id, payload.voter
        )
        if record is None:
            record = UserChallengeData(
                poll_id=payload.poll_id,
                user_address=payload.voter,
                poll_reveal_end_date=poll.reveal_end_date if poll else 0,
            )
        await self._repos.user_challenge_data.update_user_challenge_data(
            record.committed(payload.num_tokens, ts)
        )

    async def _vote_revealed(self, payload: VoteRevealedPayload, ts: int) -> None:
        poll = await self._repos.polls.get_poll(payload.poll_id)
        if poll is None:
            raise PollNotFoundError(payload.poll_id, {"voter": payload.voter})

        if payload.choice == 1:
            poll = poll.with_votes_for(payload.votes_for, ts)
        else:
            poll = poll.with_votes_against(payload.votes_against, ts)
        await self._repos.polls.update_poll(poll)

        record = await self._repos.user_challenge_data.get_user_challenge_data(
            payload.poll_id, payload.voter
        )
        if record is None:
            record = UserChallengeData(
                poll_id=payload.poll_id,
                user_address=payload.voter,
                poll_reveal_end_date=poll.reveal_end_date,
                did_commit=True,
            )
        record = record.revealed(payload.choice, payload.salt, payload.num_tokens, ts)
        if poll.is_passed is not None:
            record = record.with_outcome(poll.is_passed, ts)
        await self._repos.user_challenge_data.update_user_challenge_data(record)
        self._log_operation(
            "vote_revealed", poll_id=payload.poll_id, voter=payload.voter
        ).debug("vote_revealed", choice=payload.choice)
