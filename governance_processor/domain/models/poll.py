"""Poll aggregate (commit/reveal vote deciding a challenge or proposal)."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Poll:
    """A PLCR commit/reveal poll.

    Attributes:
        poll_id: On-chain poll id.
        commit_end_date: End of the commit phase (epoch seconds).
        reveal_end_date: End of the reveal phase (epoch seconds).
        vote_quorum: Percentage of votes-for required to pass.
        votes_for: Revealed tokens voting for.
        votes_against: Revealed tokens voting against.
        is_passed: Outcome; None until the deciding challenge resolves.
        last_updated_date_ts: Event timestamp of the last change.
    """

    poll_id: int
    commit_end_date: int = 0
    reveal_end_date: int = 0
    vote_quorum: int = 0
    votes_for: int = 0
    votes_against: int = 0
    is_passed: bool | None = None
    last_updated_date_ts: int = 0

    @property
    def is_resolved(self) -> bool:
        return self.is_passed is not None

    def with_schedule(
        self,
        commit_end_date: int,
        reveal_end_date: int,
        vote_quorum: int,
        updated_at: int,
    ) -> Poll:
        """Refresh dates and quorum, keeping tallies and outcome."""
        return replace(
            self,
            commit_end_date=commit_end_date,
            reveal_end_date=reveal_end_date,
            vote_quorum=vote_quorum,
            last_updated_date_ts=updated_at,
        )

    def with_votes_for(self, votes_for: int, updated_at: int) -> Poll:
        return replace(self, votes_for=votes_for, last_updated_date_ts=updated_at)

    def with_votes_against(self, votes_against: int, updated_at: int) -> Poll:
        return replace(
            self, votes_against=votes_against, last_updated_date_ts=updated_at
        )

    def with_result(self, is_passed: bool, updated_at: int) -> Poll:
        return replace(self, is_passed=is_passed, last_updated_date_ts=updated_at)
