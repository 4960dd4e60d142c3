"""Per-voter participation in a poll."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class UserChallengeData:
    """A voter's commit/reveal record for one poll.

    Identity is (poll_id, user_address).

    Attributes:
        poll_id: Poll voted on.
        user_address: Voter address.
        poll_reveal_end_date: Reveal deadline of the poll, 0 if unknown.
        did_commit: Whether the voter committed a vote.
        did_reveal: Whether the voter revealed the vote.
        choice: Revealed choice (1 = for), None until revealed.
        salt: Revealed salt, None until revealed.
        num_tokens: Tokens committed.
        is_voter_winner: Whether the revealed choice matched the outcome.
        last_updated_date_ts: Event timestamp of the last change.
    """

    poll_id: int
    user_address: str
    poll_reveal_end_date: int = 0
    did_commit: bool = False
    did_reveal: bool = False
    choice: int | None = None
    salt: int | None = None
    num_tokens: int = 0
    is_voter_winner: bool | None = None
    last_updated_date_ts: int = 0

    def committed(self, num_tokens: int, updated_at: int) -> UserChallengeData:
        return replace(
            self, did_commit=True, num_tokens=num_tokens, last_updated_date_ts=updated_at
        )

    def revealed(
        self, choice: int, salt: int, num_tokens: int, updated_at: int
    ) -> UserChallengeData:
        return replace(
            self,
            did_reveal=True,
            choice=choice,
            salt=salt,
            num_tokens=num_tokens,
            last_updated_date_ts=updated_at,
        )

    def with_outcome(self, is_passed: bool, updated_at: int) -> UserChallengeData:
        """Mark whether a revealed vote was on the winning side."""
        if not self.did_reveal or self.choice is None:
            return self
        return replace(
            self,
            is_voter_winner=(self.choice == 1) == is_passed,
            last_updated_date_ts=updated_at,
        )
