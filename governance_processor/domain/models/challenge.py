"""Challenge aggregate.

A challenge disputes a listing (or a parameter proposal, or a granted
appeal) and is decided by the Poll with the same id.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class ChallengeType(Enum):
    """What the challenge disputes."""

    LISTING = "listing"
    APPEAL = "appeal"
    PARAMETERIZER = "parameterizer"
    GOVERNMENT = "government"


@dataclass(frozen=True)
class Challenge:
    """A challenge and its economic state.

    Attributes:
        challenge_id: On-chain challenge id (also the poll id).
        listing_address: Challenged listing, empty for parameter challenges.
        statement: Challenger's statement (event "Data" field).
        reward_pool: Tokens reserved for winning voters.
        challenger: Challenger address.
        resolved: Whether the challenge has been resolved.
        stake: Tokens staked by the challenger.
        total_tokens: Tokens that voted for the winning side.
        request_appeal_expiry: Deadline for requesting an appeal.
        challenge_type: What the challenge disputes.
        last_updated_date_ts: Event timestamp of the last change.
    """

    challenge_id: int
    listing_address: str
    statement: str = ""
    reward_pool: int = 0
    challenger: str = ""
    resolved: bool = False
    stake: int = 0
    total_tokens: int = 0
    request_appeal_expiry: int = 0
    challenge_type: ChallengeType = ChallengeType.LISTING
    last_updated_date_ts: int = 0

    @property
    def poll_id(self) -> int:
        """Poll that decides this challenge (same id by construction)."""
        return self.challenge_id

    def resolve(
        self,
        total_tokens: int,
        updated_at: int,
        *,
        stake: int | None = None,
        reward_pool: int | None = None,
    ) -> Challenge:
        """Mark resolved with the final vote tally.

        Args:
            total_tokens: Tokens on the winning side.
            updated_at: Event timestamp.
            stake: Final stake from chain, when refreshed.
            reward_pool: Final reward pool from chain, when refreshed.
        """
        return replace(
            self,
            resolved=True,
            total_tokens=total_tokens,
            stake=self.stake if stake is None else stake,
            reward_pool=self.reward_pool if reward_pool is None else reward_pool,
            last_updated_date_ts=updated_at,
        )

    def with_rewards(self, reward_pool: int, total_tokens: int, updated_at: int) -> Challenge:
        return replace(
            self,
            reward_pool=reward_pool,
            total_tokens=total_tokens,
            last_updated_date_ts=updated_at,
        )
