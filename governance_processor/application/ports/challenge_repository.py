"""ChallengeRepository port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.models.challenge import Challenge


@runtime_checkable
class ChallengeRepository(Protocol):
    """Repository interface for challenges keyed by challenge id."""

    async def get_challenge(self, challenge_id: int) -> Challenge | None:
        """Get a challenge by id, None if no such record."""
        ...

    async def create_challenge(self, challenge: Challenge) -> None:
        """Insert a new challenge.

        Raises:
            DuplicateRecordError: If the challenge id already exists.
        """
        ...

    async def update_challenge(self, challenge: Challenge) -> None:
        """Insert or replace a challenge."""
        ...
