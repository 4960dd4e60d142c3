"""UserChallengeDataRepository port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.models.user_challenge_data import (
        UserChallengeData,
    )


@runtime_checkable
class UserChallengeDataRepository(Protocol):
    """Repository interface for per-voter poll records.

    Records are keyed by (poll_id, user_address).
    """

    async def get_user_challenge_data(
        self, poll_id: int, user_address: str
    ) -> UserChallengeData | None:
        ...

    async def update_user_challenge_data(self, data: UserChallengeData) -> None:
        """Insert or replace a voter record."""
        ...

    async def list_for_poll(self, poll_id: int) -> list[UserChallengeData]:
        """All voter records of a poll."""
        ...
