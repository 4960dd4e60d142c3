"""In-memory UserChallengeDataRepository for development and tests."""

from __future__ import annotations

from governance_processor.application.ports.user_challenge_data_repository import (
    UserChallengeDataRepository,
)
from governance_processor.domain.models.user_challenge_data import UserChallengeData


class UserChallengeDataRepositoryStub(UserChallengeDataRepository):
    def __init__(self) -> None:
        self._records: dict[tuple[int, str], UserChallengeData] = {}

    async def get_user_challenge_data(
        self, poll_id: int, user_address: str
    ) -> UserChallengeData | None:
        return self._records.get((poll_id, user_address))

    async def update_user_challenge_data(self, data: UserChallengeData) -> None:
        self._records[(data.poll_id, data.user_address)] = data

    async def list_for_poll(self, poll_id: int) -> list[UserChallengeData]:
        return [r for (pid, _), r in self._records.items() if pid == poll_id]

    def reset(self) -> None:
        self._records.clear()
