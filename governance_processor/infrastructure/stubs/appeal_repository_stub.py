"""In-memory AppealRepository for development and tests."""

from __future__ import annotations

from governance_processor.application.ports.appeal_repository import AppealRepository
from governance_processor.domain.errors import DuplicateRecordError
from governance_processor.domain.models.appeal import Appeal


class AppealRepositoryStub(AppealRepository):
    """Stores appeals keyed by the id of the challenge they appeal."""

    def __init__(self) -> None:
        self._appeals: dict[int, Appeal] = {}

    async def get_appeal(self, original_challenge_id: int) -> Appeal | None:
        return self._appeals.get(original_challenge_id)

    async def create_appeal(self, appeal: Appeal) -> None:
        if appeal.original_challenge_id in self._appeals:
            raise DuplicateRecordError("appeal", appeal.original_challenge_id)
        self._appeals[appeal.original_challenge_id] = appeal

    async def update_appeal(self, appeal: Appeal) -> None:
        self._appeals[appeal.original_challenge_id] = appeal

    def seed_appeal(self, appeal: Appeal) -> None:
        self._appeals[appeal.original_challenge_id] = appeal

    def reset(self) -> None:
        self._appeals.clear()
