"""In-memory ChallengeRepository for development and tests."""

from __future__ import annotations

from governance_processor.application.ports.challenge_repository import (
    ChallengeRepository,
)
from governance_processor.domain.errors import DuplicateRecordError
from governance_processor.domain.models.challenge import Challenge


class ChallengeRepositoryStub(ChallengeRepository):
    """Stores challenges in a dict keyed by challenge id."""

    def __init__(self) -> None:
        self._challenges: dict[int, Challenge] = {}

    async def get_challenge(self, challenge_id: int) -> Challenge | None:
        return self._challenges.get(challenge_id)

    async def create_challenge(self, challenge: Challenge) -> None:
        if challenge.challenge_id in self._challenges:
            raise DuplicateRecordError("challenge", challenge.challenge_id)
        self._challenges[challenge.challenge_id] = challenge

    async def update_challenge(self, challenge: Challenge) -> None:
        self._challenges[challenge.challenge_id] = challenge

    def seed_challenge(self, challenge: Challenge) -> None:
        self._challenges[challenge.challenge_id] = challenge

    def reset(self) -> None:
        self._challenges.clear()
