"""In-memory PollRepository for development and tests."""

from __future__ import annotations

from governance_processor.application.ports.poll_repository import PollRepository
from governance_processor.domain.errors import DuplicateRecordError
from governance_processor.domain.models.poll import Poll


class PollRepositoryStub(PollRepository):
    """Stores polls in a dict keyed by poll id."""

    def __init__(self) -> None:
        self._polls: dict[int, Poll] = {}

    async def get_poll(self, poll_id: int) -> Poll | None:
        return self._polls.get(poll_id)

    async def create_poll(self, poll: Poll) -> None:
        if poll.poll_id in self._polls:
            raise DuplicateRecordError("poll", poll.poll_id)
        self._polls[poll.poll_id] = poll

    async def update_poll(self, poll: Poll) -> None:
        self._polls[poll.poll_id] = poll

    def seed_poll(self, poll: Poll) -> None:
        self._polls[poll.poll_id] = poll

    def reset(self) -> None:
        self._polls.clear()
