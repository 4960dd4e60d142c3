"""PollRepository port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.models.poll import Poll


@runtime_checkable
class PollRepository(Protocol):
    """Repository interface for PLCR polls keyed by poll id."""

    async def get_poll(self, poll_id: int) -> Poll | None:
        ...

    async def create_poll(self, poll: Poll) -> None:
        """Insert a new poll.

        Raises:
            DuplicateRecordError: If the poll id already exists.
        """
        ...

    async def update_poll(self, poll: Poll) -> None:
        """Insert or replace a poll."""
        ...
