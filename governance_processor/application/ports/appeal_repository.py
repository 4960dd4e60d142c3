"""AppealRepository port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.models.appeal import Appeal


@runtime_checkable
class AppealRepository(Protocol):
    """Repository interface for appeals keyed by the appealed challenge id."""

    async def get_appeal(self, original_challenge_id: int) -> Appeal | None:
        ...

    async def create_appeal(self, appeal: Appeal) -> None:
        """Insert a new appeal.

        Raises:
            DuplicateRecordError: If an appeal for the challenge exists.
        """
        ...

    async def update_appeal(self, appeal: Appeal) -> None:
        """Insert or replace an appeal."""
        ...
