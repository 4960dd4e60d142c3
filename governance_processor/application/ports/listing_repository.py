"""ListingRepository port.

Stores Listing aggregates keyed by newsroom contract address. update()
is an upsert so that reconciled aggregates can be written without a prior
create.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.models.listing import Listing


@runtime_checkable
class ListingRepository(Protocol):
    """Repository interface for registry listings."""

    async def get_listing(self, contract_address: str) -> Listing | None:
        """Get a listing by newsroom address.

        Args:
            contract_address: Lower-cased newsroom contract address.

        Returns:
            The Listing, or None if no such record.
        """
        ...

    async def create_listing(self, listing: Listing) -> None:
        """Insert a new listing.

        Raises:
            DuplicateRecordError: If a listing with this address exists.
        """
        ...

    async def update_listing(self, listing: Listing) -> None:
        """Insert or replace a listing."""
        ...
