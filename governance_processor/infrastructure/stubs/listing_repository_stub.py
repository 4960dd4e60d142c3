"""In-memory ListingRepository for development and tests."""

from __future__ import annotations

from governance_processor.application.ports.listing_repository import (
    ListingRepository,
)
from governance_processor.domain.errors import DuplicateRecordError
from governance_processor.domain.models.listing import Listing


class ListingRepositoryStub(ListingRepository):
    """Stores listings in a dict keyed by newsroom address.

    NOT suitable for production use.
    """

    def __init__(self) -> None:
        self._listings: dict[str, Listing] = {}

    async def get_listing(self, contract_address: str) -> Listing | None:
        return self._listings.get(contract_address.lower())

    async def create_listing(self, listing: Listing) -> None:
        key = listing.contract_address.lower()
        if key in self._listings:
            raise DuplicateRecordError("listing", key)
        self._listings[key] = listing

    async def update_listing(self, listing: Listing) -> None:
        self._listings[listing.contract_address.lower()] = listing

    def seed_listing(self, listing: Listing) -> None:
        self._listings[listing.contract_address.lower()] = listing

    def all_listings(self) -> list[Listing]:
        return list(self._listings.values())

    def reset(self) -> None:
        self._listings.clear()
