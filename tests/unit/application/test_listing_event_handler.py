"""Unit tests for ListingEventHandler (registry lifecycle and newsroom edits)."""

import pytest

from governance_processor.application.ports.chain_reader import (
    NewsroomRecord,
    OnChainListing,
)
from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.domain.errors import ListingNotFoundError
from governance_processor.domain.models import GovernanceState, Listing
from governance_processor.infrastructure.stubs import ChainReaderStub
from governance_processor.workers.event_dispatcher import EventDispatcher
from tests.helpers import events as ev

OWNER = "0x" + "9" * 40


@pytest.fixture
def newsroom(chain_reader: ChainReaderStub) -> NewsroomRecord:
    record = NewsroomRecord(name="The Daily", owner=OWNER, charter_uri="ipfs://charter")
    chain_reader.seed_newsroom(ev.NEWSROOM, record)
    return record


class TestApplication:
    @pytest.mark.asyncio
    async def test_application_creates_applied_listing(
        self,
        dispatcher: EventDispatcher,
        repositories: ProcessorRepositories,
        newsroom: NewsroomRecord,
    ) -> None:
        await dispatcher.process([ev.application(ts=1000, deposit=500, app_end_date=9000)])

        listing = await repositories.listings.get_listing(ev.NEWSROOM)
        assert listing is not None
        assert listing.last_governance_state is GovernanceState.APPLIED
        assert listing.whitelisted is False
        assert listing.name == "The Daily"
        assert listing.owner == OWNER
        assert listing.owner_addresses == (OWNER,)
        assert listing.charter_uri == "ipfs://charter"
        assert listing.unstaked_deposit == 500
        assert listing.app_expiry == 9000
        assert listing.application_date_ts == 1000
        assert listing.created_date_ts == 1000

    @pytest.mark.asyncio
    async def test_application_without_newsroom_metadata(
        self, dispatcher: EventDispatcher, repositories: ProcessorRepositories
    ) -> None:
        await dispatcher.process([ev.application()])

        listing = await repositories.listings.get_listing(ev.NEWSROOM)
        assert listing is not None
        assert listing.name == ""
        assert listing.owner is None
        assert listing.owner_addresses == ()

    @pytest.mark.asyncio
    async def test_redelivered_application_is_a_no_op(
        self,
        dispatcher: EventDispatcher,
        repositories: ProcessorRepositories,
        chain_reader: ChainReaderStub,
        newsroom: NewsroomRecord,
    ) -> None:
        event = ev.application(ts=1000)
        await dispatcher.process([event])
        first = await repositories.listings.get_listing(ev.NEWSROOM)

        await dispatcher.process([event])

        assert await repositories.listings.get_listing(ev.NEWSROOM) == first
        assert chain_reader.calls["read_newsroom"] == 1

    @pytest.mark.asyncio
    async def test_reapplication_starts_new_lifecycle(
        self,
        dispatcher: EventDispatcher,
        repositories: ProcessorRepositories,
        newsroom: NewsroomRecord,
    ) -> None:
        await dispatcher.process(
            [
                ev.application(ts=1000),
                ev.listing_status("_ApplicationWhitelisted", ts=2000),
                ev.role_changed("RoleAdded", ev.VOTER, ts=2100),
                ev.listing_status("_ListingWithdrawn", ts=3000),
                ev.application(ts=4000, deposit=42),
            ]
        )

        listing = await repositories.listings.get_listing(ev.NEWSROOM)
        assert listing is not None
        assert listing.last_governance_state is GovernanceState.APPLIED
        assert listing.application_date_ts == 4000
        assert listing.created_date_ts == 1000
        assert listing.unstaked_deposit == 42
        assert listing.contributor_addresses == (ev.VOTER,)


class TestWhitelistAndRemoval:
    @pytest.mark.asyncio
    async def test_whitelist_after_application(
        self, dispatcher: EventDispatcher, repositories: ProcessorRepositories
    ) -> None:
        await dispatcher.process(
            [ev.application(ts=1000), ev.listing_status("_ApplicationWhitelisted", ts=2000)]
        )

        listing = await repositories.listings.get_listing(ev.NEWSROOM)
        assert listing is not None
        assert listing.whitelisted is True
        assert listing.last_governance_state is GovernanceState.APP_WHITELISTED
        assert listing.approval_date_ts == 2000

    @pytest.mark.asyncio
    async def test_whitelist_reconciles_missing_listing_from_chain(
        self,
        dispatcher: EventDispatcher,
        repositories: ProcessorRepositories,
        chain_reader: ChainReaderStub,
        newsroom: NewsroomRecord,
    ) -> None:
        chain_reader.seed_listing(
            ev.NEWSROOM,
            OnChainListing(
                app_expiry=9000,
                whitelisted=True,
                owner=OWNER,
                unstaked_deposit=800,
                challenge_id=0,
            ),
        )

        await dispatcher.process([ev.listing_status("_ApplicationWhitelisted", ts=2000)])

        listing = await repositories.listings.get_listing(ev.NEWSROOM)
        assert listing is not None
        assert listing.whitelisted is True
        assert listing.unstaked_deposit == 800
        assert listing.challenge_id is None
        assert listing.created_date_ts == 2000
        assert listing.name == "The Daily"

    @pytest.mark.asyncio
    async def test_whitelist_of_unknown_listing_raises(
        self, dispatcher: EventDispatcher, repositories: ProcessorRepositories
    ) -> None:
        with pytest.raises(ListingNotFoundError):
            await dispatcher.process([ev.listing_status("_ApplicationWhitelisted")])

        assert repositories.listings.all_listings() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "event_type,state",
        [
            ("_ApplicationRemoved", GovernanceState.APP_REMOVED),
            ("_ListingRemoved", GovernanceState.REMOVED),
            ("_TouchAndRemoved", GovernanceState.TOUCH_REMOVED),
            ("_ListingWithdrawn", GovernanceState.WITHDRAWN),
        ],
    )
    async def test_removal_events_reset_listing(
        self,
        dispatcher: EventDispatcher,
        repositories: ProcessorRepositories,
        event_type: str,
        state: GovernanceState,
    ) -> None:
        await dispatcher.process(
            [ev.application(ts=1000), ev.listing_status(event_type, ts=3000)]
        )

        listing = await repositories.listings.get_listing(ev.NEWSROOM)
        assert listing is not None
        assert listing.last_governance_state is state
        assert listing.whitelisted is False
        assert listing.unstaked_deposit == 0
        assert listing.app_expiry == 0

    @pytest.mark.asyncio
    async def test_deposit_replaces_unstaked_deposit(
        self, dispatcher: EventDispatcher, repositories: ProcessorRepositories
    ) -> None:
        await dispatcher.process(
            [
                ev.application(ts=1000, deposit=100),
                ev.deposit(unstaked_deposit=350, ts=1100),
                ev.deposit(unstaked_deposit=300, ts=1200, withdrawal=True),
            ]
        )

        listing = await repositories.listings.get_listing(ev.NEWSROOM)
        assert listing is not None
        assert listing.unstaked_deposit == 300
        assert listing.last_governance_state is GovernanceState.APPLIED

    @pytest.mark.asyncio
    async def test_registry_events_are_recorded_for_audit(
        self, dispatcher: EventDispatcher, repositories: ProcessorRepositories
    ) -> None:
        application = ev.application(ts=1000)
        whitelisted = ev.listing_status("_ApplicationWhitelisted", ts=2000)

        await dispatcher.process([application, whitelisted])
        await dispatcher.process([application, whitelisted])

        recorded = await repositories.governance_events.events_for_listing(ev.NEWSROOM)
        assert [e.event_type for e in recorded] == ["Application", "ApplicationWhitelisted"]
        assert {e.event_hash for e in recorded} == {application.hash, whitelisted.hash}


class TestNewsroomEvents:
    @pytest.mark.asyncio
    async def test_name_change_without_listing_raises_and_creates_nothing(
        self, dispatcher: EventDispatcher, repositories: ProcessorRepositories
    ) -> None:
        with pytest.raises(ListingNotFoundError):
            await dispatcher.process([ev.name_changed("X")])

        assert await repositories.listings.get_listing(ev.NEWSROOM) is None

    @pytest.mark.asyncio
    async def test_name_change_updates_listing(
        self, dispatcher: EventDispatcher, repositories: ProcessorRepositories
    ) -> None:
        await dispatcher.process([ev.application(ts=1000), ev.name_changed("X", ts=1500)])

        listing = await repositories.listings.get_listing(ev.NEWSROOM)
        assert listing is not None
        assert listing.name == "X"
        assert listing.last_updated_date_ts == 1500

    @pytest.mark.asyncio
    async def test_ownership_transfer(
        self,
        dispatcher: EventDispatcher,
        repositories: ProcessorRepositories,
        newsroom: NewsroomRecord,
    ) -> None:
        await dispatcher.process(
            [ev.application(ts=1000), ev.ownership_transferred(OWNER, ev.VOTER)]
        )

        listing = await repositories.listings.get_listing(ev.NEWSROOM)
        assert listing is not None
        assert listing.owner == ev.VOTER
        assert listing.owner_addresses == (ev.VOTER,)

    @pytest.mark.asyncio
    async def test_roles_add_and_remove_contributors(
        self, dispatcher: EventDispatcher, repositories: ProcessorRepositories
    ) -> None:
        await dispatcher.process(
            [
                ev.application(ts=1000),
                ev.role_changed("RoleAdded", ev.VOTER, ts=1100),
                ev.role_changed("RoleAdded", ev.CHALLENGER, ts=1200),
                ev.role_changed("RoleRemoved", ev.VOTER, ts=1300),
            ]
        )

        listing = await repositories.listings.get_listing(ev.NEWSROOM)
        assert listing is not None
        assert listing.contributor_addresses == (ev.CHALLENGER,)

    @pytest.mark.asyncio
    async def test_newsroom_events_are_not_audited(
        self, dispatcher: EventDispatcher, repositories: ProcessorRepositories
    ) -> None:
        await dispatcher.process([ev.application(ts=1000), ev.name_changed("X")])

        recorded = await repositories.governance_events.events_for_listing(ev.NEWSROOM)
        assert [e.event_type for e in recorded] == ["Application"]


@pytest.mark.asyncio
async def test_listing_lookup_ignores_address_case(
    repositories: ProcessorRepositories,
) -> None:
    listing = Listing(contract_address=ev.NEWSROOM)
    repositories.listings.seed_listing(listing)  # type: ignore[attr-defined]

    assert await repositories.listings.get_listing(ev.NEWSROOM.upper()) == listing
