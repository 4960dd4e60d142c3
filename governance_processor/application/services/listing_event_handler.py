"""Listing lifecycle: registry application/removal events and newsroom edits.

Registry events (CivilTCRContract):
    Application              -> APPLIED (listing created)
    ApplicationWhitelisted   -> APP_WHITELISTED (approval date set once)
    ApplicationRemoved       -> APP_REMOVED, registry fields reset
    ListingRemoved           -> REMOVED, registry fields reset
    TouchAndRemoved          -> TOUCH_REMOVED, registry fields reset
    ListingWithdrawn         -> WITHDRAWN, registry fields reset
    Deposit / Withdrawal     -> unstaked deposit replaced, state kept

Registry events reconcile a missing listing from chain. Newsroom events
(NameChanged, OwnershipTransferred, RoleAdded, RoleRemoved) only edit an
existing listing and raise ListingNotFoundError otherwise.
"""

from __future__ import annotations

from typing import Any

from governance_processor.application.ports.chain_reader import ChainReader
from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.application.services.governance_event_recorder import (
    GovernanceEventRecorder,
)
from governance_processor.application.services.reconciliation import ChainReconciler
from governance_processor.domain.errors import ListingNotFoundError
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.domain.events.decoder import DecodedEvent
from governance_processor.domain.events.payloads import (
    ApplicationPayload,
    DepositPayload,
    ListingStatusPayload,
    NameChangedPayload,
    OwnershipTransferredPayload,
    RoleChangedPayload,
)
from governance_processor.domain.models import GovernanceState, Listing

_TCR = ContractName.CIVIL_TCR
_NEWSROOM = ContractName.NEWSROOM

_RESET_STATES: dict[str, GovernanceState] = {
    "ApplicationRemoved": GovernanceState.APP_REMOVED,
    "ListingRemoved": GovernanceState.REMOVED,
    "TouchAndRemoved": GovernanceState.TOUCH_REMOVED,
    "ListingWithdrawn": GovernanceState.WITHDRAWN,
}


class ListingEventHandler(EventHandler):
    """Applies listing lifecycle events."""

    handled_events = frozenset(
        {
            (_TCR, "Application"),
            (_TCR, "ApplicationWhitelisted"),
            (_TCR, "Deposit"),
            (_TCR, "Withdrawal"),
            *((_TCR, name) for name in _RESET_STATES),
            (_NEWSROOM, "NameChanged"),
            (_NEWSROOM, "OwnershipTransferred"),
            (_NEWSROOM, "RoleAdded"),
            (_NEWSROOM, "RoleRemoved"),
        }
    )

    def __init__(
        self,
        repositories: ProcessorRepositories,
        chain_reader: ChainReader,
        reconciler: ChainReconciler,
        recorder: GovernanceEventRecorder,
    ) -> None:
        self._repos = repositories
        self._chain = chain_reader
        self._reconciler = reconciler
        self._recorder = recorder
        self._init_logger()

    async def handle(self, decoded: DecodedEvent[Any]) -> bool:
        if decoded.contract is _NEWSROOM:
            await self._handle_newsroom(decoded)
            return True

        payload = decoded.payload
        if isinstance(payload, ApplicationPayload):
            await self._apply(decoded, payload)
        elif isinstance(payload, DepositPayload):
            await self._update_deposit(decoded, payload)
        elif decoded.name == "ApplicationWhitelisted":
            await self._whitelist(decoded, payload)
        else:
            await self._reset(decoded, payload, _RESET_STATES[decoded.name])

        await self._recorder.record(decoded, payload.listing_address)
        return True

    async def _apply(
        self, decoded: DecodedEvent[Any], payload: ApplicationPayload
    ) -> None:
        """Create the listing for an application.

        Re-delivery of the same application (same timestamp) leaves the
        listing untouched. A later application for an existing address
        starts a new registry lifecycle for it.
        """
        ts = decoded.event.timestamp
        address = payload.listing_address
        log = self._log_operation("apply", listing_address=address, event_ts=ts)

        existing = await self._repos.listings.get_listing(address)
        if existing is not None and existing.application_date_ts == ts:
            log.debug("application_already_recorded")
            return

        newsroom = await self._chain.read_newsroom(address)
        if newsroom is None:
            log.warning("newsroom_metadata_unavailable")
        owner = newsroom.owner if newsroom is not None else None
        listing = Listing(
            contract_address=address,
            name=newsroom.name if newsroom is not None else "",
            last_governance_state=GovernanceState.APPLIED,
            charter_uri=newsroom.charter_uri if newsroom is not None else "",
            owner=owner,
            owner_addresses=(owner,) if owner else (),
            contributor_addresses=existing.contributor_addresses if existing else (),
            app_expiry=payload.app_end_date,
            unstaked_deposit=payload.deposit,
            application_date_ts=ts,
            created_date_ts=existing.created_date_ts if existing else ts,
            last_updated_date_ts=ts,
        )
        if existing is None:
            await self._repos.listings.create_listing(listing)
        else:
            await self._repos.listings.update_listing(listing)
        log.info("listing_applied", name=listing.name, app_expiry=listing.app_expiry)

    async def _whitelist(
        self, decoded: DecodedEvent[Any], payload: ListingStatusPayload
    ) -> None:
        ts = decoded.event.timestamp
        listing = await self._reconciler.listing(
            decoded.event.contract_address.lower(), payload.listing_address, ts
        )
        await self._repos.listings.update_listing(listing.whitelist(ts))
        self._log_operation(
            "whitelist", listing_address=payload.listing_address
        ).info("listing_whitelisted")

    async def _reset(
        self,
        decoded: DecodedEvent[Any],
        payload: ListingStatusPayload,
        state: GovernanceState,
    ) -> None:
        ts = decoded.event.timestamp
        listing = await self._reconciler.listing(
            decoded.event.contract_address.lower(), payload.listing_address, ts
        )
        await self._repos.listings.update_listing(listing.reset(state, ts))
        self._log_operation(
            "reset", listing_address=payload.listing_address
        ).info("listing_removed", state=state.value)

    async def _update_deposit(
        self, decoded: DecodedEvent[Any], payload: DepositPayload
    ) -> None:
        ts = decoded.event.timestamp
        listing = await self._reconciler.listing(
            decoded.event.contract_address.lower(), payload.listing_address, ts
        )
        await self._repos.listings.update_listing(
            listing.with_unstaked_deposit(payload.unstaked_deposit, ts)
        )

    async def _handle_newsroom(self, decoded: DecodedEvent[Any]) -> None:
        payload = decoded.payload
        ts = decoded.event.timestamp
        listing = await self._repos.listings.get_listing(payload.listing_address)
        if listing is None:
            raise ListingNotFoundError(
                payload.listing_address, {"event_type": decoded.name}
            )

        if isinstance(payload, NameChangedPayload):
            updated = listing.with_name(payload.new_name, ts)
        elif isinstance(payload, OwnershipTransferredPayload):
            updated = listing.with_owner_transferred(
                payload.previous_owner, payload.new_owner, ts
            )
        elif isinstance(payload, RoleChangedPayload) and decoded.name == "RoleAdded":
            updated = listing.with_contributor(payload.grantee, ts)
        else:
            updated = listing.without_contributor(payload.grantee, ts)

        await self._repos.listings.update_listing(updated)
        self._log_operation(
            "newsroom_update", listing_address=payload.listing_address
        ).info("newsroom_event_applied", event_type=decoded.name)
