"""Listing aggregate (newsroom registered in the registry).

A Listing is identified by its newsroom contract address. It is frozen:
every transition returns a new instance, which the handler writes back
through ListingRepository.

Invariants:
- whitelisted implies last_governance_state is APP_WHITELISTED
- owner and contributor address tuples never contain duplicates
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from governance_processor.domain.models.governance_state import GovernanceState


def _dedupe(addresses: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(addresses))


@dataclass(frozen=True)
class Listing:
    """A newsroom's registry listing.

    Attributes:
        contract_address: Newsroom contract address (identity).
        name: Newsroom name.
        whitelisted: Whether the listing is currently on the registry.
        last_governance_state: Most recent governance state.
        url: Newsroom URL (from charter metadata, may be empty).
        charter_uri: Charter reference (may be empty).
        owner: Current newsroom owner, if known.
        owner_addresses: All owner addresses (unique).
        contributor_addresses: Contributor addresses (unique).
        app_expiry: Application period end (epoch seconds).
        unstaked_deposit: Deposit not locked in a challenge.
        challenge_id: Outstanding challenge id, None when not challenged.
        application_date_ts: When the application was made.
        approval_date_ts: When the listing was first whitelisted.
        created_date_ts: When the listing record was first created.
        last_updated_date_ts: Event timestamp of the last change.
    """

    contract_address: str
    name: str = ""
    whitelisted: bool = False
    last_governance_state: GovernanceState = GovernanceState.NONE
    url: str = ""
    charter_uri: str = ""
    owner: str | None = None
    owner_addresses: tuple[str, ...] = ()
    contributor_addresses: tuple[str, ...] = ()
    app_expiry: int = 0
    unstaked_deposit: int = 0
    challenge_id: int | None = None
    application_date_ts: int | None = None
    approval_date_ts: int | None = None
    created_date_ts: int = 0
    last_updated_date_ts: int = 0

    def __post_init__(self) -> None:
        """Validate listing invariants."""
        if (
            self.whitelisted
            and self.last_governance_state is not GovernanceState.APP_WHITELISTED
        ):
            raise ValueError(
                f"Listing {self.contract_address} is whitelisted in state "
                f"{self.last_governance_state.value}"
            )
        if len(set(self.owner_addresses)) != len(self.owner_addresses):
            raise ValueError("owner_addresses must not contain duplicates")
        if len(set(self.contributor_addresses)) != len(self.contributor_addresses):
            raise ValueError("contributor_addresses must not contain duplicates")

    @property
    def is_approved(self) -> bool:
        """Check if the listing has ever been whitelisted."""
        return self.approval_date_ts is not None

    @property
    def is_challenged(self) -> bool:
        """Check if a challenge is outstanding."""
        return self.challenge_id is not None

    def with_state(self, state: GovernanceState, updated_at: int) -> Listing:
        """Move to a new governance state.

        whitelisted follows the state: it is True only for APP_WHITELISTED.
        """
        return replace(
            self,
            last_governance_state=state,
            whitelisted=state is GovernanceState.APP_WHITELISTED,
            last_updated_date_ts=updated_at,
        )

    def whitelist(self, updated_at: int) -> Listing:
        """Mark the listing whitelisted, keeping the first approval date."""
        approved_at = self.approval_date_ts
        if approved_at is None:
            approved_at = updated_at
        return replace(
            self.with_state(GovernanceState.APP_WHITELISTED, updated_at),
            approval_date_ts=approved_at,
        )

    def with_challenge(
        self, challenge_id: int, updated_at: int, stake: int = 0
    ) -> Listing:
        """Attach a challenge, locking stake tokens of the unstaked deposit.

        Callers pass a stake only the first time a challenge is recorded.
        """
        deposit = max(self.unstaked_deposit - stake, 0)
        return replace(
            self.with_state(GovernanceState.CHALLENGED, updated_at),
            challenge_id=challenge_id,
            unstaked_deposit=deposit,
        )

    def after_challenge_kept(self, updated_at: int, reward: int = 0) -> Listing:
        """Return to the whitelisted path after a challenge fails.

        Approved listings go back to APP_WHITELISTED; applications that were
        challenged before approval go back to APPLIED to await whitelisting.
        """
        state = (
            GovernanceState.APP_WHITELISTED
            if self.is_approved
            else GovernanceState.APPLIED
        )
        return replace(
            self.with_state(state, updated_at),
            challenge_id=None,
            unstaked_deposit=self.unstaked_deposit + reward,
        )

    def after_challenge_lost(self, updated_at: int) -> Listing:
        """Take the removed path after a challenge succeeds."""
        state = (
            GovernanceState.REMOVED if self.is_approved else GovernanceState.APP_REMOVED
        )
        return replace(self.with_state(state, updated_at), challenge_id=None)

    def reset(self, state: GovernanceState, updated_at: int) -> Listing:
        """Clear registry data, mirroring the contract deleting the listing."""
        return replace(
            self.with_state(state, updated_at),
            unstaked_deposit=0,
            app_expiry=0,
            challenge_id=None,
        )

    def with_unstaked_deposit(self, deposit: int, updated_at: int) -> Listing:
        return replace(
            self, unstaked_deposit=deposit, last_updated_date_ts=updated_at
        )

    def with_name(self, name: str, updated_at: int) -> Listing:
        return replace(self, name=name, last_updated_date_ts=updated_at)

    def with_owner_transferred(
        self, previous_owner: str, new_owner: str, updated_at: int
    ) -> Listing:
        """Replace previous_owner with new_owner in the owner set."""
        owners = tuple(a for a in self.owner_addresses if a != previous_owner)
        return replace(
            self,
            owner=new_owner,
            owner_addresses=_dedupe(owners + (new_owner,)),
            last_updated_date_ts=updated_at,
        )

    def with_contributor(self, address: str, updated_at: int) -> Listing:
        return replace(
            self,
            contributor_addresses=_dedupe(self.contributor_addresses + (address,)),
            last_updated_date_ts=updated_at,
        )

    def without_contributor(self, address: str, updated_at: int) -> Listing:
        return replace(
            self,
            contributor_addresses=tuple(
                a for a in self.contributor_addresses if a != address
            ),
            last_updated_date_ts=updated_at,
        )
