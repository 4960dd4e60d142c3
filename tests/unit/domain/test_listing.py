"""Unit tests for the Listing aggregate."""

import pytest

from governance_processor.domain.models import GovernanceState, Listing

ADDRESS = "0x" + "a" * 40


def _applied(**overrides: object) -> Listing:
    values: dict[str, object] = {
        "contract_address": ADDRESS,
        "last_governance_state": GovernanceState.APPLIED,
        "unstaked_deposit": 1000,
        "application_date_ts": 100,
        "created_date_ts": 100,
        "last_updated_date_ts": 100,
    }
    values.update(overrides)
    return Listing(**values)  # type: ignore[arg-type]


class TestListingInvariants:
    def test_whitelisted_requires_app_whitelisted_state(self) -> None:
        with pytest.raises(ValueError, match="whitelisted in state"):
            Listing(
                contract_address=ADDRESS,
                whitelisted=True,
                last_governance_state=GovernanceState.CHALLENGED,
            )

    def test_duplicate_owner_addresses_rejected(self) -> None:
        with pytest.raises(ValueError, match="owner_addresses"):
            Listing(contract_address=ADDRESS, owner_addresses=("0x1", "0x1"))

    def test_duplicate_contributors_rejected(self) -> None:
        with pytest.raises(ValueError, match="contributor_addresses"):
            Listing(contract_address=ADDRESS, contributor_addresses=("0x1", "0x1"))

    def test_listing_is_immutable(self) -> None:
        listing = _applied()
        with pytest.raises(AttributeError):
            listing.name = "changed"  # type: ignore[misc]


class TestWhitelist:
    def test_whitelist_sets_state_flag_and_approval_date(self) -> None:
        listing = _applied().whitelist(200)

        assert listing.whitelisted is True
        assert listing.last_governance_state is GovernanceState.APP_WHITELISTED
        assert listing.approval_date_ts == 200
        assert listing.last_updated_date_ts == 200

    def test_whitelist_keeps_first_approval_date(self) -> None:
        listing = _applied().whitelist(200).whitelist(900)

        assert listing.approval_date_ts == 200
        assert listing.last_updated_date_ts == 900

    @pytest.mark.parametrize(
        "state",
        [s for s in GovernanceState if s is not GovernanceState.APP_WHITELISTED],
    )
    def test_only_app_whitelisted_is_whitelisted(self, state: GovernanceState) -> None:
        listing = _applied().whitelist(200).with_state(state, 300)

        assert listing.whitelisted is False


class TestChallengeTransitions:
    def test_challenge_locks_stake(self) -> None:
        listing = _applied().whitelist(200).with_challenge(7, 300, stake=400)

        assert listing.last_governance_state is GovernanceState.CHALLENGED
        assert listing.challenge_id == 7
        assert listing.is_challenged
        assert listing.unstaked_deposit == 600
        assert listing.whitelisted is False

    def test_stake_never_drives_deposit_negative(self) -> None:
        listing = _applied(unstaked_deposit=100).with_challenge(7, 300, stake=400)

        assert listing.unstaked_deposit == 0

    def test_kept_after_approval_returns_to_whitelisted(self) -> None:
        listing = (
            _applied()
            .whitelist(200)
            .with_challenge(7, 300, stake=400)
            .after_challenge_kept(500, reward=50)
        )

        assert listing.last_governance_state is GovernanceState.APP_WHITELISTED
        assert listing.whitelisted is True
        assert listing.challenge_id is None
        assert listing.unstaked_deposit == 650

    def test_kept_before_approval_returns_to_applied(self) -> None:
        listing = _applied().with_challenge(7, 300).after_challenge_kept(500)

        assert listing.last_governance_state is GovernanceState.APPLIED
        assert listing.whitelisted is False

    def test_lost_after_approval_is_removed(self) -> None:
        listing = _applied().whitelist(200).with_challenge(7, 300).after_challenge_lost(500)

        assert listing.last_governance_state is GovernanceState.REMOVED
        assert listing.last_governance_state.is_removed
        assert listing.challenge_id is None

    def test_lost_before_approval_is_app_removed(self) -> None:
        listing = _applied().with_challenge(7, 300).after_challenge_lost(500)

        assert listing.last_governance_state is GovernanceState.APP_REMOVED


class TestReset:
    def test_reset_clears_registry_fields(self) -> None:
        listing = (
            _applied(app_expiry=999)
            .with_challenge(7, 300)
            .reset(GovernanceState.WITHDRAWN, 400)
        )

        assert listing.last_governance_state is GovernanceState.WITHDRAWN
        assert listing.unstaked_deposit == 0
        assert listing.app_expiry == 0
        assert listing.challenge_id is None
        assert listing.application_date_ts == 100


class TestNewsroomEdits:
    def test_owner_transfer_replaces_previous_owner(self) -> None:
        listing = _applied(owner="0xold", owner_addresses=("0xold", "0xother"))

        updated = listing.with_owner_transferred("0xold", "0xnew", 300)

        assert updated.owner == "0xnew"
        assert updated.owner_addresses == ("0xother", "0xnew")

    def test_owner_transfer_to_existing_owner_stays_unique(self) -> None:
        listing = _applied(owner="0xold", owner_addresses=("0xold", "0xother"))

        updated = listing.with_owner_transferred("0xold", "0xother", 300)

        assert updated.owner_addresses == ("0xother",)

    def test_contributors_added_once_and_removed(self) -> None:
        listing = _applied().with_contributor("0xc1", 300).with_contributor("0xc1", 301)

        assert listing.contributor_addresses == ("0xc1",)
        assert listing.without_contributor("0xc1", 302).contributor_addresses == ()

    def test_name_change_keeps_governance_state(self) -> None:
        listing = _applied().whitelist(200).with_name("The Daily", 300)

        assert listing.name == "The Daily"
        assert listing.whitelisted is True
