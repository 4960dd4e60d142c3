"""Decode raw contract events into typed payloads.

The decode table is keyed by (contract, normalised event name). An event
whose pair is not in the table is not ours to handle and decodes to None;
an event whose pair IS in the table but whose payload is malformed raises
EventDecodeError.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from governance_processor.domain.errors.event_decode import EventDecodeError
from governance_processor.domain.events.contract_event import ContractEvent
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.domain.events.payloads import (
    AppealDecisionPayload,
    AppealGrantedPayload,
    AppealRequestedPayload,
    ApplicationPayload,
    ChallengeCreatedPayload,
    ChallengeResolvedPayload,
    DepositPayload,
    GovernmentProposalCreatedPayload,
    GrantedAppealChallengedPayload,
    ListingStatusPayload,
    MultiSigInstantiationPayload,
    MultiSigOwnerPayload,
    NameChangedPayload,
    OwnershipTransferredPayload,
    PollCreatedPayload,
    ProposalChallengedPayload,
    ProposalChallengeResolvedPayload,
    ProposalCreatedPayload,
    ProposalPayload,
    RewardClaimedPayload,
    RoleChangedPayload,
    TransferPayload,
    VoteCommittedPayload,
    VoteRevealedPayload,
)

P = TypeVar("P")

EventKey = tuple[ContractName, str]


@dataclass(frozen=True)
class DecodedEvent(Generic[P]):
    """A contract event paired with its typed payload."""

    contract: ContractName
    name: str
    event: ContractEvent
    payload: P

    @property
    def key(self) -> EventKey:
        return (self.contract, self.name)


class _Fields:
    """Typed accessors over a raw event payload."""

    def __init__(self, event: ContractEvent) -> None:
        self._event = event
        self._payload = event.payload

    @property
    def emitter(self) -> str:
        """Address of the contract that emitted the event."""
        return self._event.contract_address.lower()

    def _error(self, key: str, reason: str) -> EventDecodeError:
        return EventDecodeError(self._event.hash, self._event.name, key, reason)

    def _raw(self, key: str) -> Any:
        if key not in self._payload or self._payload[key] is None:
            raise self._error(key, "missing")
        return self._payload[key]

    def int(self, key: str) -> int:
        value = self._raw(key)
        if isinstance(value, bool):
            raise self._error(key, "not an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value, 16) if value.lower().startswith("0x") else int(value)
            except ValueError:
                raise self._error(key, "not an integer") from None
        raise self._error(key, "not an integer")

    def optional_int(self, key: str) -> int | None:
        if self._payload.get(key) is None:
            return None
        return self.int(key)

    def address(self, key: str) -> str:
        value = self._raw(key)
        if not isinstance(value, str) or not value:
            raise self._error(key, "not an address")
        return value.lower()

    def text(self, key: str) -> str:
        value = self._raw(key)
        if not isinstance(value, str):
            raise self._error(key, "not a string")
        return value

    def bytes32(self, key: str) -> str:
        value = self._raw(key)
        if isinstance(value, (bytes, bytearray)):
            return "0x" + bytes(value).hex()
        if isinstance(value, str) and value:
            lowered = value.lower()
            return lowered if lowered.startswith("0x") else "0x" + lowered
        raise self._error(key, "not a 32-byte id")


# Registry (TCR)


def _application(f: _Fields) -> ApplicationPayload:
    return ApplicationPayload(
        listing_address=f.address("ListingAddress"),
        deposit=f.int("Deposit"),
        app_end_date=f.int("AppEndDate"),
        applicant=f.address("Applicant"),
        statement=f.text("Data"),
    )


def _listing_status(f: _Fields) -> ListingStatusPayload:
    return ListingStatusPayload(listing_address=f.address("ListingAddress"))


def _deposit(f: _Fields) -> DepositPayload:
    return DepositPayload(
        listing_address=f.address("ListingAddress"),
        unstaked_deposit=f.int("UnstakedDeposit"),
    )


def _challenge(f: _Fields) -> ChallengeCreatedPayload:
    return ChallengeCreatedPayload(
        listing_address=f.address("ListingAddress"),
        challenge_id=f.int("ChallengeID"),
        statement=f.text("Data"),
        commit_end_date=f.int("CommitEndDate"),
        reveal_end_date=f.int("RevealEndDate"),
        challenger=f.address("Challenger"),
    )


def _challenge_resolved(f: _Fields) -> ChallengeResolvedPayload:
    return ChallengeResolvedPayload(
        listing_address=f.address("ListingAddress"),
        challenge_id=f.int("ChallengeID"),
        total_tokens=f.int("TotalTokens"),
        reward_pool=f.optional_int("RewardPool"),
    )


def _reward_claimed(f: _Fields) -> RewardClaimedPayload:
    return RewardClaimedPayload(
        challenge_id=f.int("ChallengeID"),
        reward=f.int("Reward"),
        voter=f.address("Voter"),
    )


def _appeal_requested(f: _Fields) -> AppealRequestedPayload:
    return AppealRequestedPayload(
        listing_address=f.address("ListingAddress"),
        challenge_id=f.int("ChallengeID"),
        appeal_fee_paid=f.int("AppealFeePaid"),
        requester=f.address("Requester"),
        statement=f.text("Data"),
    )


def _appeal_granted(f: _Fields) -> AppealGrantedPayload:
    return AppealGrantedPayload(
        listing_address=f.address("ListingAddress"),
        challenge_id=f.int("ChallengeID"),
        statement=f.text("Data"),
    )


def _granted_appeal_challenged(f: _Fields) -> GrantedAppealChallengedPayload:
    return GrantedAppealChallengedPayload(
        listing_address=f.address("ListingAddress"),
        challenge_id=f.int("ChallengeID"),
        appeal_challenge_id=f.int("AppealChallengeID"),
        statement=f.text("Data"),
    )


def _appeal_decision(f: _Fields) -> AppealDecisionPayload:
    return AppealDecisionPayload(
        listing_address=f.address("ListingAddress"),
        challenge_id=f.int("ChallengeID"),
        appeal_challenge_id=f.int("AppealChallengeID"),
        total_tokens=f.int("TotalTokens"),
        reward_pool=f.optional_int("RewardPool"),
    )


# Newsroom


def _name_changed(f: _Fields) -> NameChangedPayload:
    return NameChangedPayload(listing_address=f.emitter, new_name=f.text("NewName"))


def _ownership_transferred(f: _Fields) -> OwnershipTransferredPayload:
    return OwnershipTransferredPayload(
        listing_address=f.emitter,
        previous_owner=f.address("PreviousOwner"),
        new_owner=f.address("NewOwner"),
    )


def _role_changed(f: _Fields) -> RoleChangedPayload:
    return RoleChangedPayload(
        listing_address=f.emitter,
        grantee=f.address("Grantee"),
        role=f.text("Role"),
    )


# PLCR voting


def _poll_created(f: _Fields) -> PollCreatedPayload:
    return PollCreatedPayload(
        poll_id=f.int("PollID"),
        vote_quorum=f.int("VoteQuorum"),
        commit_end_date=f.int("CommitEndDate"),
        reveal_end_date=f.int("RevealEndDate"),
        creator=f.address("Creator"),
    )


def _vote_committed(f: _Fields) -> VoteCommittedPayload:
    return VoteCommittedPayload(
        poll_id=f.int("PollID"),
        num_tokens=f.int("NumTokens"),
        voter=f.address("Voter"),
    )


def _vote_revealed(f: _Fields) -> VoteRevealedPayload:
    return VoteRevealedPayload(
        poll_id=f.int("PollID"),
        num_tokens=f.int("NumTokens"),
        votes_for=f.int("VotesFor"),
        votes_against=f.int("VotesAgainst"),
        choice=f.int("Choice"),
        voter=f.address("Voter"),
        salt=f.int("Salt"),
    )


# Parameterizer


def _proposal_created(f: _Fields) -> ProposalCreatedPayload:
    return ProposalCreatedPayload(
        prop_id=f.bytes32("PropID"),
        name=f.text("Name"),
        value=f.int("Value"),
        deposit=f.int("Deposit"),
        app_end_date=f.int("AppEndDate"),
        proposer=f.address("Proposer"),
    )


def _proposal(f: _Fields) -> ProposalPayload:
    return ProposalPayload(prop_id=f.bytes32("PropID"))


def _proposal_challenged(f: _Fields) -> ProposalChallengedPayload:
    return ProposalChallengedPayload(
        prop_id=f.bytes32("PropID"),
        challenge_id=f.int("ChallengeID"),
        challenger=f.address("Challenger"),
        commit_end_date=f.int("CommitEndDate"),
        reveal_end_date=f.int("RevealEndDate"),
    )


def _proposal_challenge_resolved(f: _Fields) -> ProposalChallengeResolvedPayload:
    return ProposalChallengeResolvedPayload(
        prop_id=f.bytes32("PropID"),
        challenge_id=f.int("ChallengeID"),
        total_tokens=f.int("TotalTokens"),
        reward_pool=f.optional_int("RewardPool"),
    )


def _government_proposal_created(f: _Fields) -> GovernmentProposalCreatedPayload:
    return GovernmentProposalCreatedPayload(
        prop_id=f.bytes32("PropID"),
        name=f.text("Name"),
        value=f.int("Value"),
        poll_id=f.int("PollID"),
    )


# Wallets and token


def _multisig_instantiation(f: _Fields) -> MultiSigInstantiationPayload:
    return MultiSigInstantiationPayload(
        factory_address=f.emitter,
        multisig_address=f.address("Instantiation"),
    )


def _multisig_owner(f: _Fields) -> MultiSigOwnerPayload:
    return MultiSigOwnerPayload(multisig_address=f.emitter, owner=f.address("Owner"))


def _transfer(f: _Fields) -> TransferPayload:
    return TransferPayload(
        from_address=f.address("From"),
        to_address=f.address("To"),
        value=f.int("Value"),
    )


EVENT_DECODERS: dict[EventKey, Callable[[_Fields], Any]] = {
    (ContractName.CIVIL_TCR, "Application"): _application,
    (ContractName.CIVIL_TCR, "ApplicationWhitelisted"): _listing_status,
    (ContractName.CIVIL_TCR, "ApplicationRemoved"): _listing_status,
    (ContractName.CIVIL_TCR, "ListingRemoved"): _listing_status,
    (ContractName.CIVIL_TCR, "ListingWithdrawn"): _listing_status,
    (ContractName.CIVIL_TCR, "TouchAndRemoved"): _listing_status,
    (ContractName.CIVIL_TCR, "Deposit"): _deposit,
    (ContractName.CIVIL_TCR, "Withdrawal"): _deposit,
    (ContractName.CIVIL_TCR, "Challenge"): _challenge,
    (ContractName.CIVIL_TCR, "ChallengeFailed"): _challenge_resolved,
    (ContractName.CIVIL_TCR, "ChallengeSucceeded"): _challenge_resolved,
    (ContractName.CIVIL_TCR, "FailedChallengeOverturned"): _challenge_resolved,
    (ContractName.CIVIL_TCR, "SuccessfulChallengeOverturned"): _challenge_resolved,
    (ContractName.CIVIL_TCR, "RewardClaimed"): _reward_claimed,
    (ContractName.CIVIL_TCR, "AppealRequested"): _appeal_requested,
    (ContractName.CIVIL_TCR, "AppealGranted"): _appeal_granted,
    (ContractName.CIVIL_TCR, "GrantedAppealChallenged"): _granted_appeal_challenged,
    (ContractName.CIVIL_TCR, "GrantedAppealConfirmed"): _appeal_decision,
    (ContractName.CIVIL_TCR, "GrantedAppealOverturned"): _appeal_decision,
    (ContractName.NEWSROOM, "NameChanged"): _name_changed,
    (ContractName.NEWSROOM, "OwnershipTransferred"): _ownership_transferred,
    (ContractName.NEWSROOM, "RoleAdded"): _role_changed,
    (ContractName.NEWSROOM, "RoleRemoved"): _role_changed,
    (ContractName.PLCR_VOTING, "PollCreated"): _poll_created,
    (ContractName.PLCR_VOTING, "VoteCommitted"): _vote_committed,
    (ContractName.PLCR_VOTING, "VoteRevealed"): _vote_revealed,
    (ContractName.PARAMETERIZER, "ReparameterizationProposal"): _proposal_created,
    (ContractName.PARAMETERIZER, "NewChallenge"): _proposal_challenged,
    (ContractName.PARAMETERIZER, "ChallengeFailed"): _proposal_challenge_resolved,
    (ContractName.PARAMETERIZER, "ChallengeSucceeded"): _proposal_challenge_resolved,
    (ContractName.PARAMETERIZER, "ProposalAccepted"): _proposal,
    (ContractName.PARAMETERIZER, "ProposalExpired"): _proposal,
    (ContractName.GOVERNMENT, "GovtReparameterizationProposal"): _government_proposal_created,
    (ContractName.GOVERNMENT, "ProposalPassed"): _proposal,
    (ContractName.GOVERNMENT, "ProposalFailed"): _proposal,
    (ContractName.GOVERNMENT, "ProposalExpired"): _proposal,
    (ContractName.MULTISIG_FACTORY, "ContractInstantiation"): _multisig_instantiation,
    (ContractName.MULTISIG, "OwnerAddition"): _multisig_owner,
    (ContractName.MULTISIG, "OwnerRemoval"): _multisig_owner,
    (ContractName.CVL_TOKEN, "Transfer"): _transfer,
}


def decode_event(event: ContractEvent) -> DecodedEvent[Any] | None:
    """Decode an event into its typed payload.

    Args:
        event: Raw contract event.

    Returns:
        The decoded event, or None if no handler understands the
        (contract, event name) pair.

    Raises:
        EventDecodeError: If the pair is known but the payload is malformed.
    """
    contract = ContractName.from_name(event.contract_name)
    if contract is None:
        return None
    name = event.name
    decoder = EVENT_DECODERS.get((contract, name))
    if decoder is None:
        return None
    return DecodedEvent(
        contract=contract, name=name, event=event, payload=decoder(_Fields(event))
    )
