"""Typed event payloads.

Each supported (contract, event name) pair decodes into exactly one of
these structures. Handlers never read the raw payload mapping.
"""

from __future__ import annotations

from dataclasses import dataclass

# Registry (TCR) events


@dataclass(frozen=True)
class ApplicationPayload:
    listing_address: str
    deposit: int
    app_end_date: int
    applicant: str
    statement: str


@dataclass(frozen=True)
class ListingStatusPayload:
    """Events that only name the listing (whitelisted, removed, ...)."""

    listing_address: str


@dataclass(frozen=True)
class DepositPayload:
    listing_address: str
    unstaked_deposit: int


@dataclass(frozen=True)
class ChallengeCreatedPayload:
    listing_address: str
    challenge_id: int
    statement: str
    commit_end_date: int
    reveal_end_date: int
    challenger: str


@dataclass(frozen=True)
class ChallengeResolvedPayload:
    """ChallengeFailed / ChallengeSucceeded and the overturned variants."""

    listing_address: str
    challenge_id: int
    total_tokens: int
    reward_pool: int | None


@dataclass(frozen=True)
class RewardClaimedPayload:
    challenge_id: int
    reward: int
    voter: str


@dataclass(frozen=True)
class AppealRequestedPayload:
    listing_address: str
    challenge_id: int
    appeal_fee_paid: int
    requester: str
    statement: str


@dataclass(frozen=True)
class AppealGrantedPayload:
    listing_address: str
    challenge_id: int
    statement: str


@dataclass(frozen=True)
class GrantedAppealChallengedPayload:
    listing_address: str
    challenge_id: int
    appeal_challenge_id: int
    statement: str


@dataclass(frozen=True)
class AppealDecisionPayload:
    """GrantedAppealConfirmed / GrantedAppealOverturned."""

    listing_address: str
    challenge_id: int
    appeal_challenge_id: int
    total_tokens: int
    reward_pool: int | None


# Newsroom events


@dataclass(frozen=True)
class NameChangedPayload:
    listing_address: str
    new_name: str


@dataclass(frozen=True)
class OwnershipTransferredPayload:
    listing_address: str
    previous_owner: str
    new_owner: str


@dataclass(frozen=True)
class RoleChangedPayload:
    listing_address: str
    grantee: str
    role: str


# PLCR voting events


@dataclass(frozen=True)
class PollCreatedPayload:
    poll_id: int
    vote_quorum: int
    commit_end_date: int
    reveal_end_date: int
    creator: str


@dataclass(frozen=True)
class VoteCommittedPayload:
    poll_id: int
    num_tokens: int
    voter: str


@dataclass(frozen=True)
class VoteRevealedPayload:
    poll_id: int
    num_tokens: int
    votes_for: int
    votes_against: int
    choice: int
    voter: str
    salt: int


# Parameterizer events


@dataclass(frozen=True)
class ProposalCreatedPayload:
    prop_id: str
    name: str
    value: int
    deposit: int
    app_end_date: int
    proposer: str


@dataclass(frozen=True)
class ProposalPayload:
    """ProposalAccepted / ProposalExpired (and government outcomes)."""

    prop_id: str


@dataclass(frozen=True)
class ProposalChallengedPayload:
    prop_id: str
    challenge_id: int
    challenger: str
    commit_end_date: int
    reveal_end_date: int


@dataclass(frozen=True)
class ProposalChallengeResolvedPayload:
    prop_id: str
    challenge_id: int
    total_tokens: int
    reward_pool: int | None


@dataclass(frozen=True)
class GovernmentProposalCreatedPayload:
    prop_id: str
    name: str
    value: int
    poll_id: int


# Wallet and token events


@dataclass(frozen=True)
class MultiSigInstantiationPayload:
    factory_address: str
    multisig_address: str


@dataclass(frozen=True)
class MultiSigOwnerPayload:
    multisig_address: str
    owner: str


@dataclass(frozen=True)
class TransferPayload:
    from_address: str
    to_address: str
    value: int
