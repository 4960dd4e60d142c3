"""ChainReader port: ground-truth reads of contract state.

Handlers fall back to the chain reader when an event references an
aggregate that was never recorded locally (processing started mid-history,
or an earlier event was lost). Every method returns None when the contract
has no such record and raises ChainReadError when the read itself fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class NewsroomRecord:
    """Newsroom contract metadata."""

    name: str
    owner: str
    charter_uri: str = ""


@dataclass(frozen=True)
class OnChainListing:
    """A registry contract's listings(address) entry."""

    app_expiry: int
    whitelisted: bool
    owner: str
    unstaked_deposit: int
    challenge_id: int


@dataclass(frozen=True)
class OnChainChallenge:
    """A registry contract's challenges(id) entry."""

    reward_pool: int
    challenger: str
    resolved: bool
    stake: int
    total_tokens: int
    request_appeal_expiry: int = 0


@dataclass(frozen=True)
class OnChainAppeal:
    """A registry contract's appeals(challengeId) entry."""

    requester: str
    appeal_fee_paid: int
    appeal_phase_expiry: int
    granted: bool
    open_to_challenge_expiry: int
    appeal_challenge_id: int


@dataclass(frozen=True)
class OnChainPoll:
    """A PLCR voting contract's pollMap(id) entry."""

    commit_end_date: int
    reveal_end_date: int
    vote_quorum: int
    votes_for: int
    votes_against: int


@dataclass(frozen=True)
class OnChainProposal:
    """A parameterizer contract's proposals(propId) entry."""

    prop_id: str
    name: str
    value: int
    deposit: int
    app_expiry: int
    challenge_id: int
    proposer: str
    process_by: int = 0


@dataclass(frozen=True)
class OnChainGovernmentProposal:
    """A government contract's proposals(propId) entry."""

    prop_id: str
    name: str
    value: int
    app_expiry: int
    poll_id: int


@runtime_checkable
class ChainReader(Protocol):
    """Read-only access to contract state."""

    async def read_newsroom(self, newsroom_address: str) -> NewsroomRecord | None:
        ...

    async def read_on_chain_listing(
        self, tcr_address: str, listing_address: str
    ) -> OnChainListing | None:
        ...

    async def read_on_chain_challenge(
        self, contract_address: str, challenge_id: int
    ) -> OnChainChallenge | None:
        """Read a challenge from the registry or parameterizer contract."""
        ...

    async def determine_reward(self, tcr_address: str, challenge_id: int) -> int:
        """Reward owed to the winner of a resolved challenge."""
        ...

    async def read_on_chain_appeal(
        self, tcr_address: str, challenge_id: int
    ) -> OnChainAppeal | None:
        ...

    async def read_on_chain_poll(self, poll_id: int) -> OnChainPoll | None:
        """Read a poll from the configured PLCR voting contract."""
        ...

    async def read_on_chain_proposal(
        self, contract_address: str, prop_id: str
    ) -> OnChainProposal | None:
        """Read a reparameterization proposal.

        Args:
            contract_address: Parameterizer contract address.
            prop_id: 0x hex proposal id.

        Returns:
            The proposal, or None if the contract does not know it.

        Raises:
            ChainReadError: If the read fails.
        """
        ...

    async def read_on_chain_government_proposal(
        self, contract_address: str, prop_id: str
    ) -> OnChainGovernmentProposal | None:
        ...

    async def read_multisig_owners(self, multisig_address: str) -> list[str]:
        """Current owners of a multisig wallet (empty if not a wallet)."""
        ...
