"""In-memory ChainReader seeded by tests and local runs.

Every read returns what was seeded for its key, or None. Reads are
counted in `calls` so tests can assert that the chain was (or was not)
consulted.
"""

from __future__ import annotations

from collections import Counter

from governance_processor.application.ports.chain_reader import (
    ChainReader,
    NewsroomRecord,
    OnChainAppeal,
    OnChainChallenge,
    OnChainGovernmentProposal,
    OnChainListing,
    OnChainPoll,
    OnChainProposal,
)


class ChainReaderStub(ChainReader):
    """Seedable chain reader.

    Contract addresses are ignored for lookups: a local run talks to one
    deployment, so ids are unique across it.
    """

    def __init__(self) -> None:
        self._newsrooms: dict[str, NewsroomRecord] = {}
        self._listings: dict[str, OnChainListing] = {}
        self._challenges: dict[int, OnChainChallenge] = {}
        self._rewards: dict[int, int] = {}
        self._appeals: dict[int, OnChainAppeal] = {}
        self._polls: dict[int, OnChainPoll] = {}
        self._proposals: dict[str, OnChainProposal] = {}
        self._government_proposals: dict[str, OnChainGovernmentProposal] = {}
        self._multisig_owners: dict[str, list[str]] = {}
        self.calls: Counter[str] = Counter()

    # Seeding

    def seed_newsroom(self, address: str, record: NewsroomRecord) -> None:
        self._newsrooms[address.lower()] = record

    def seed_listing(self, address: str, listing: OnChainListing) -> None:
        self._listings[address.lower()] = listing

    def seed_challenge(self, challenge_id: int, challenge: OnChainChallenge) -> None:
        self._challenges[challenge_id] = challenge

    def seed_reward(self, challenge_id: int, reward: int) -> None:
        self._rewards[challenge_id] = reward

    def seed_appeal(self, challenge_id: int, appeal: OnChainAppeal) -> None:
        self._appeals[challenge_id] = appeal

    def seed_poll(self, poll_id: int, poll: OnChainPoll) -> None:
        self._polls[poll_id] = poll

    def seed_proposal(self, proposal: OnChainProposal) -> None:
        self._proposals[proposal.prop_id] = proposal

    def seed_government_proposal(self, proposal: OnChainGovernmentProposal) -> None:
        self._government_proposals[proposal.prop_id] = proposal

    def seed_multisig_owners(self, multisig_address: str, owners: list[str]) -> None:
        self._multisig_owners[multisig_address.lower()] = list(owners)

    # ChainReader

    async def read_newsroom(self, newsroom_address: str) -> NewsroomRecord | None:
        self.calls["read_newsroom"] += 1
        return self._newsrooms.get(newsroom_address.lower())

    async def read_on_chain_listing(
        self, tcr_address: str, listing_address: str
    ) -> OnChainListing | None:
        self.calls["read_on_chain_listing"] += 1
        return self._listings.get(listing_address.lower())

    async def read_on_chain_challenge(
        self, contract_address: str, challenge_id: int
    ) -> OnChainChallenge | None:
        self.calls["read_on_chain_challenge"] += 1
        return self._challenges.get(challenge_id)

    async def determine_reward(self, tcr_address: str, challenge_id: int) -> int:
        self.calls["determine_reward"] += 1
        return self._rewards.get(challenge_id, 0)

    async def read_on_chain_appeal(
        self, tcr_address: str, challenge_id: int
    ) -> OnChainAppeal | None:
        self.calls["read_on_chain_appeal"] += 1
        return self._appeals.get(challenge_id)

    async def read_on_chain_poll(self, poll_id: int) -> OnChainPoll | None:
        self.calls["read_on_chain_poll"] += 1
        return self._polls.get(poll_id)

    async def read_on_chain_proposal(
        self, contract_address: str, prop_id: str
    ) -> OnChainProposal | None:
        self.calls["read_on_chain_proposal"] += 1
        return self._proposals.get(prop_id)

    async def read_on_chain_government_proposal(
        self, contract_address: str, prop_id: str
    ) -> OnChainGovernmentProposal | None:
        self.calls["read_on_chain_government_proposal"] += 1
        return self._government_proposals.get(prop_id)

    async def read_multisig_owners(self, multisig_address: str) -> list[str]:
        self.calls["read_multisig_owners"] += 1
        return list(self._multisig_owners.get(multisig_address.lower(), []))
