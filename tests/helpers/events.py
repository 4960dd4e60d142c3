"""Builders for raw contract events as the crawler stores them.

Payload keys follow the crawler's log argument names. Every builder takes
the block timestamp and an optional hash; hashes default to a fresh
unique value so a test only spells one out when it asserts on it.
"""

from __future__ import annotations

import itertools
from typing import Any

from governance_processor.domain.events.contract_event import ContractEvent
from governance_processor.domain.events.contract_names import ContractName

TCR_ADDRESS = "0x" + "1" * 40
PLCR_ADDRESS = "0x" + "2" * 40
PARAMETERIZER_ADDRESS = "0x" + "3" * 40
GOVERNMENT_ADDRESS = "0x" + "4" * 40
TOKEN_ADDRESS = "0x" + "5" * 40
FACTORY_ADDRESS = "0x" + "6" * 40

NEWSROOM = "0x" + "a" * 40
OTHER_NEWSROOM = "0x" + "b" * 40
APPLICANT = "0x" + "c" * 40
CHALLENGER = "0x" + "d" * 40
VOTER = "0x" + "e" * 40
WALLET = "0x" + "f" * 40

PROP_ID = "0x" + "ab" * 32

_hashes = itertools.count(1)


def next_hash() -> str:
    return f"0xevent{next(_hashes):06d}"


def make_event(
    contract: ContractName | str,
    event_type: str,
    payload: dict[str, Any],
    *,
    timestamp: int,
    contract_address: str,
    hash: str | None = None,
    block_number: int | None = None,
    log_index: int = 0,
) -> ContractEvent:
    name = contract.value if isinstance(contract, ContractName) else contract
    event_hash = hash or next_hash()
    return ContractEvent(
        contract_name=name,
        event_type=event_type,
        contract_address=contract_address,
        timestamp=timestamp,
        hash=event_hash,
        payload=payload,
        block_number=block_number if block_number is not None else timestamp,
        tx_hash="0xtx" + event_hash[-6:],
        log_index=log_index,
    )


def _tcr(event_type: str, payload: dict[str, Any], ts: int, **kwargs: Any) -> ContractEvent:
    return make_event(
        ContractName.CIVIL_TCR,
        event_type,
        payload,
        timestamp=ts,
        contract_address=TCR_ADDRESS,
        **kwargs,
    )


# Registry


def application(
    listing: str = NEWSROOM,
    *,
    ts: int = 1000,
    deposit: int = 1000,
    app_end_date: int = 5000,
    **kwargs: Any,
) -> ContractEvent:
    return _tcr(
        "_Application",
        {
            "ListingAddress": listing,
            "Deposit": deposit,
            "AppEndDate": app_end_date,
            "Applicant": APPLICANT,
            "Data": "charter",
        },
        ts,
        **kwargs,
    )


def listing_status(
    event_type: str, listing: str = NEWSROOM, *, ts: int = 2000, **kwargs: Any
) -> ContractEvent:
    """ApplicationWhitelisted, ApplicationRemoved, ListingRemoved, ..."""
    return _tcr(event_type, {"ListingAddress": listing}, ts, **kwargs)


def deposit(
    listing: str = NEWSROOM,
    *,
    unstaked_deposit: int,
    ts: int = 2500,
    withdrawal: bool = False,
    **kwargs: Any,
) -> ContractEvent:
    return _tcr(
        "_Withdrawal" if withdrawal else "_Deposit",
        {
            "ListingAddress": listing,
            "Added": 0,
            "NewTotal": unstaked_deposit,
            "UnstakedDeposit": unstaked_deposit,
        },
        ts,
        **kwargs,
    )


def challenge(
    challenge_id: int,
    listing: str = NEWSROOM,
    *,
    ts: int = 3000,
    commit_end_date: int = 4000,
    reveal_end_date: int = 4500,
    **kwargs: Any,
) -> ContractEvent:
    return _tcr(
        "_Challenge",
        {
            "ListingAddress": listing,
            "ChallengeID": challenge_id,
            "Data": "challenge statement",
            "CommitEndDate": commit_end_date,
            "RevealEndDate": reveal_end_date,
            "Challenger": CHALLENGER,
        },
        ts,
        **kwargs,
    )


def challenge_resolved(
    event_type: str,
    challenge_id: int,
    listing: str = NEWSROOM,
    *,
    ts: int = 6000,
    total_tokens: int = 700,
    reward_pool: int | None = None,
    **kwargs: Any,
) -> ContractEvent:
    """ChallengeFailed, ChallengeSucceeded and the two overturn events."""
    payload: dict[str, Any] = {
        "ListingAddress": listing,
        "ChallengeID": challenge_id,
        "TotalTokens": total_tokens,
    }
    if reward_pool is not None:
        payload["RewardPool"] = reward_pool
    return _tcr(event_type, payload, ts, **kwargs)


def reward_claimed(
    challenge_id: int, *, ts: int = 7000, reward: int = 10, **kwargs: Any
) -> ContractEvent:
    return _tcr(
        "_RewardClaimed",
        {"ChallengeID": challenge_id, "Reward": reward, "Voter": VOTER},
        ts,
        **kwargs,
    )


def appeal_requested(
    challenge_id: int, listing: str = NEWSROOM, *, ts: int = 6500, **kwargs: Any
) -> ContractEvent:
    return _tcr(
        "_AppealRequested",
        {
            "ListingAddress": listing,
            "ChallengeID": challenge_id,
            "AppealFeePaid": 50,
            "Requester": APPLICANT,
            "Data": "please reconsider",
        },
        ts,
        **kwargs,
    )


def appeal_granted(
    challenge_id: int, listing: str = NEWSROOM, *, ts: int = 6600, **kwargs: Any
) -> ContractEvent:
    return _tcr(
        "_AppealGranted",
        {"ListingAddress": listing, "ChallengeID": challenge_id, "Data": "granted"},
        ts,
        **kwargs,
    )


def granted_appeal_challenged(
    challenge_id: int,
    appeal_challenge_id: int,
    listing: str = NEWSROOM,
    *,
    ts: int = 6700,
    **kwargs: Any,
) -> ContractEvent:
    return _tcr(
        "_GrantedAppealChallenged",
        {
            "ListingAddress": listing,
            "ChallengeID": challenge_id,
            "AppealChallengeID": appeal_challenge_id,
            "Data": "disputed",
        },
        ts,
        **kwargs,
    )


def granted_appeal_decision(
    event_type: str,
    challenge_id: int,
    appeal_challenge_id: int,
    listing: str = NEWSROOM,
    *,
    ts: int = 6800,
    **kwargs: Any,
) -> ContractEvent:
    return _tcr(
        event_type,
        {
            "ListingAddress": listing,
            "ChallengeID": challenge_id,
            "AppealChallengeID": appeal_challenge_id,
            "TotalTokens": 300,
        },
        ts,
        **kwargs,
    )


# Newsroom


def _newsroom(
    event_type: str, payload: dict[str, Any], listing: str, ts: int, **kwargs: Any
) -> ContractEvent:
    return make_event(
        ContractName.NEWSROOM,
        event_type,
        payload,
        timestamp=ts,
        contract_address=listing,
        **kwargs,
    )


def name_changed(
    name: str, listing: str = NEWSROOM, *, ts: int = 1500, **kwargs: Any
) -> ContractEvent:
    return _newsroom("NameChanged", {"NewName": name}, listing, ts, **kwargs)


def ownership_transferred(
    previous_owner: str,
    new_owner: str,
    listing: str = NEWSROOM,
    *,
    ts: int = 1600,
    **kwargs: Any,
) -> ContractEvent:
    return _newsroom(
        "OwnershipTransferred",
        {"PreviousOwner": previous_owner, "NewOwner": new_owner},
        listing,
        ts,
        **kwargs,
    )


def role_changed(
    event_type: str,
    grantee: str,
    listing: str = NEWSROOM,
    *,
    ts: int = 1700,
    **kwargs: Any,
) -> ContractEvent:
    return _newsroom(
        event_type, {"Grantee": grantee, "Role": "editor"}, listing, ts, **kwargs
    )


# PLCR voting


def _plcr(event_type: str, payload: dict[str, Any], ts: int, **kwargs: Any) -> ContractEvent:
    return make_event(
        ContractName.PLCR_VOTING,
        event_type,
        payload,
        timestamp=ts,
        contract_address=PLCR_ADDRESS,
        **kwargs,
    )


def poll_created(
    poll_id: int,
    *,
    ts: int = 3000,
    vote_quorum: int = 50,
    commit_end_date: int = 4000,
    reveal_end_date: int = 4500,
    **kwargs: Any,
) -> ContractEvent:
    return _plcr(
        "_PollCreated",
        {
            "PollID": poll_id,
            "VoteQuorum": vote_quorum,
            "CommitEndDate": commit_end_date,
            "RevealEndDate": reveal_end_date,
            "Creator": CHALLENGER,
        },
        ts,
        **kwargs,
    )


def vote_committed(
    poll_id: int, voter: str = VOTER, *, ts: int = 3500, num_tokens: int = 100, **kwargs: Any
) -> ContractEvent:
    return _plcr(
        "_VoteCommitted",
        {"PollID": poll_id, "NumTokens": num_tokens, "Voter": voter},
        ts,
        **kwargs,
    )


def vote_revealed(
    poll_id: int,
    voter: str = VOTER,
    *,
    choice: int,
    ts: int = 4200,
    num_tokens: int = 100,
    votes_for: int = 0,
    votes_against: int = 0,
    **kwargs: Any,
) -> ContractEvent:
    return _plcr(
        "_VoteRevealed",
        {
            "PollID": poll_id,
            "NumTokens": num_tokens,
            "VotesFor": votes_for,
            "VotesAgainst": votes_against,
            "Choice": choice,
            "Voter": voter,
            "Salt": 42,
        },
        ts,
        **kwargs,
    )


# Parameterizer and government


def _parameterizer(
    event_type: str, payload: dict[str, Any], ts: int, **kwargs: Any
) -> ContractEvent:
    return make_event(
        ContractName.PARAMETERIZER,
        event_type,
        payload,
        timestamp=ts,
        contract_address=PARAMETERIZER_ADDRESS,
        **kwargs,
    )


def reparameterization_proposal(
    name: str,
    value: int,
    *,
    prop_id: str = PROP_ID,
    ts: int = 1000,
    app_end_date: int = 5000,
    **kwargs: Any,
) -> ContractEvent:
    return _parameterizer(
        "_ReparameterizationProposal",
        {
            "Name": name,
            "Value": value,
            "PropID": prop_id,
            "Deposit": 100,
            "AppEndDate": app_end_date,
            "Proposer": APPLICANT,
        },
        ts,
        **kwargs,
    )


def proposal_event(
    event_type: str, *, prop_id: str = PROP_ID, ts: int = 6000, **kwargs: Any
) -> ContractEvent:
    """ProposalAccepted or ProposalExpired."""
    return _parameterizer(event_type, {"PropID": prop_id}, ts, **kwargs)


def proposal_new_challenge(
    challenge_id: int, *, prop_id: str = PROP_ID, ts: int = 2000, **kwargs: Any
) -> ContractEvent:
    return _parameterizer(
        "_NewChallenge",
        {
            "PropID": prop_id,
            "ChallengeID": challenge_id,
            "Challenger": CHALLENGER,
            "CommitEndDate": 3000,
            "RevealEndDate": 3500,
        },
        ts,
        **kwargs,
    )


def proposal_challenge_resolved(
    event_type: str,
    challenge_id: int,
    *,
    prop_id: str = PROP_ID,
    ts: int = 4000,
    **kwargs: Any,
) -> ContractEvent:
    return _parameterizer(
        event_type,
        {
            "PropID": prop_id,
            "ChallengeID": challenge_id,
            "RewardPool": 20,
            "TotalTokens": 500,
        },
        ts,
        **kwargs,
    )


def government_proposal(
    name: str,
    value: int,
    *,
    prop_id: str = PROP_ID,
    poll_id: int = 0,
    ts: int = 1000,
    **kwargs: Any,
) -> ContractEvent:
    return make_event(
        ContractName.GOVERNMENT,
        "_GovtReparameterizationProposal",
        {"Name": name, "Value": value, "PropID": prop_id, "PollID": poll_id},
        timestamp=ts,
        contract_address=GOVERNMENT_ADDRESS,
        **kwargs,
    )


def government_proposal_event(
    event_type: str, *, prop_id: str = PROP_ID, ts: int = 5000, **kwargs: Any
) -> ContractEvent:
    return make_event(
        ContractName.GOVERNMENT,
        event_type,
        {"PropID": prop_id},
        timestamp=ts,
        contract_address=GOVERNMENT_ADDRESS,
        **kwargs,
    )


# Wallets and token


def contract_instantiation(
    wallet: str = WALLET, *, ts: int = 1000, **kwargs: Any
) -> ContractEvent:
    return make_event(
        ContractName.MULTISIG_FACTORY,
        "ContractInstantiation",
        {"Sender": APPLICANT, "Instantiation": wallet},
        timestamp=ts,
        contract_address=FACTORY_ADDRESS,
        **kwargs,
    )


def owner_change(
    event_type: str, owner: str, wallet: str = WALLET, *, ts: int = 2000, **kwargs: Any
) -> ContractEvent:
    return make_event(
        ContractName.MULTISIG,
        event_type,
        {"Owner": owner},
        timestamp=ts,
        contract_address=wallet,
        **kwargs,
    )


def transfer(
    from_address: str, to_address: str, value: int, *, ts: int = 1000, **kwargs: Any
) -> ContractEvent:
    return make_event(
        ContractName.CVL_TOKEN,
        "Transfer",
        {"From": from_address, "To": to_address, "Value": value},
        timestamp=ts,
        contract_address=TOKEN_ADDRESS,
        **kwargs,
    )
