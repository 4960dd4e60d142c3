"""Domain models for the governance processor."""

from governance_processor.domain.models.appeal import Appeal
from governance_processor.domain.models.block_data import BlockData
from governance_processor.domain.models.challenge import Challenge, ChallengeType
from governance_processor.domain.models.governance_event import GovernanceEvent
from governance_processor.domain.models.governance_state import (
    REMOVED_STATES,
    GovernanceState,
)
from governance_processor.domain.models.government_parameter import (
    GovernmentParameter,
    GovernmentParameterProposal,
)
from governance_processor.domain.models.listing import Listing
from governance_processor.domain.models.multisig import MultiSig, MultiSigOwner
from governance_processor.domain.models.parameter import Parameter, ParameterProposal
from governance_processor.domain.models.poll import Poll
from governance_processor.domain.models.token_transfer import TokenTransfer
from governance_processor.domain.models.user_challenge_data import UserChallengeData
from governance_processor.domain.models.watermark import Watermark

__all__: list[str] = [
    "REMOVED_STATES",
    "Appeal",
    "BlockData",
    "Challenge",
    "ChallengeType",
    "GovernanceEvent",
    "GovernanceState",
    "GovernmentParameter",
    "GovernmentParameterProposal",
    "Listing",
    "MultiSig",
    "MultiSigOwner",
    "Parameter",
    "ParameterProposal",
    "Poll",
    "TokenTransfer",
    "UserChallengeData",
    "Watermark",
]
