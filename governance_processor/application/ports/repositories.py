"""Bundle of aggregate repositories handed to the event handlers."""

from __future__ import annotations

from dataclasses import dataclass

from governance_processor.application.ports.appeal_repository import AppealRepository
from governance_processor.application.ports.challenge_repository import (
    ChallengeRepository,
)
from governance_processor.application.ports.governance_event_repository import (
    GovernanceEventRepository,
)
from governance_processor.application.ports.government_parameter_repository import (
    GovernmentParameterRepository,
    GovernmentProposalRepository,
)
from governance_processor.application.ports.listing_repository import (
    ListingRepository,
)
from governance_processor.application.ports.multisig_repository import (
    MultiSigRepository,
)
from governance_processor.application.ports.parameter_repository import (
    ParameterProposalRepository,
    ParameterRepository,
)
from governance_processor.application.ports.poll_repository import PollRepository
from governance_processor.application.ports.token_transfer_repository import (
    TokenTransferRepository,
)
from governance_processor.application.ports.user_challenge_data_repository import (
    UserChallengeDataRepository,
)


@dataclass(frozen=True)
class ProcessorRepositories:
    """Every aggregate store the handlers write to."""

    listings: ListingRepository
    challenges: ChallengeRepository
    polls: PollRepository
    appeals: AppealRepository
    parameters: ParameterRepository
    proposals: ParameterProposalRepository
    government_parameters: GovernmentParameterRepository
    government_proposals: GovernmentProposalRepository
    token_transfers: TokenTransferRepository
    multisigs: MultiSigRepository
    user_challenge_data: UserChallengeDataRepository
    governance_events: GovernanceEventRepository
