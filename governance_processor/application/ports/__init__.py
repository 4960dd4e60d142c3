"""Application ports (interfaces) for the governance processor.

Ports define the boundaries to storage, the event log, the chain and the
notification transport. Implementations live in infrastructure/.
"""

from governance_processor.application.ports.appeal_repository import AppealRepository
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
from governance_processor.application.ports.challenge_repository import (
    ChallengeRepository,
)
from governance_processor.application.ports.dead_letter import DeadLetterQueue
from governance_processor.application.ports.error_reporter import ErrorReporter
from governance_processor.application.ports.event_publisher import EventPublisher
from governance_processor.application.ports.event_source import EventSource
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
from governance_processor.application.ports.notification_subscriber import (
    NotificationSubscriber,
    ReceivedMessage,
)
from governance_processor.application.ports.parameter_repository import (
    ParameterProposalRepository,
    ParameterRepository,
)
from governance_processor.application.ports.poll_repository import PollRepository
from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.ports.time_authority import (
    TimeAuthorityProtocol,
)
from governance_processor.application.ports.token_transfer_repository import (
    TokenTransferRepository,
)
from governance_processor.application.ports.user_challenge_data_repository import (
    UserChallengeDataRepository,
)
from governance_processor.application.ports.watermark_store import WatermarkStore

__all__: list[str] = [
    "AppealRepository",
    "ChainReader",
    "ChallengeRepository",
    "DeadLetterQueue",
    "ErrorReporter",
    "EventPublisher",
    "EventSource",
    "GovernanceEventRepository",
    "GovernmentParameterRepository",
    "GovernmentProposalRepository",
    "ListingRepository",
    "MultiSigRepository",
    "NewsroomRecord",
    "NotificationSubscriber",
    "OnChainAppeal",
    "OnChainChallenge",
    "OnChainGovernmentProposal",
    "OnChainListing",
    "OnChainPoll",
    "OnChainProposal",
    "ParameterProposalRepository",
    "ParameterRepository",
    "PollRepository",
    "ProcessorRepositories",
    "ReceivedMessage",
    "TimeAuthorityProtocol",
    "TokenTransferRepository",
    "UserChallengeDataRepository",
    "WatermarkStore",
]
