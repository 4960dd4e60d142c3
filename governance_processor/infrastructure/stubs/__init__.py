"""In-memory implementations of every port.

These back the test suite and local runs without a database. They are
NOT suitable for production use.
"""

from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.infrastructure.stubs.appeal_repository_stub import (
    AppealRepositoryStub,
)
from governance_processor.infrastructure.stubs.chain_reader_stub import ChainReaderStub
from governance_processor.infrastructure.stubs.challenge_repository_stub import (
    ChallengeRepositoryStub,
)
from governance_processor.infrastructure.stubs.dead_letter_stub import (
    DeadLetterQueueStub,
)
from governance_processor.infrastructure.stubs.error_reporter_stub import (
    ErrorReporterStub,
)
from governance_processor.infrastructure.stubs.event_publisher_stub import (
    EventPublisherStub,
)
from governance_processor.infrastructure.stubs.event_source_stub import EventSourceStub
from governance_processor.infrastructure.stubs.governance_event_repository_stub import (
    GovernanceEventRepositoryStub,
)
from governance_processor.infrastructure.stubs.government_parameter_repository_stub import (
    GovernmentParameterRepositoryStub,
    GovernmentProposalRepositoryStub,
)
from governance_processor.infrastructure.stubs.listing_repository_stub import (
    ListingRepositoryStub,
)
from governance_processor.infrastructure.stubs.multisig_repository_stub import (
    MultiSigRepositoryStub,
)
from governance_processor.infrastructure.stubs.notification_subscriber_stub import (
    NotificationSubscriberStub,
)
from governance_processor.infrastructure.stubs.parameter_repository_stub import (
    ParameterProposalRepositoryStub,
    ParameterRepositoryStub,
)
from governance_processor.infrastructure.stubs.poll_repository_stub import (
    PollRepositoryStub,
)
from governance_processor.infrastructure.stubs.token_transfer_repository_stub import (
    TokenTransferRepositoryStub,
)
from governance_processor.infrastructure.stubs.user_challenge_data_repository_stub import (
    UserChallengeDataRepositoryStub,
)
from governance_processor.infrastructure.stubs.watermark_store_stub import (
    WatermarkStoreStub,
)


def create_in_memory_repositories() -> ProcessorRepositories:
    """Build a fresh set of empty in-memory aggregate stores."""
    return ProcessorRepositories(
        listings=ListingRepositoryStub(),
        challenges=ChallengeRepositoryStub(),
        polls=PollRepositoryStub(),
        appeals=AppealRepositoryStub(),
        parameters=ParameterRepositoryStub(),
        proposals=ParameterProposalRepositoryStub(),
        government_parameters=GovernmentParameterRepositoryStub(),
        government_proposals=GovernmentProposalRepositoryStub(),
        token_transfers=TokenTransferRepositoryStub(),
        multisigs=MultiSigRepositoryStub(),
        user_challenge_data=UserChallengeDataRepositoryStub(),
        governance_events=GovernanceEventRepositoryStub(),
    )


__all__: list[str] = [
    "AppealRepositoryStub",
    "ChainReaderStub",
    "ChallengeRepositoryStub",
    "DeadLetterQueueStub",
    "ErrorReporterStub",
    "EventPublisherStub",
    "EventSourceStub",
    "GovernanceEventRepositoryStub",
    "GovernmentParameterRepositoryStub",
    "GovernmentProposalRepositoryStub",
    "ListingRepositoryStub",
    "MultiSigRepositoryStub",
    "NotificationSubscriberStub",
    "ParameterProposalRepositoryStub",
    "ParameterRepositoryStub",
    "PollRepositoryStub",
    "TokenTransferRepositoryStub",
    "UserChallengeDataRepositoryStub",
    "WatermarkStoreStub",
    "create_in_memory_repositories",
]
