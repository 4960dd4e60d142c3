"""Application services: event handlers, reconciliation and the watermark."""

from governance_processor.application.services.appeal_event_handler import (
    AppealEventHandler,
)
from governance_processor.application.services.challenge_event_handler import (
    ChallengeEventHandler,
)
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.application.services.governance_event_recorder import (
    GovernanceEventRecorder,
)
from governance_processor.application.services.government_event_handler import (
    GovernmentEventHandler,
)
from governance_processor.application.services.listing_event_handler import (
    ListingEventHandler,
)
from governance_processor.application.services.multisig_event_handler import (
    MultiSigEventHandler,
)
from governance_processor.application.services.parameterizer_event_handler import (
    PROCESS_BY_GRACE_SECONDS,
    ParameterizerEventHandler,
)
from governance_processor.application.services.poll_outcome import PollOutcomeRecorder
from governance_processor.application.services.reconciliation import ChainReconciler
from governance_processor.application.services.token_transfer_event_handler import (
    TokenTransferEventHandler,
)
from governance_processor.application.services.voting_event_handler import (
    VotingEventHandler,
)
from governance_processor.application.services.watermark_service import (
    WatermarkService,
)

__all__: list[str] = [
    "PROCESS_BY_GRACE_SECONDS",
    "AppealEventHandler",
    "ChainReconciler",
    "ChallengeEventHandler",
    "EventHandler",
    "GovernanceEventRecorder",
    "GovernmentEventHandler",
    "ListingEventHandler",
    "MultiSigEventHandler",
    "ParameterizerEventHandler",
    "PollOutcomeRecorder",
    "TokenTransferEventHandler",
    "VotingEventHandler",
    "WatermarkService",
]
