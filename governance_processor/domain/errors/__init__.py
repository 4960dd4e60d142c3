"""Domain errors for the governance processor.

All exceptions inherit from ProcessorError.
"""

from governance_processor.domain.errors.event_decode import EventDecodeError
from governance_processor.domain.errors.infrastructure import (
    ChainReadError,
    DuplicateRecordError,
    PersistenceError,
    WatermarkUpdateError,
)
from governance_processor.domain.errors.not_found import (
    AppealNotFoundError,
    ChallengeNotFoundError,
    ListingNotFoundError,
    MultiSigNotFoundError,
    PollNotFoundError,
    ProposalNotFoundError,
    RecordNotFoundError,
)

__all__: list[str] = [
    "AppealNotFoundError",
    "ChainReadError",
    "ChallengeNotFoundError",
    "DuplicateRecordError",
    "EventDecodeError",
    "ListingNotFoundError",
    "MultiSigNotFoundError",
    "PersistenceError",
    "PollNotFoundError",
    "ProposalNotFoundError",
    "RecordNotFoundError",
    "WatermarkUpdateError",
]
