"""Time Authority Protocol - interface for wall-clock and monotonic time.

Services that need the current time (the polling scheduler, proposal
reconciliation) MUST inject a TimeAuthorityProtocol implementation instead
of calling datetime.now() directly.

Handlers never stamp records with the wall clock; they use the event's
block timestamp so that reprocessing reproduces identical records.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    For production:
        Use SystemTimeAuthority from governance_processor/infrastructure/adapters/

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness (UTC)."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return current UTC time."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Note:
            Only differences are meaningful.
        """
        ...

    def epoch_seconds(self) -> int:
        """Return the current UTC time as integer epoch seconds."""
        return int(self.utcnow().timestamp())
