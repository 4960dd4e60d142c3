"""Wall-clock TimeAuthorityProtocol implementation."""

import time
from datetime import datetime, timezone

from governance_processor.application.ports.time_authority import (
    TimeAuthorityProtocol,
)


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Reads the system clock. Use FakeTimeAuthority in tests."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
