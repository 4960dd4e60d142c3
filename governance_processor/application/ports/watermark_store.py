"""WatermarkStore port.

The timestamp and the hash set are two separately persisted values. Read
both through WatermarkService, which pairs them into a Watermark; the hash
set on its own has no meaning.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Protocol, runtime_checkable


@runtime_checkable
class WatermarkStore(Protocol):
    """Durable storage for the processing cursor."""

    async def last_timestamp(self) -> int:
        """Last processed timestamp, 0 if never written."""
        ...

    async def hashes_at_last_timestamp(self) -> list[str]:
        """Hashes processed at the last timestamp, empty if never written."""
        ...

    async def update_timestamp(self, timestamp: int) -> None:
        """Persist the last processed timestamp."""
        ...

    async def update_hashes(self, hashes: Collection[str]) -> None:
        """Persist the hashes processed at the last timestamp."""
        ...
