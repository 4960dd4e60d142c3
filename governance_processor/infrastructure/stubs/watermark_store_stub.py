"""In-memory WatermarkStore for development and tests."""

from __future__ import annotations

from collections.abc import Collection

from governance_processor.application.ports.watermark_store import WatermarkStore


class WatermarkStoreStub(WatermarkStore):
    """Holds the cursor in two attributes written independently."""

    def __init__(self, timestamp: int = 0, hashes: Collection[str] = ()) -> None:
        self._timestamp = timestamp
        self._hashes: list[str] = list(hashes)

    async def last_timestamp(self) -> int:
        return self._timestamp

    async def hashes_at_last_timestamp(self) -> list[str]:
        return list(self._hashes)

    async def update_timestamp(self, timestamp: int) -> None:
        self._timestamp = timestamp

    async def update_hashes(self, hashes: Collection[str]) -> None:
        self._hashes = list(hashes)

    def reset(self) -> None:
        self._timestamp = 0
        self._hashes = []
