"""WatermarkService: read and advance the processing cursor.

The cursor is only advanced after a batch has been dispatched without
aborting. Advancing writes the timestamp first and then the hash set; the
two writes fail independently and either failure surfaces as
WatermarkUpdateError tagged with the stage that failed.
"""

from __future__ import annotations

from collections.abc import Iterable

from governance_processor.application.ports.watermark_store import WatermarkStore
from governance_processor.application.services.base import LoggingMixin
from governance_processor.domain.errors import WatermarkUpdateError
from governance_processor.domain.events.contract_event import ContractEvent
from governance_processor.domain.models import Watermark


class WatermarkService(LoggingMixin):
    """Pairs the stored timestamp and hash set into a Watermark."""

    def __init__(self, store: WatermarkStore) -> None:
        self._store = store
        self._init_logger()

    @property
    def store(self) -> WatermarkStore:
        return self._store

    async def current(self) -> Watermark:
        timestamp = await self._store.last_timestamp()
        hashes = await self._store.hashes_at_last_timestamp()
        return Watermark(last_timestamp=timestamp, hashes=frozenset(hashes))

    async def advance_to(
        self, events: Iterable[ContractEvent], current: Watermark | None = None
    ) -> Watermark | None:
        """Persist the cursor reached by a processed batch.

        Args:
            events: The batch, in delivered order.
            current: The cursor the batch was fetched with; read from the
                store when omitted.

        Returns:
            The persisted Watermark, or None if no event moved it.

        Raises:
            WatermarkUpdateError: If either write fails.
        """
        if current is None:
            current = await self.current()
        advanced = current.advanced_by(events)
        if advanced is None:
            return None

        log = self._log_operation(
            "advance_watermark", last_timestamp=advanced.last_timestamp
        )
        try:
            await self._store.update_timestamp(advanced.last_timestamp)
        except Exception as e:
            log.error("watermark_update_failed", stage="timestamp", error=str(e))
            raise WatermarkUpdateError("timestamp", advanced.last_timestamp, e) from e
        try:
            await self._store.update_hashes(sorted(advanced.hashes))
        except Exception as e:
            log.error("watermark_update_failed", stage="hashes", error=str(e))
            raise WatermarkUpdateError("hashes", advanced.last_timestamp, e) from e

        log.info(
            "watermark_advanced",
            previous_timestamp=current.last_timestamp,
            hash_count=len(advanced.hashes),
        )
        return advanced
