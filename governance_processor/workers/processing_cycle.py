"""One processing cycle: fetch unseen events, dispatch, advance the watermark.

Both run drivers (cron polling and push notifications) execute this cycle.
The watermark is read once per cycle and the batch is fetched relative to
it; it is advanced from the same batch only when dispatch did not abort.
"""

from __future__ import annotations

from dataclasses import dataclass

from governance_processor.application.ports.error_reporter import ErrorReporter
from governance_processor.application.ports.event_source import EventSource
from governance_processor.application.services.base import LoggingMixin
from governance_processor.application.services.watermark_service import (
    WatermarkService,
)
from governance_processor.infrastructure.observability.correlation import begin_cycle
from governance_processor.workers.event_dispatcher import DispatchResult, EventDispatcher


@dataclass(frozen=True)
class CycleResult:
    """Outcome of a successful cycle.

    Attributes:
        correlation_id: Id bound to every log line of the cycle.
        fetched: Number of events retrieved.
        dispatch: Dispatcher summary.
        watermark_advanced: Whether the stored cursor moved.
    """

    correlation_id: str
    fetched: int
    dispatch: DispatchResult
    watermark_advanced: bool


class ProcessingCycle(LoggingMixin):
    """Runs fetch/dispatch/advance under a fresh correlation id."""

    def __init__(
        self,
        event_source: EventSource,
        dispatcher: EventDispatcher,
        watermarks: WatermarkService,
        error_reporter: ErrorReporter,
    ) -> None:
        self._source = event_source
        self._dispatcher = dispatcher
        self._watermarks = watermarks
        self._reporter = error_reporter
        self._init_logger()

    @property
    def source(self) -> EventSource:
        return self._source

    @property
    def watermarks(self) -> WatermarkService:
        return self._watermarks

    async def run(self) -> CycleResult:
        """Process everything newer than the watermark.

        Raises:
            ProcessorError: Any error from the event source, the
                dispatcher or the watermark write. It is reported before
                being re-raised; the watermark is left where it was.
        """
        correlation_id = begin_cycle()
        log = self._log_operation("run_cycle")
        try:
            watermark = await self._watermarks.current()
            events = await self._source.retrieve_events(
                watermark.last_timestamp, watermark.hashes
            )
            log.info(
                "cycle_started",
                from_timestamp=watermark.last_timestamp,
                excluded=len(watermark.hashes),
                fetched=len(events),
            )
            if not events:
                return CycleResult(correlation_id, 0, DispatchResult(), False)

            dispatch = await self._dispatcher.process(events)
            advanced = await self._watermarks.advance_to(events, watermark)
        except Exception as e:
            log.error("cycle_failed", error=str(e), error_type=type(e).__name__)
            self._reporter.report(
                e, {"operation": "run_cycle", "correlation_id": correlation_id}
            )
            raise

        log.info(
            "cycle_completed",
            handled=dispatch.handled,
            skipped=dispatch.skipped,
            dead_lettered=dispatch.dead_lettered,
            watermark_advanced=advanced is not None,
        )
        return CycleResult(correlation_id, len(events), dispatch, advanced is not None)

    async def refresh_contract(
        self, contract_address: str, from_timestamp: int
    ) -> DispatchResult:
        """Reprocess one contract's events from a timestamp.

        Used for out-of-band refreshes. Nothing is excluded and the
        watermark is not touched.
        """
        correlation_id = begin_cycle()
        log = self._log_operation(
            "refresh_contract",
            contract_address=contract_address,
            from_timestamp=from_timestamp,
        )
        try:
            events = await self._source.retrieve_events(
                from_timestamp, (), contract_address=contract_address
            )
            dispatch = await self._dispatcher.process(events)
        except Exception as e:
            log.error("refresh_failed", error=str(e), error_type=type(e).__name__)
            self._reporter.report(
                e,
                {
                    "operation": "refresh_contract",
                    "contract_address": contract_address,
                    "correlation_id": correlation_id,
                },
            )
            raise
        log.info("contract_refreshed", fetched=len(events), handled=dispatch.handled)
        return dispatch
