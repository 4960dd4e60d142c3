"""Event dispatcher: decode, route and apply one batch of contract events.

Events are applied strictly in delivered order, one at a time. Each event
is decoded once; an event whose (contract, event name) pair has no decoder
is skipped. Failures follow the ErrorHandler's batch policy: under ABORT
the first error propagates and the rest of the batch is not applied, under
SKIP data errors are dead-lettered and the batch continues.

When a publisher is configured, every applied event is published right
after its handlers run; a publish failure is treated like a handler failure.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from governance_processor.application.ports.dead_letter import DeadLetterQueue
from governance_processor.application.ports.event_publisher import EventPublisher
from governance_processor.application.services.base import LoggingMixin
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.domain.events.contract_event import ContractEvent
from governance_processor.domain.events.decoder import EventKey, decode_event
from governance_processor.workers.error_handler import ErrorHandler


@dataclass(frozen=True)
class DispatchResult:
    """Summary of one dispatched batch.

    Attributes:
        handled: Events at least one handler applied.
        skipped: Events with no decoder, or that no handler applied.
        dead_lettered: Events set aside under the skip policy.
    """

    handled: int = 0
    skipped: int = 0
    dead_lettered: int = 0

    @property
    def total(self) -> int:
        return self.handled + self.skipped + self.dead_lettered


class EventDispatcher(LoggingMixin):
    """Routes decoded events to the handlers that declare them.

    Example:
        >>> dispatcher = EventDispatcher(handlers, ErrorHandler(), dead_letters)
        >>> result = await dispatcher.process(events)
    """

    def __init__(
        self,
        handlers: Sequence[EventHandler],
        error_handler: ErrorHandler,
        dead_letter: DeadLetterQueue | None = None,
        publisher: EventPublisher | None = None,
    ) -> None:
        self._handlers = tuple(handlers)
        self._error_handler = error_handler
        self._dead_letter = dead_letter
        self._publisher = publisher
        self._routes: dict[EventKey, tuple[EventHandler, ...]] = {}
        for handler in self._handlers:
            for key in handler.handled_events:
                self._routes[key] = self._routes.get(key, ()) + (handler,)
        self._init_logger()

    @property
    def error_handler(self) -> ErrorHandler:
        return self._error_handler

    @property
    def publisher(self) -> EventPublisher | None:
        return self._publisher

    def handlers_for(self, key: EventKey) -> tuple[EventHandler, ...]:
        return self._routes.get(key, ())

    async def process(self, events: Iterable[ContractEvent]) -> DispatchResult:
        """Apply a batch in order.

        Returns:
            DispatchResult with per-outcome counts.

        Raises:
            ProcessorError: The first error under the abort policy, or a
                transport error under the skip policy.
        """
        handled = skipped = dead_lettered = 0
        log = self._log_operation("process")

        for event in events:
            try:
                applied = await self._apply(event)
            except Exception as e:
                decision = self._error_handler.handle(
                    e,
                    {
                        "event_hash": event.hash,
                        "event_type": event.name,
                        "contract_name": event.contract_name,
                        "timestamp": event.timestamp,
                    },
                )
                if decision.aborts_batch or self._dead_letter is None:
                    log.error(
                        "batch_aborted",
                        event_hash=event.hash,
                        event_type=event.name,
                        category=decision.category.value,
                        handled=handled,
                        error=str(e),
                    )
                    raise
                await self._dead_letter.dead_letter(event, e)
                dead_lettered += 1
                log.warning(
                    "event_dead_lettered",
                    event_hash=event.hash,
                    event_type=event.name,
                    category=decision.category.value,
                )
                continue

            if applied:
                handled += 1
            else:
                skipped += 1

        result = DispatchResult(
            handled=handled, skipped=skipped, dead_lettered=dead_lettered
        )
        log.info(
            "batch_dispatched",
            handled=result.handled,
            skipped=result.skipped,
            dead_lettered=result.dead_lettered,
        )
        return result

    async def _apply(self, event: ContractEvent) -> bool:
        decoded = decode_event(event)
        if decoded is None:
            self._log.debug(
                "event_not_handled",
                contract_name=event.contract_name,
                event_type=event.name,
                event_hash=event.hash,
            )
            return False

        applied = False
        for handler in self.handlers_for(decoded.key):
            if await handler.handle(decoded):
                applied = True
        if applied and self._publisher is not None:
            await self._publisher.publish(event)
        return applied
