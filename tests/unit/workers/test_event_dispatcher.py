"""Unit tests for EventDispatcher."""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.domain.errors import (
    EventDecodeError,
    ListingNotFoundError,
    PersistenceError,
)
from governance_processor.domain.events.contract_event import ContractEvent
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.domain.events.decoder import DecodedEvent
from governance_processor.infrastructure.stubs import (
    DeadLetterQueueStub,
    EventPublisherStub,
)
from governance_processor.workers.error_handler import BatchErrorPolicy, ErrorHandler
from governance_processor.workers.event_dispatcher import DispatchResult, EventDispatcher
from tests.helpers import events as ev

TRANSFER = (ContractName.CVL_TOKEN, "Transfer")


class RecordingHandler(EventHandler):
    """Test handler that records what it saw and returns a fixed answer."""

    handled_events = frozenset({TRANSFER})

    def __init__(self, result: bool = True, error: Exception | None = None) -> None:
        self._result = result
        self._error = error
        self.seen: list[str] = []
        self._init_logger()

    async def handle(self, decoded: DecodedEvent[Any]) -> bool:
        self.seen.append(decoded.event.hash)
        if self._error is not None:
            raise self._error
        return self._result


def _unknown_event() -> ContractEvent:
    return ev.make_event(
        "UnknownContract", "Anything", {}, timestamp=1, contract_address=ev.TOKEN_ADDRESS
    )


def _broken_transfer() -> ContractEvent:
    return ev.make_event(
        ContractName.CVL_TOKEN,
        "Transfer",
        {"From": ev.APPLICANT},
        timestamp=1,
        contract_address=ev.TOKEN_ADDRESS,
    )


class TestRouting:
    @pytest.mark.asyncio
    async def test_every_declaring_handler_sees_the_event(self) -> None:
        first, second = RecordingHandler(), RecordingHandler(result=False)
        dispatcher = EventDispatcher([first, second], ErrorHandler())
        event = ev.transfer(ev.APPLICANT, ev.VOTER, 1)

        result = await dispatcher.process([event])

        assert first.seen == second.seen == [event.hash]
        assert result == DispatchResult(handled=1)
        assert dispatcher.handlers_for(TRANSFER) == (first, second)

    @pytest.mark.asyncio
    async def test_unknown_events_are_skipped(self) -> None:
        handler = RecordingHandler()
        dispatcher = EventDispatcher([handler], ErrorHandler())

        result = await dispatcher.process(
            [_unknown_event(), ev.transfer(ev.APPLICANT, ev.VOTER, 1)]
        )

        assert result == DispatchResult(handled=1, skipped=1)
        assert result.total == 2
        assert len(handler.seen) == 1

    @pytest.mark.asyncio
    async def test_handler_declining_counts_as_skipped(self) -> None:
        dispatcher = EventDispatcher([RecordingHandler(result=False)], ErrorHandler())

        result = await dispatcher.process([ev.transfer(ev.APPLICANT, ev.VOTER, 1)])

        assert result == DispatchResult(skipped=1)

    @pytest.mark.asyncio
    async def test_events_applied_in_delivered_order(self) -> None:
        handler = RecordingHandler()
        dispatcher = EventDispatcher([handler], ErrorHandler())
        batch = [
            ev.transfer(ev.APPLICANT, ev.VOTER, 1, ts=30),
            ev.transfer(ev.APPLICANT, ev.VOTER, 1, ts=10),
            ev.transfer(ev.APPLICANT, ev.VOTER, 1, ts=20),
        ]

        await dispatcher.process(batch)

        assert handler.seen == [e.hash for e in batch]


class TestAbortPolicy:
    @pytest.mark.asyncio
    async def test_first_error_stops_the_batch(
        self, dispatcher: EventDispatcher, repositories: ProcessorRepositories
    ) -> None:
        with pytest.raises(ListingNotFoundError):
            await dispatcher.process([ev.name_changed("X"), ev.application()])

        assert await repositories.listings.get_listing(ev.NEWSROOM) is None

    @pytest.mark.asyncio
    async def test_decode_error_propagates(self) -> None:
        dispatcher = EventDispatcher([RecordingHandler()], ErrorHandler())

        with pytest.raises(EventDecodeError):
            await dispatcher.process([_broken_transfer()])


class TestSkipPolicy:
    @pytest.mark.asyncio
    async def test_data_errors_are_dead_lettered(
        self,
        skipping_dispatcher: EventDispatcher,
        repositories: ProcessorRepositories,
        dead_letters: DeadLetterQueueStub,
    ) -> None:
        orphan = ev.name_changed("X")

        result = await skipping_dispatcher.process([orphan, ev.application()])

        assert result == DispatchResult(handled=1, dead_lettered=1)
        assert dead_letters.hashes == [orphan.hash]
        assert isinstance(dead_letters.dead_letters[0][1], ListingNotFoundError)
        assert await repositories.listings.get_listing(ev.NEWSROOM) is not None

    @pytest.mark.asyncio
    async def test_decode_errors_are_dead_lettered(self) -> None:
        dead_letters = DeadLetterQueueStub()
        dispatcher = EventDispatcher(
            [RecordingHandler()], ErrorHandler(BatchErrorPolicy.SKIP), dead_letters
        )
        broken = _broken_transfer()

        result = await dispatcher.process([broken])

        assert result.dead_lettered == 1
        assert dead_letters.hashes == [broken.hash]

    @pytest.mark.asyncio
    async def test_transport_errors_still_abort(self) -> None:
        dead_letters = DeadLetterQueueStub()
        failing = RecordingHandler(error=PersistenceError("update_listing", "down"))
        dispatcher = EventDispatcher(
            [failing], ErrorHandler(BatchErrorPolicy.SKIP), dead_letters
        )

        with pytest.raises(PersistenceError):
            await dispatcher.process(
                [
                    ev.transfer(ev.APPLICANT, ev.VOTER, 1),
                    ev.transfer(ev.APPLICANT, ev.VOTER, 2),
                ]
            )

        assert len(failing.seen) == 1
        assert dead_letters.dead_letters == []

    @pytest.mark.asyncio
    async def test_without_dead_letter_queue_errors_propagate(self) -> None:
        dispatcher = EventDispatcher(
            [RecordingHandler()], ErrorHandler(BatchErrorPolicy.SKIP), None
        )

        with pytest.raises(EventDecodeError):
            await dispatcher.process([_broken_transfer()])


class TestPublishing:
    @pytest.mark.asyncio
    async def test_only_applied_events_are_published(self) -> None:
        publisher = EventPublisherStub()
        dispatcher = EventDispatcher(
            [RecordingHandler()], ErrorHandler(), publisher=publisher
        )
        applied = ev.transfer(ev.APPLICANT, ev.VOTER, 1)

        await dispatcher.process([_unknown_event(), applied])

        assert publisher.events == [applied]
        assert publisher.published == [{"txHash": applied.tx_hash}]

    @pytest.mark.asyncio
    async def test_declined_events_are_not_published(self) -> None:
        publisher = EventPublisherStub()
        dispatcher = EventDispatcher(
            [RecordingHandler(result=False)], ErrorHandler(), publisher=publisher
        )

        await dispatcher.process([ev.transfer(ev.APPLICANT, ev.VOTER, 1)])

        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_failed_events_are_not_published(self) -> None:
        publisher = EventPublisherStub()
        dispatcher = EventDispatcher(
            [RecordingHandler()],
            ErrorHandler(BatchErrorPolicy.SKIP),
            DeadLetterQueueStub(),
            publisher,
        )

        result = await dispatcher.process([_broken_transfer()])

        assert result.dead_lettered == 1
        assert publisher.published == []

    @pytest.mark.asyncio
    async def test_publish_failure_aborts_the_batch(self) -> None:
        publisher = AsyncMock()
        publisher.publish.side_effect = PersistenceError("publish_event", "down")
        handler = RecordingHandler()
        dispatcher = EventDispatcher(
            [handler],
            ErrorHandler(BatchErrorPolicy.SKIP),
            DeadLetterQueueStub(),
            publisher,
        )

        with pytest.raises(PersistenceError):
            await dispatcher.process(
                [
                    ev.transfer(ev.APPLICANT, ev.VOTER, 1),
                    ev.transfer(ev.APPLICANT, ev.VOTER, 2),
                ]
            )

        assert len(handler.seen) == 1
