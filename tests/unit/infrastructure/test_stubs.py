"""Unit tests for the in-memory port implementations."""

import pytest

from governance_processor.application.ports.chain_reader import ChainReader
from governance_processor.application.ports.event_publisher import EventPublisher
from governance_processor.application.ports.event_source import EventSource
from governance_processor.application.ports.listing_repository import (
    ListingRepository,
)
from governance_processor.application.ports.notification_subscriber import (
    NotificationSubscriber,
)
from governance_processor.domain.errors import DuplicateRecordError
from governance_processor.domain.models import Poll
from governance_processor.infrastructure.stubs import (
    ChainReaderStub,
    DeadLetterQueueStub,
    EventPublisherStub,
    EventSourceStub,
    ListingRepositoryStub,
    NotificationSubscriberStub,
    PollRepositoryStub,
    create_in_memory_repositories,
)
from tests.helpers import events as ev


class TestProtocolConformance:
    def test_stubs_satisfy_their_ports(self) -> None:
        assert isinstance(EventSourceStub(), EventSource)
        assert isinstance(ChainReaderStub(), ChainReader)
        assert isinstance(ListingRepositoryStub(), ListingRepository)
        assert isinstance(NotificationSubscriberStub(), NotificationSubscriber)
        assert isinstance(EventPublisherStub(), EventPublisher)

    def test_in_memory_repositories_are_fresh(self) -> None:
        first = create_in_memory_repositories()
        second = create_in_memory_repositories()

        assert first.listings is not second.listings


class TestEventSourceStub:
    @pytest.mark.asyncio
    async def test_filters_and_orders_like_the_sql_source(self) -> None:
        late = ev.application(ts=300)
        excluded = ev.application(ev.OTHER_NEWSROOM, ts=200)
        early = ev.transfer(ev.APPLICANT, ev.VOTER, 1, ts=200, log_index=1)
        too_old = ev.application(ts=100)
        source = EventSourceStub([late, excluded, early, too_old])

        events = await source.retrieve_events(200, {excluded.hash})

        assert events == [early, late]

    @pytest.mark.asyncio
    async def test_contract_filter_is_case_insensitive(self) -> None:
        registry = ev.application(ts=10)
        token = ev.transfer(ev.APPLICANT, ev.VOTER, 1, ts=10)
        source = EventSourceStub([registry, token])

        events = await source.retrieve_events(0, [], ev.TCR_ADDRESS.upper())

        assert events == [registry]
        assert source.requests == [(0, frozenset(), ev.TCR_ADDRESS.upper())]


class TestRepositoryStubs:
    @pytest.mark.asyncio
    async def test_create_rejects_existing_identity(self) -> None:
        polls = PollRepositoryStub()
        poll = Poll(poll_id=4, commit_end_date=10, reveal_end_date=20)
        await polls.create_poll(poll)

        with pytest.raises(DuplicateRecordError) as excinfo:
            await polls.create_poll(poll)

        assert excinfo.value.record_type == "poll"
        assert excinfo.value.operation == "create"

    @pytest.mark.asyncio
    async def test_update_upserts(self) -> None:
        polls = PollRepositoryStub()
        poll = Poll(poll_id=4, commit_end_date=10, reveal_end_date=20)

        await polls.update_poll(poll)

        assert await polls.get_poll(4) == poll


class TestDeadLetterQueueStub:
    @pytest.mark.asyncio
    async def test_keeps_arrival_order(self) -> None:
        queue = DeadLetterQueueStub()
        first, second = ev.application(), ev.application(ev.OTHER_NEWSROOM)

        await queue.dead_letter(first, ValueError("a"))
        await queue.dead_letter(second, ValueError("b"))

        assert queue.hashes == [first.hash, second.hash]
        queue.reset()
        assert queue.hashes == []


class TestNotificationSubscriberStub:
    def test_publish_assigns_sequential_ids(self) -> None:
        subscriber = NotificationSubscriberStub()

        first = subscriber.publish({"hash": "0x1", "timestamp": 1})
        second = subscriber.publish(b"raw")

        assert (first.message_id, second.message_id) == ("1", "2")
        assert first.data == b'{"hash": "0x1", "timestamp": 1}'
        assert subscriber.messages.qsize() == 2

    @pytest.mark.asyncio
    async def test_records_lifecycle_and_acks(self) -> None:
        subscriber = NotificationSubscriberStub()
        message = subscriber.publish(b"x")

        await subscriber.start()
        await subscriber.ack(message)
        await subscriber.nack(message)
        assert subscriber.started is True
        await subscriber.stop()

        assert subscriber.started is False
        assert subscriber.acked == subscriber.nacked == ["1"]


class TestEventPublisherStub:
    @pytest.mark.asyncio
    async def test_records_transaction_hash_messages(self) -> None:
        publisher = EventPublisherStub()
        event = ev.application()

        await publisher.publish(event)

        assert publisher.published == [{"txHash": event.tx_hash}]
        publisher.reset()
        assert publisher.published == publisher.events == []
