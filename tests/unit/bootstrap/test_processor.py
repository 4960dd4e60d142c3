"""Unit tests for processor wiring."""

from unittest.mock import MagicMock

import pytest

from governance_processor.bootstrap.processor import (
    build_handlers,
    build_processor,
    build_scheduler,
)
from governance_processor.config import PersisterType, ProcessorConfig
from governance_processor.domain.events.contract_names import ContractName
from governance_processor.infrastructure.adapters.logging_error_reporter import (
    LoggingErrorReporter,
)
from governance_processor.infrastructure.adapters.messaging import (
    PostgresEventPublisher,
)
from governance_processor.infrastructure.adapters.persistence import (
    PostgresEventSource,
    PostgresWatermarkStore,
)
from governance_processor.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)
from governance_processor.infrastructure.stubs import (
    ChainReaderStub,
    EventPublisherStub,
    EventSourceStub,
    create_in_memory_repositories,
)
from governance_processor.workers.error_handler import BatchErrorPolicy
from tests.helpers import FakeTimeAuthority


class TestBuildHandlers:
    def test_every_contract_family_has_a_handler(
        self, fake_time_authority: FakeTimeAuthority
    ) -> None:
        handlers = build_handlers(
            create_in_memory_repositories(), ChainReaderStub(), fake_time_authority
        )

        contracts = {name for h in handlers for name, _ in h.handled_events}
        assert len(handlers) == 8
        assert ContractName.CIVIL_TCR in contracts
        assert ContractName.CVL_TOKEN in contracts


class TestBuildProcessor:
    def test_defaults_are_in_memory(self) -> None:
        components = build_processor(ProcessorConfig())

        assert isinstance(components.error_reporter, LoggingErrorReporter)
        assert isinstance(components.time_authority, SystemTimeAuthority)
        assert isinstance(components.cycle.source, EventSourceStub)

    def test_batch_policy_comes_from_config(self) -> None:
        components = build_processor(
            ProcessorConfig(batch_error_policy=BatchErrorPolicy.SKIP)
        )

        assert components.dispatcher.error_handler.policy is BatchErrorPolicy.SKIP

    def test_postgresql_reads_events_and_watermark_from_database(self) -> None:
        config = ProcessorConfig(
            persister_type=PersisterType.POSTGRESQL,
            database_url="postgresql://u:pw@h/db",
        )

        components = build_processor(
            config,
            repositories=create_in_memory_repositories(),
            session_factory=MagicMock(),
        )

        assert isinstance(components.cycle.source, PostgresEventSource)
        assert isinstance(components.cycle.watermarks.store, PostgresWatermarkStore)
        assert components.dispatcher.publisher is None

    def test_postgresql_requires_injected_aggregate_stores(self) -> None:
        config = ProcessorConfig(
            persister_type=PersisterType.POSTGRESQL,
            database_url="postgresql://u:pw@h/db",
        )
        session_factory = MagicMock()

        with pytest.raises(ValueError, match="durable aggregate stores"):
            build_processor(config, session_factory=session_factory)

        session_factory.assert_not_called()

    def test_events_topic_publishes_over_postgresql(self) -> None:
        config = ProcessorConfig(
            persister_type=PersisterType.POSTGRESQL,
            database_url="postgresql://u:pw@h/db",
            events_topic="governance_processed",
        )

        components = build_processor(
            config,
            repositories=create_in_memory_repositories(),
            session_factory=MagicMock(),
        )

        assert isinstance(components.dispatcher.publisher, PostgresEventPublisher)

    def test_injected_publisher_is_used(self) -> None:
        publisher = EventPublisherStub()

        components = build_processor(ProcessorConfig(), publisher=publisher)

        assert components.dispatcher.publisher is publisher

    def test_scheduler_uses_configured_cron(
        self, fake_time_authority: FakeTimeAuthority
    ) -> None:
        components = build_processor(
            ProcessorConfig(cron_expression="*/10 * * * *"),
            time_authority=fake_time_authority,
        )

        scheduler = build_scheduler(components)

        assert scheduler.cron_expression == "*/10 * * * *"
