"""Process wiring: build the cycle and the run drivers from configuration.

With the `none` persister everything is in memory (events come from an
empty in-memory log), which is only useful for smoke runs. With
`postgresql` the watermark and event log are read from PostgreSQL, and
applied events are announced on PROCESSOR_EVENTS_TOPIC when it is set.
Durable aggregate stores must then be injected: the watermark would
otherwise advance past updates that only ever lived in memory. The chain
reader is in-memory unless injected.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from governance_processor.application.ports.chain_reader import ChainReader
from governance_processor.application.ports.dead_letter import DeadLetterQueue
from governance_processor.application.ports.error_reporter import ErrorReporter
from governance_processor.application.ports.event_publisher import EventPublisher
from governance_processor.application.ports.event_source import EventSource
from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.application.ports.time_authority import (
    TimeAuthorityProtocol,
)
from governance_processor.application.ports.watermark_store import WatermarkStore
from governance_processor.application.services.appeal_event_handler import (
    AppealEventHandler,
)
from governance_processor.application.services.challenge_event_handler import (
    ChallengeEventHandler,
)
from governance_processor.application.services.event_handler import EventHandler
from governance_processor.application.services.governance_event_recorder import (
    GovernanceEventRecorder,
)
from governance_processor.application.services.government_event_handler import (
    GovernmentEventHandler,
)
from governance_processor.application.services.listing_event_handler import (
    ListingEventHandler,
)
from governance_processor.application.services.multisig_event_handler import (
    MultiSigEventHandler,
)
from governance_processor.application.services.parameterizer_event_handler import (
    ParameterizerEventHandler,
)
from governance_processor.application.services.poll_outcome import PollOutcomeRecorder
from governance_processor.application.services.reconciliation import ChainReconciler
from governance_processor.application.services.token_transfer_event_handler import (
    TokenTransferEventHandler,
)
from governance_processor.application.services.voting_event_handler import (
    VotingEventHandler,
)
from governance_processor.application.services.watermark_service import (
    WatermarkService,
)
from governance_processor.bootstrap.database import get_session_factory
from governance_processor.config.processor_config import ProcessorConfig
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
    DeadLetterQueueStub,
    EventSourceStub,
    WatermarkStoreStub,
    create_in_memory_repositories,
)
from governance_processor.workers.error_handler import ErrorHandler
from governance_processor.workers.event_dispatcher import EventDispatcher
from governance_processor.workers.polling_scheduler import PollingScheduler
from governance_processor.workers.processing_cycle import ProcessingCycle

logger = get_logger()


def build_handlers(
    repositories: ProcessorRepositories,
    chain_reader: ChainReader,
    time_authority: TimeAuthorityProtocol,
) -> list[EventHandler]:
    """Create one handler per governance sub-domain, sharing collaborators."""
    reconciler = ChainReconciler(repositories, chain_reader, time_authority)
    recorder = GovernanceEventRecorder(repositories.governance_events)
    outcomes = PollOutcomeRecorder(repositories, reconciler)
    return [
        ListingEventHandler(repositories, chain_reader, reconciler, recorder),
        ChallengeEventHandler(repositories, chain_reader, reconciler, outcomes, recorder),
        AppealEventHandler(repositories, chain_reader, reconciler, recorder),
        VotingEventHandler(repositories),
        ParameterizerEventHandler(repositories, reconciler, outcomes),
        GovernmentEventHandler(repositories, chain_reader, reconciler, outcomes),
        MultiSigEventHandler(repositories, chain_reader),
        TokenTransferEventHandler(repositories),
    ]


@dataclass(frozen=True)
class ProcessorComponents:
    """Everything a run driver needs."""

    config: ProcessorConfig
    repositories: ProcessorRepositories
    dispatcher: EventDispatcher
    cycle: ProcessingCycle
    error_reporter: ErrorReporter
    time_authority: TimeAuthorityProtocol


def build_processor(
    config: ProcessorConfig,
    *,
    repositories: ProcessorRepositories | None = None,
    chain_reader: ChainReader | None = None,
    event_source: EventSource | None = None,
    watermark_store: WatermarkStore | None = None,
    dead_letter: DeadLetterQueue | None = None,
    error_reporter: ErrorReporter | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
    publisher: EventPublisher | None = None,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> ProcessorComponents:
    """Wire the processor. Any collaborator can be injected.

    Raises:
        ValueError: If the postgresql persister is configured without
            injected aggregate stores.
    """
    log = logger.bind(component="processor_bootstrap")
    if config.uses_postgresql and repositories is None:
        raise ValueError(
            "the postgresql persister needs durable aggregate stores; "
            "in-memory ones would lose updates the watermark has already passed"
        )
    repositories = repositories or create_in_memory_repositories()
    time_authority = time_authority or SystemTimeAuthority()
    error_reporter = error_reporter or LoggingErrorReporter()
    if chain_reader is None:
        log.warning("chain_reader_not_configured", fallback="ChainReaderStub")
        chain_reader = ChainReaderStub()

    wants_publisher = bool(config.events_topic) and publisher is None
    if config.uses_postgresql and (
        event_source is None or watermark_store is None or wants_publisher
    ):
        session_factory = session_factory or get_session_factory(config)
        event_source = event_source or PostgresEventSource(session_factory)
        watermark_store = watermark_store or PostgresWatermarkStore(session_factory)
        if wants_publisher:
            publisher = PostgresEventPublisher(session_factory, config.events_topic)
    event_source = event_source or EventSourceStub()
    watermark_store = watermark_store or WatermarkStoreStub()
    dead_letter = dead_letter or DeadLetterQueueStub()

    dispatcher = EventDispatcher(
        build_handlers(repositories, chain_reader, time_authority),
        ErrorHandler(config.batch_error_policy),
        dead_letter,
        publisher,
    )
    cycle = ProcessingCycle(
        event_source, dispatcher, WatermarkService(watermark_store), error_reporter
    )
    log.info("processor_built", **config.masked())
    return ProcessorComponents(
        config=config,
        repositories=repositories,
        dispatcher=dispatcher,
        cycle=cycle,
        error_reporter=error_reporter,
        time_authority=time_authority,
    )


def build_scheduler(components: ProcessorComponents) -> PollingScheduler:
    return PollingScheduler(
        components.cycle,
        components.config.cron_expression,
        components.time_authority,
        report_interval_seconds=components.config.report_interval_seconds,
    )
