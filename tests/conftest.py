"""
Pytest configuration and shared fixtures for the governance processor tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async collaborators that have no in-memory stub
- Unit tests go in tests/unit/
- Multi-component scenarios go in tests/integration/
"""

import pytest

from governance_processor.application.ports.repositories import ProcessorRepositories
from governance_processor.bootstrap.database import reset_database_bootstrap
from governance_processor.bootstrap.processor import (
    ProcessorComponents,
    build_handlers,
    build_processor,
)
from governance_processor.config.processor_config import ProcessorConfig
from governance_processor.infrastructure.stubs import (
    ChainReaderStub,
    DeadLetterQueueStub,
    ErrorReporterStub,
    EventSourceStub,
    WatermarkStoreStub,
    create_in_memory_repositories,
)
from governance_processor.workers.error_handler import BatchErrorPolicy, ErrorHandler
from governance_processor.workers.event_dispatcher import EventDispatcher
from tests.helpers import FakeTimeAuthority


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from governance_processor import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    return FakeTimeAuthority()


@pytest.fixture
def repositories() -> ProcessorRepositories:
    return create_in_memory_repositories()


@pytest.fixture
def chain_reader() -> ChainReaderStub:
    return ChainReaderStub()


@pytest.fixture
def event_source() -> EventSourceStub:
    return EventSourceStub()


@pytest.fixture
def watermark_store() -> WatermarkStoreStub:
    return WatermarkStoreStub()


@pytest.fixture
def dead_letters() -> DeadLetterQueueStub:
    return DeadLetterQueueStub()


@pytest.fixture
def error_reporter() -> ErrorReporterStub:
    return ErrorReporterStub()


@pytest.fixture
def dispatcher(
    repositories: ProcessorRepositories,
    chain_reader: ChainReaderStub,
    fake_time_authority: FakeTimeAuthority,
    dead_letters: DeadLetterQueueStub,
) -> EventDispatcher:
    """Dispatcher with every handler, aborting on the first error."""
    return EventDispatcher(
        build_handlers(repositories, chain_reader, fake_time_authority),
        ErrorHandler(BatchErrorPolicy.ABORT),
        dead_letters,
    )


@pytest.fixture
def skipping_dispatcher(
    repositories: ProcessorRepositories,
    chain_reader: ChainReaderStub,
    fake_time_authority: FakeTimeAuthority,
    dead_letters: DeadLetterQueueStub,
) -> EventDispatcher:
    """Dispatcher that dead-letters data errors and continues."""
    return EventDispatcher(
        build_handlers(repositories, chain_reader, fake_time_authority),
        ErrorHandler(BatchErrorPolicy.SKIP),
        dead_letters,
    )


@pytest.fixture
def components(
    repositories: ProcessorRepositories,
    chain_reader: ChainReaderStub,
    event_source: EventSourceStub,
    watermark_store: WatermarkStoreStub,
    dead_letters: DeadLetterQueueStub,
    error_reporter: ErrorReporterStub,
    fake_time_authority: FakeTimeAuthority,
) -> ProcessorComponents:
    """A fully wired in-memory processor."""
    return build_processor(
        ProcessorConfig(),
        repositories=repositories,
        chain_reader=chain_reader,
        event_source=event_source,
        watermark_store=watermark_store,
        dead_letter=dead_letters,
        error_reporter=error_reporter,
        time_authority=fake_time_authority,
    )


@pytest.fixture(autouse=True)
def _reset_database_singleton():
    yield
    reset_database_bootstrap()
