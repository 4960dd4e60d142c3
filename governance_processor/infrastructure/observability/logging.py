"""Structured logging configuration with structlog.

Production output is one JSON object per line; development output is the
coloured console renderer. The level comes from LOG_LEVEL (default INFO).

Usage:
    from governance_processor.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")
    log = structlog.get_logger()
    log.info("batch_dispatched", handled=3)
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from governance_processor.infrastructure.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog and the stdlib root logger.

    Worker modules log through the stdlib logging module; their records
    are emitted at the same level so both streams line up.

    Args:
        environment: 'production' for JSON output, anything else for console.
    """
    level = _get_log_level()
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def get_logger_for_component(
    name: str, component: str = "processor"
) -> structlog.BoundLogger:
    """Return a logger pre-bound with service and component names."""
    return structlog.get_logger().bind(service=name, component=component)
