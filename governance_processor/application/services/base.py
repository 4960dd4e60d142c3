"""LoggingMixin: structured logging for processor services.

Usage:
    class ListingEventHandler(LoggingMixin):
        def __init__(self, ...) -> None:
            self._init_logger()

        async def handle(self, decoded) -> bool:
            log = self._log_operation("handle", event_hash=decoded.event.hash)
            log.info("listing_whitelisted")
"""

import structlog

from governance_processor.infrastructure.observability.correlation import (
    get_correlation_id,
)


class LoggingMixin:
    """Mixin binding a structlog logger to the service class.

    The logger carries service (class name) and component. Each operation
    logger additionally carries the operation name and the current cycle
    correlation id.

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "processor") -> None:
        """Bind the service logger. Call from __init__."""
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Return an operation-scoped logger with the correlation id bound."""
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
