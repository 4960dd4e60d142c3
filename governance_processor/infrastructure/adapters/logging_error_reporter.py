"""ErrorReporter that writes failures to the structured log."""

from __future__ import annotations

from typing import Any

import structlog

from governance_processor.application.ports.error_reporter import ErrorReporter


class LoggingErrorReporter(ErrorReporter):
    """Default reporter: one `error_reported` log line per failure."""

    def __init__(self) -> None:
        self._log = structlog.get_logger().bind(
            service="error_reporter", component="processor"
        )

    def report(self, error: BaseException, context: dict[str, Any]) -> None:
        self._log.error(
            "error_reported",
            error=str(error),
            error_type=type(error).__name__,
            **context,
        )
