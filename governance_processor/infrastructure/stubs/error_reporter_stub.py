"""ErrorReporter that remembers what it was given."""

from __future__ import annotations

from typing import Any

from governance_processor.application.ports.error_reporter import ErrorReporter


class ErrorReporterStub(ErrorReporter):
    def __init__(self) -> None:
        self.reports: list[tuple[BaseException, dict[str, Any]]] = []

    def report(self, error: BaseException, context: dict[str, Any]) -> None:
        self.reports.append((error, dict(context)))

    def reset(self) -> None:
        self.reports.clear()
