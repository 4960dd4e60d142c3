"""ErrorReporter port: out-of-band reporting of processing failures."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ErrorReporter(Protocol):
    """Sink for errors that should reach operators."""

    def report(self, error: BaseException, context: dict[str, Any]) -> None:
        """Report an error with structured context.

        Must not raise.
        """
        ...
