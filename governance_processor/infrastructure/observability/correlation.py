"""Cycle correlation ids.

Every processing cycle (one poll tick or one notification) runs under its
own correlation id so that the dispatcher, handler and watermark log lines
of that cycle can be grouped. The id lives in a ContextVar and therefore
follows the cycle across awaits.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Return a fresh UUID4 string."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Return the current correlation id, empty string outside a cycle."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id.set(correlation_id)


def begin_cycle() -> str:
    """Start a new correlation scope and return its id."""
    correlation_id = generate_correlation_id()
    _correlation_id.set(correlation_id)
    return correlation_id


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding correlation_id when one is set."""
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
