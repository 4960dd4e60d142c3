"""In-memory EventPublisher."""

from __future__ import annotations

from governance_processor.application.ports.event_publisher import (
    EventPublisher,
    build_event_message,
)
from governance_processor.domain.events.contract_event import ContractEvent


class EventPublisherStub(EventPublisher):
    """Records published messages in order."""

    def __init__(self) -> None:
        self.published: list[dict[str, str]] = []
        self.events: list[ContractEvent] = []

    async def publish(self, event: ContractEvent) -> None:
        self.events.append(event)
        self.published.append(build_event_message(event))

    def reset(self) -> None:
        self.published.clear()
        self.events.clear()
