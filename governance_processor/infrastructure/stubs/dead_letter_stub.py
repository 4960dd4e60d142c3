"""In-memory DeadLetterQueue."""

from __future__ import annotations

from governance_processor.application.ports.dead_letter import DeadLetterQueue
from governance_processor.domain.events.contract_event import ContractEvent


class DeadLetterQueueStub(DeadLetterQueue):
    """Keeps dead-lettered events and their errors in arrival order."""

    def __init__(self) -> None:
        self.dead_letters: list[tuple[ContractEvent, Exception]] = []

    async def dead_letter(self, event: ContractEvent, error: Exception) -> None:
        self.dead_letters.append((event, error))

    @property
    def hashes(self) -> list[str]:
        return [event.hash for event, _ in self.dead_letters]

    def reset(self) -> None:
        self.dead_letters.clear()
