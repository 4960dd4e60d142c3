"""DeadLetterQueue port.

Under the skip batch policy, events that fail with a data error are handed
here and the batch continues.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.events.contract_event import ContractEvent


@runtime_checkable
class DeadLetterQueue(Protocol):
    """Storage for events that could not be applied."""

    async def dead_letter(self, event: ContractEvent, error: Exception) -> None:
        ...
