"""EventPublisher port.

Announces each applied event to downstream consumers. The message carries
only the transaction hash; consumers look the rest up themselves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from governance_processor.domain.events.contract_event import ContractEvent


def build_event_message(event: ContractEvent) -> dict[str, str]:
    return {"txHash": event.tx_hash}


@runtime_checkable
class EventPublisher(Protocol):
    """Outbound channel for processed events."""

    async def publish(self, event: ContractEvent) -> None:
        """Publish the message for one applied event.

        Raises:
            PersistenceError: If the transport rejects the message.
        """
        ...
