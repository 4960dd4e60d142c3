"""NotificationSubscriber port: push delivery of "new events" messages.

The subscriber owns the transport. It feeds received messages and
transport errors into two asyncio queues; the consumer acknowledges each
message after it has been processed, or nacks it for redelivery.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ReceivedMessage:
    """A raw message as received from the transport.

    Attributes:
        message_id: Transport id used for ack/nack.
        data: Message body (JSON).
    """

    message_id: str
    data: bytes


@runtime_checkable
class NotificationSubscriber(Protocol):
    """Push transport for event notifications."""

    @property
    def messages(self) -> asyncio.Queue[ReceivedMessage]:
        ...

    @property
    def errors(self) -> asyncio.Queue[Exception]:
        ...

    async def start(self) -> None:
        """Begin receiving messages into the queues."""
        ...

    async def stop(self) -> None:
        """Stop receiving. Queued messages stay unacknowledged."""
        ...

    async def ack(self, message: ReceivedMessage) -> None:
        ...

    async def nack(self, message: ReceivedMessage) -> None:
        """Reject a message so the transport redelivers it."""
        ...
