"""Queue-backed NotificationSubscriber for tests and local runs."""

from __future__ import annotations

import asyncio
import json
from typing import Any

from governance_processor.application.ports.notification_subscriber import (
    NotificationSubscriber,
    ReceivedMessage,
)


class NotificationSubscriberStub(NotificationSubscriber):
    """Messages are pushed with publish(); acks and nacks are recorded."""

    def __init__(self, maxsize: int = 0) -> None:
        self._messages: asyncio.Queue[ReceivedMessage] = asyncio.Queue(maxsize)
        self._errors: asyncio.Queue[Exception] = asyncio.Queue()
        self._next_id = 0
        self.started = False
        self.acked: list[str] = []
        self.nacked: list[str] = []

    @property
    def messages(self) -> asyncio.Queue[ReceivedMessage]:
        return self._messages

    @property
    def errors(self) -> asyncio.Queue[Exception]:
        return self._errors

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.started = False

    async def ack(self, message: ReceivedMessage) -> None:
        self.acked.append(message.message_id)

    async def nack(self, message: ReceivedMessage) -> None:
        self.nacked.append(message.message_id)

    def publish(self, body: dict[str, Any] | bytes) -> ReceivedMessage:
        """Queue a message. Dict bodies are JSON-encoded."""
        self._next_id += 1
        data = body if isinstance(body, bytes) else json.dumps(body).encode()
        message = ReceivedMessage(message_id=str(self._next_id), data=data)
        self._messages.put_nowait(message)
        return message

    def fail(self, error: Exception) -> None:
        self._errors.put_nowait(error)
