"""NotificationSubscriber over PostgreSQL LISTEN/NOTIFY (asyncpg).

The crawler issues `NOTIFY <channel>, '<json>'` after persisting events.
NOTIFY has no acknowledgement or redelivery: ack is a no-op, and a nacked
message is simply dropped, since the watermark did not move and the next
cycle fetches the same events again.
"""

from __future__ import annotations

import asyncio
import itertools
from typing import Any

import asyncpg
from structlog import get_logger

from governance_processor.application.ports.notification_subscriber import (
    NotificationSubscriber,
    ReceivedMessage,
)

logger = get_logger()

DEFAULT_CHANNEL = "governance_events"


def to_asyncpg_dsn(url: str) -> str:
    """Strip a SQLAlchemy driver suffix from a PostgreSQL URL."""
    return url.replace("postgresql+asyncpg://", "postgresql://", 1)


class PostgresNotificationSubscriber(NotificationSubscriber):
    """Listens on one channel and feeds the message/error queues.

    A full message queue or a dropped connection is reported on the
    error queue.
    """

    def __init__(
        self,
        dsn: str,
        channel: str = DEFAULT_CHANNEL,
        queue_maxsize: int = 0,
    ) -> None:
        self._dsn = to_asyncpg_dsn(dsn)
        self._channel = channel
        self._messages: asyncio.Queue[ReceivedMessage] = asyncio.Queue(queue_maxsize)
        self._errors: asyncio.Queue[Exception] = asyncio.Queue()
        self._conn: asyncpg.Connection | None = None
        self._ids = itertools.count(1)
        self._log = logger.bind(
            component="postgres_notification_subscriber", channel=channel
        )

    @property
    def messages(self) -> asyncio.Queue[ReceivedMessage]:
        return self._messages

    @property
    def errors(self) -> asyncio.Queue[Exception]:
        return self._errors

    def _on_notification(
        self, connection: Any, pid: int, channel: str, payload: str
    ) -> None:
        message = ReceivedMessage(
            message_id=f"{pid}-{next(self._ids)}", data=payload.encode()
        )
        try:
            self._messages.put_nowait(message)
        except asyncio.QueueFull as e:
            self._log.warning("notification_dropped", message_id=message.message_id)
            self._errors.put_nowait(e)

    def _on_termination(self, connection: Any) -> None:
        self._log.error("listen_connection_terminated")
        self._errors.put_nowait(ConnectionError("LISTEN connection terminated"))

    async def start(self) -> None:
        if self._conn is not None:
            return
        self._conn = await asyncpg.connect(self._dsn)
        self._conn.add_termination_listener(self._on_termination)
        await self._conn.add_listener(self._channel, self._on_notification)
        self._log.info("listening_started")

    async def stop(self) -> None:
        if self._conn is None:
            return
        try:
            await self._conn.remove_listener(self._channel, self._on_notification)
        finally:
            await self._conn.close()
            self._conn = None
        self._log.info("listening_stopped")

    async def ack(self, message: ReceivedMessage) -> None:
        return None

    async def nack(self, message: ReceivedMessage) -> None:
        self._log.info("notification_nacked", message_id=message.message_id)
