"""EventPublisher over PostgreSQL NOTIFY.

Each applied event is announced with `pg_notify(channel, '{"txHash": ...}')`
on the configured events topic. Notifications are delivered when the
publishing transaction commits, so each publish commits its own session.
"""

from __future__ import annotations

import json

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from governance_processor.application.ports.event_publisher import (
    EventPublisher,
    build_event_message,
)
from governance_processor.domain.errors import PersistenceError
from governance_processor.domain.events.contract_event import ContractEvent

logger = get_logger()

NOTIFY_QUERY = "SELECT pg_notify(:channel, :payload)"


class PostgresEventPublisher(EventPublisher):
    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession], channel: str
    ) -> None:
        if not channel:
            raise ValueError("channel is required")
        self._session_factory = session_factory
        self._channel = channel
        self._log = logger.bind(component="postgres_event_publisher", channel=channel)

    async def publish(self, event: ContractEvent) -> None:
        payload = json.dumps(build_event_message(event))
        try:
            async with self._session_factory() as session:
                await session.execute(
                    text(NOTIFY_QUERY), {"channel": self._channel, "payload": payload}
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError("publish_event", str(e)) from e
        self._log.debug("event_published", event_hash=event.hash, tx_hash=event.tx_hash)
