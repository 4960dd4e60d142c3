"""PostgreSQL EventSource reading the crawler's `event` table.

Columns read: event_type, hash, contract_address, contract_name,
timestamp, payload (JSONB), block_number, tx_hash, tx_index, block_hash,
log_index.
"""

from __future__ import annotations

import json
from collections.abc import Collection
from typing import Any

from sqlalchemy import bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from governance_processor.application.ports.event_source import EventSource
from governance_processor.domain.errors import PersistenceError
from governance_processor.domain.events.contract_event import ContractEvent

logger = get_logger()

EVENT_TABLE_NAME = "event"

_COLUMNS = (
    "event_type, hash, contract_address, contract_name, timestamp, payload, "
    "block_number, tx_hash, tx_index, block_hash, log_index"
)


def _row_to_event(row: Any) -> ContractEvent:
    payload = row.payload
    if isinstance(payload, (str, bytes)):
        payload = json.loads(payload)
    return ContractEvent(
        contract_name=row.contract_name,
        event_type=row.event_type,
        contract_address=row.contract_address,
        timestamp=int(row.timestamp),
        hash=row.hash,
        payload=dict(payload or {}),
        block_number=int(row.block_number or 0),
        tx_hash=row.tx_hash or "",
        tx_index=int(row.tx_index or 0),
        block_hash=row.block_hash or "",
        log_index=int(row.log_index or 0),
    )


def build_retrieve_query(table_name: str, by_contract: bool) -> Any:
    """SELECT for events at/after a timestamp, excluding given hashes."""
    contract_clause = (
        "AND lower(contract_address) = :contract_address " if by_contract else ""
    )
    return text(
        f"SELECT {_COLUMNS} FROM {table_name} "
        "WHERE timestamp >= :from_timestamp "
        "AND hash NOT IN :exclude_hashes "
        f"{contract_clause}"
        "ORDER BY timestamp, block_number, tx_index, log_index"
    ).bindparams(bindparam("exclude_hashes", expanding=True))


class PostgresEventSource(EventSource):
    """Event log reader with the same ordering as the crawler's writer."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        table_name: str = EVENT_TABLE_NAME,
    ) -> None:
        self._session_factory = session_factory
        self._table = table_name
        self._log = logger.bind(component="postgres_event_source", table=table_name)

    async def retrieve_events(
        self,
        from_timestamp: int,
        exclude_hashes: Collection[str],
        contract_address: str | None = None,
    ) -> list[ContractEvent]:
        params: dict[str, Any] = {
            "from_timestamp": from_timestamp,
            "exclude_hashes": sorted(exclude_hashes),
        }
        if contract_address is not None:
            params["contract_address"] = contract_address.lower()
        query = build_retrieve_query(self._table, contract_address is not None)

        try:
            async with self._session_factory() as session:
                result = await session.execute(query, params)
                rows = result.fetchall()
        except SQLAlchemyError as e:
            self._log.error("retrieve_events_failed", error=str(e))
            raise PersistenceError("retrieve_events", str(e)) from e

        events = [_row_to_event(row) for row in rows]
        self._log.debug(
            "events_retrieved",
            from_timestamp=from_timestamp,
            excluded=len(params["exclude_hashes"]),
            count=len(events),
        )
        return events
