"""PostgreSQL WatermarkStore backed by the single-row `cron` table.

Schema:
    CREATE TABLE IF NOT EXISTS cron(
        timestamp BIGINT NOT NULL,
        event_hashes TEXT NOT NULL DEFAULT ''
    );
    CREATE UNIQUE INDEX IF NOT EXISTS cron_one_row ON cron((timestamp IS NOT NULL));

The unique index on a constant expression keeps the table at one row.
Hashes are stored comma-joined. Reading an empty table inserts the
initial row (timestamp 0, no hashes).
"""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from governance_processor.application.ports.watermark_store import WatermarkStore
from governance_processor.domain.errors import PersistenceError

logger = get_logger()

CRON_TABLE_NAME = "cron"

HASH_SEPARATOR = ","


def create_cron_table_query(table_name: str = CRON_TABLE_NAME) -> str:
    return f"""
        CREATE TABLE IF NOT EXISTS {table_name}(
            timestamp BIGINT NOT NULL,
            event_hashes TEXT NOT NULL DEFAULT ''
        );
        CREATE UNIQUE INDEX IF NOT EXISTS {table_name}_one_row
            ON {table_name}((timestamp IS NOT NULL));
    """


class PostgresWatermarkStore(WatermarkStore):
    """Watermark persisted in one row of the `cron` table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        table_name: str = CRON_TABLE_NAME,
    ) -> None:
        self._session_factory = session_factory
        self._table = table_name
        self._log = logger.bind(component="postgres_watermark_store", table=table_name)

    async def ensure_schema(self) -> None:
        try:
            async with self._session_factory() as session:
                for statement in create_cron_table_query(self._table).split(";"):
                    if statement.strip():
                        await session.execute(text(statement))
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError("ensure_schema", str(e)) from e

    async def _read_row(self) -> tuple[int, str]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text(f"SELECT timestamp, event_hashes FROM {self._table} LIMIT 1")
                )
                row = result.fetchone()
                if row is None:
                    await session.execute(
                        text(
                            f"INSERT INTO {self._table}(timestamp, event_hashes) "
                            "VALUES (0, '')"
                        )
                    )
                    await session.commit()
                    self._log.info("cron_row_initialized")
                    return 0, ""
                return int(row[0]), row[1] or ""
        except SQLAlchemyError as e:
            raise PersistenceError("read_watermark", str(e)) from e

    async def last_timestamp(self) -> int:
        timestamp, _ = await self._read_row()
        return timestamp

    async def hashes_at_last_timestamp(self) -> list[str]:
        _, joined = await self._read_row()
        return [h for h in joined.split(HASH_SEPARATOR) if h]

    async def _upsert(self, column: str, value: object, operation: str) -> None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    text(f"UPDATE {self._table} SET {column} = :value"),
                    {"value": value},
                )
                if result.rowcount == 0:
                    defaults = {"timestamp": 0, "event_hashes": ""}
                    defaults[column] = value
                    await session.execute(
                        text(
                            f"INSERT INTO {self._table}(timestamp, event_hashes) "
                            "VALUES (:timestamp, :event_hashes)"
                        ),
                        defaults,
                    )
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(operation, str(e)) from e

    async def update_timestamp(self, timestamp: int) -> None:
        await self._upsert("timestamp", timestamp, "update_timestamp")

    async def update_hashes(self, hashes: Collection[str]) -> None:
        await self._upsert("event_hashes", HASH_SEPARATOR.join(hashes), "update_hashes")
