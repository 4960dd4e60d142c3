"""PostgreSQL adapters (SQLAlchemy async engine)."""

from governance_processor.infrastructure.adapters.persistence.postgres_event_source import (
    PostgresEventSource,
)
from governance_processor.infrastructure.adapters.persistence.postgres_watermark_store import (
    PostgresWatermarkStore,
)

__all__: list[str] = ["PostgresEventSource", "PostgresWatermarkStore"]
