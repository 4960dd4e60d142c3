"""Processor configuration.

Environment Variables:
- PROCESSOR_CRON_CONFIG: Cron schedule of the polling driver (default: */1 * * * *)
- PROCESSOR_PERSISTER_TYPE: none | postgresql (default: none)
- DATABASE_URL: PostgreSQL URL, required when the persister is postgresql
- DATABASE_POOL_SIZE: Connection pool size (default: 5)
- DATABASE_MAX_OVERFLOW: Connections allowed above the pool size (default: 10)
- DATABASE_POOL_RECYCLE_SECONDS: Connection recycle age (default: 1800)
- PROCESSOR_BATCH_ERROR_POLICY: abort | skip (default: abort)
- PROCESSOR_QUEUE_MAXSIZE: Bound of the notification queue (default: 100)
- PROCESSOR_REPORT_INTERVAL_SECONDS: Scheduler status log spacing (default: 5)
- PROCESSOR_NOTIFY_CHANNEL: LISTEN channel for notifications (default: governance_events)
- PROCESSOR_EVENTS_TOPIC: NOTIFY channel for applied events (default: unset, disabled)
- ENVIRONMENT: production (JSON logs) or development (default: production)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from enum import Enum

from croniter import croniter

from governance_processor.workers.error_handler import BatchErrorPolicy


class PersisterType(Enum):
    NONE = "none"
    POSTGRESQL = "postgresql"


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable, falling back to default when invalid."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_enum_env(key: str, enum_type: type[Enum], default: Enum) -> Enum:
    """Parse an enum variable by value (case-insensitive).

    Raises:
        ValueError: If the variable is set to an unknown value.
    """
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        allowed = ", ".join(str(m.value) for m in enum_type)
        raise ValueError(f"{key} must be one of: {allowed}; got {value!r}") from None


# (variable, default, description) for usage()
ENVIRONMENT_VARIABLES: tuple[tuple[str, str, str], ...] = (
    ("PROCESSOR_CRON_CONFIG", "*/1 * * * *", "Cron schedule of the polling driver"),
    ("PROCESSOR_PERSISTER_TYPE", "none", "Aggregate/watermark persister: none | postgresql"),
    ("DATABASE_URL", "", "PostgreSQL URL (required for postgresql)"),
    ("DATABASE_POOL_SIZE", "5", "Connection pool size"),
    ("DATABASE_MAX_OVERFLOW", "10", "Connections allowed above the pool size"),
    ("DATABASE_POOL_RECYCLE_SECONDS", "1800", "Recycle connections older than this"),
    ("PROCESSOR_BATCH_ERROR_POLICY", "abort", "Failing event handling: abort | skip"),
    ("PROCESSOR_QUEUE_MAXSIZE", "100", "Bound of the notification queue"),
    ("PROCESSOR_REPORT_INTERVAL_SECONDS", "5", "Scheduler status log spacing"),
    ("PROCESSOR_NOTIFY_CHANNEL", "governance_events", "LISTEN channel for notifications"),
    ("PROCESSOR_EVENTS_TOPIC", "", "NOTIFY channel for applied events (postgresql)"),
    ("ENVIRONMENT", "production", "production (JSON logs) or development"),
    ("LOG_LEVEL", "INFO", "Log level"),
)


@dataclass(frozen=True)
class ProcessorConfig:
    """Configuration for the run drivers and their collaborators.

    Attributes:
        cron_expression: Polling schedule.
        persister_type: Where watermark and events are read from.
        database_url: PostgreSQL URL.
        pool_size: SQLAlchemy pool size.
        max_overflow: SQLAlchemy max overflow.
        pool_recycle_seconds: SQLAlchemy pool recycle.
        batch_error_policy: Abort or skip-and-dead-letter on data errors.
        queue_maxsize: Notification queue bound (0 = unbounded).
        report_interval_seconds: Scheduler status log spacing.
        notify_channel: LISTEN channel name.
        events_topic: NOTIFY channel for applied events; empty disables publishing.
        environment: Logging environment.
    """

    cron_expression: str = "*/1 * * * *"
    persister_type: PersisterType = PersisterType.NONE
    database_url: str = ""
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle_seconds: int = 1800
    batch_error_policy: BatchErrorPolicy = BatchErrorPolicy.ABORT
    queue_maxsize: int = 100
    report_interval_seconds: float = 5.0
    notify_channel: str = "governance_events"
    events_topic: str = ""
    environment: str = "production"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not croniter.is_valid(self.cron_expression):
            raise ValueError(f"Invalid cron expression: {self.cron_expression!r}")
        if self.persister_type is PersisterType.POSTGRESQL and not self.database_url:
            raise ValueError("DATABASE_URL is required for the postgresql persister")
        if self.events_topic and self.persister_type is not PersisterType.POSTGRESQL:
            raise ValueError("PROCESSOR_EVENTS_TOPIC requires the postgresql persister")
        if self.pool_size < 1:
            raise ValueError(f"pool_size must be positive, got {self.pool_size}")
        if self.max_overflow < 0:
            raise ValueError(
                f"max_overflow must be non-negative, got {self.max_overflow}"
            )
        if self.queue_maxsize < 0:
            raise ValueError(
                f"queue_maxsize must be non-negative, got {self.queue_maxsize}"
            )
        if self.report_interval_seconds <= 0:
            raise ValueError(
                "report_interval_seconds must be positive, "
                f"got {self.report_interval_seconds}"
            )

    @property
    def uses_postgresql(self) -> bool:
        return self.persister_type is PersisterType.POSTGRESQL

    @classmethod
    def from_environment(cls) -> "ProcessorConfig":
        """Create config from environment variables with defaults.

        Raises:
            ValueError: If a value is present but invalid.
        """
        return cls(
            cron_expression=os.environ.get("PROCESSOR_CRON_CONFIG", "*/1 * * * *"),
            persister_type=_get_enum_env(  # type: ignore[arg-type]
                "PROCESSOR_PERSISTER_TYPE", PersisterType, PersisterType.NONE
            ),
            database_url=os.environ.get("DATABASE_URL", ""),
            pool_size=_get_int_env("DATABASE_POOL_SIZE", 5),
            max_overflow=_get_int_env("DATABASE_MAX_OVERFLOW", 10),
            pool_recycle_seconds=_get_int_env("DATABASE_POOL_RECYCLE_SECONDS", 1800),
            batch_error_policy=_get_enum_env(  # type: ignore[arg-type]
                "PROCESSOR_BATCH_ERROR_POLICY", BatchErrorPolicy, BatchErrorPolicy.ABORT
            ),
            queue_maxsize=_get_int_env("PROCESSOR_QUEUE_MAXSIZE", 100),
            report_interval_seconds=_get_float_env(
                "PROCESSOR_REPORT_INTERVAL_SECONDS", 5.0
            ),
            notify_channel=os.environ.get("PROCESSOR_NOTIFY_CHANNEL", "governance_events"),
            events_topic=os.environ.get("PROCESSOR_EVENTS_TOPIC", "").strip(),
            environment=os.environ.get("ENVIRONMENT", "production"),
        )

    def masked(self) -> dict[str, object]:
        """Config values for logging, with the database password hidden."""
        values: dict[str, object] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            values[f.name] = value.value if isinstance(value, Enum) else value
        values["database_url"] = mask_database_url(self.database_url)
        return values


def mask_database_url(url: str) -> str:
    """Replace the password in user:password@host with ***."""
    if "@" not in url:
        return url
    before_at, after_at = url.split("@", 1)
    if ":" in before_at.split("//", 1)[-1]:
        user_part = before_at.rsplit(":", 1)[0]
        return f"{user_part}:***@{after_at}"
    return url


def usage() -> str:
    """Environment variable reference for the CLI."""
    width = max(len(name) for name, _, _ in ENVIRONMENT_VARIABLES)
    lines = ["Environment variables:", ""]
    for name, default, description in ENVIRONMENT_VARIABLES:
        shown = default if default else "(unset)"
        lines.append(f"  {name.ljust(width)}  {description} [default: {shown}]")
    return "\n".join(lines)
