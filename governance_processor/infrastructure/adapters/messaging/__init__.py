"""Push transports for event notifications."""

from governance_processor.infrastructure.adapters.messaging.postgres_event_publisher import (
    PostgresEventPublisher,
)
from governance_processor.infrastructure.adapters.messaging.postgres_notification_subscriber import (
    PostgresNotificationSubscriber,
)

__all__: list[str] = ["PostgresEventPublisher", "PostgresNotificationSubscriber"]
