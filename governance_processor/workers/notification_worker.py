"""Push-driven processing: one cycle per "new events" notification.

The worker is the single consumer of the subscriber's message queue. It
waits on whichever is ready first: a message, a transport error, or the
quit event. A message is acknowledged only after its cycle succeeded;
a failed cycle is reported and the message is nacked for redelivery.

A notification flagged isException asks for an out-of-band refresh of one
contract from the notification's timestamp; that refresh does not move
the watermark.
"""

import asyncio
import logging
import signal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from governance_processor.application.ports.error_reporter import ErrorReporter
from governance_processor.application.ports.notification_subscriber import (
    NotificationSubscriber,
    ReceivedMessage,
)
from governance_processor.workers.processing_cycle import ProcessingCycle

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    """Wire schema of a notification: {hash, timestamp, contractAddress, isException}."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hash: str
    timestamp: int = Field(ge=0)
    contract_address: str = Field(default="", alias="contractAddress")
    is_exception: bool = Field(default=False, alias="isException")


class NotificationWorker:
    """Consumes notifications and runs processing cycles.

    Usage:
        worker = NotificationWorker(subscriber, cycle, reporter)
        await worker.run()          # until stop() is called
    """

    def __init__(
        self,
        subscriber: NotificationSubscriber,
        cycle: ProcessingCycle,
        error_reporter: ErrorReporter,
    ) -> None:
        self._subscriber = subscriber
        self._cycle = cycle
        self._reporter = error_reporter
        self._quit = asyncio.Event()
        self._processed = 0
        self._failed = 0

    @property
    def processed(self) -> int:
        return self._processed

    @property
    def failed(self) -> int:
        return self._failed

    def stop(self) -> None:
        """Signal the worker to stop after the in-flight message."""
        logger.info("Notification worker stop requested")
        self._quit.set()

    async def run(self) -> None:
        """Run until stop() is called."""
        self._quit.clear()
        await self._subscriber.start()
        logger.info("Notification worker starting")
        try:
            while not self._quit.is_set():
                await self._wait_once()
        finally:
            await self._subscriber.stop()
            logger.info(
                "Notification worker stopped: processed=%d failed=%d",
                self._processed,
                self._failed,
            )

    async def _wait_once(self) -> None:
        message_task = asyncio.ensure_future(self._subscriber.messages.get())
        error_task = asyncio.ensure_future(self._subscriber.errors.get())
        quit_task = asyncio.ensure_future(self._quit.wait())
        done, pending = await asyncio.wait(
            {message_task, error_task, quit_task},
            return_when=asyncio.FIRST_COMPLETED,
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        if error_task in done:
            error = error_task.result()
            logger.error("Subscriber error: %s", error)
            self._reporter.report(error, {"operation": "subscribe"})
        if message_task in done:
            await self.process_message(message_task.result())

    async def process_message(self, message: ReceivedMessage) -> bool:
        """Handle one received message.

        Returns:
            True if the message was acknowledged.
        """
        try:
            notification = Notification.model_validate_json(message.data)
        except ValidationError as e:
            # Malformed messages can never succeed; drop them.
            logger.error("Invalid notification %s: %s", message.message_id, e)
            self._reporter.report(
                e, {"operation": "decode_notification", "message_id": message.message_id}
            )
            await self._subscriber.ack(message)
            self._failed += 1
            return True

        try:
            await self._run_for(notification)
        except Exception as e:
            # The cycle has already reported the error.
            logger.warning(
                "Cycle failed for notification %s, nacking: %s",
                notification.hash,
                e,
            )
            await self._subscriber.nack(message)
            self._failed += 1
            return False

        await self._subscriber.ack(message)
        self._processed += 1
        return True

    async def _run_for(self, notification: Notification) -> None:
        if notification.is_exception:
            logger.info(
                "Refreshing contract %s from %d",
                notification.contract_address,
                notification.timestamp,
            )
            await self._cycle.refresh_contract(
                notification.contract_address, notification.timestamp
            )
            return

        watermark = await self._cycle.watermarks.current()
        if notification.timestamp < watermark.last_timestamp:
            logger.info(
                "Notification %s is older than watermark: %d < %d",
                notification.hash,
                notification.timestamp,
                watermark.last_timestamp,
            )
        await self._cycle.run()

    def get_metrics(self) -> dict[str, Any]:
        return {
            "processed": self._processed,
            "failed": self._failed,
            "running": not self._quit.is_set(),
        }


async def run_notification_worker(
    subscriber: NotificationSubscriber,
    cycle: ProcessingCycle,
    error_reporter: ErrorReporter,
) -> None:
    """Run a notification worker with graceful shutdown.

    Args:
        subscriber: Push transport.
        cycle: Processing cycle to run per notification.
        error_reporter: Sink for failures.
    """
    worker = NotificationWorker(subscriber, cycle, error_reporter)

    # Setup signal handlers for graceful shutdown
    loop = asyncio.get_running_loop()

    def signal_handler() -> None:
        worker.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    await worker.run()
