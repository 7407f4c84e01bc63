"""In-process notification dispatcher.

Events are queued by request handlers after their transaction commits and
delivered by a single background worker. Delivery is best-effort: a full
queue drops the event, a failed delivery is logged and not retried.
"""

import asyncio
from typing import Optional

import logfire

from qna.domain.model.notification import NotificationEvent
from qna.domain.service import NotificationDelivery, NotificationSink


class QueueNotificationDispatcher(NotificationSink):
    """Bounded ``asyncio.Queue`` drained by one worker task."""

    def __init__(self, delivery: NotificationDelivery, queue_size: int = 1000) -> None:
        """Initialize dispatcher.

        Args:
            delivery: Where events end up
            queue_size: Maximum backlog before events are dropped
        """
        self.delivery = delivery
        self._queue: asyncio.Queue[NotificationEvent] = asyncio.Queue(maxsize=queue_size)
        self._worker: Optional[asyncio.Task] = None

    @property
    def backlog(self) -> int:
        """Number of events waiting for delivery."""
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def submit(self, event: NotificationEvent) -> None:
        """Queue an event without waiting."""
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            logfire.warn(
                "Notification queue full, dropping event",
                kind=event.kind.value,
                recipient_id=str(event.recipient_id),
                backlog=self._queue.qsize(),
            )

    async def _deliver(self, event: NotificationEvent) -> bool:
        try:
            notification = await self.delivery.deliver(event)
        except Exception:
            logfire.exception(
                "Notification delivery failed",
                kind=event.kind.value,
                recipient_id=str(event.recipient_id),
            )
            return False

        logfire.info(
            "Notification delivered",
            notification_id=str(notification.id),
            kind=event.kind.value,
            recipient_id=str(event.recipient_id),
        )
        return True

    async def drain(self) -> int:
        """Deliver everything currently queued, in order.

        Returns:
            Number of events delivered successfully
        """
        delivered = 0
        while True:
            try:
                event = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return delivered
            try:
                if await self._deliver(event):
                    delivered += 1
            finally:
                self._queue.task_done()

    async def run(self) -> None:
        """Deliver events forever. Cancel the task to stop."""
        while True:
            event = await self._queue.get()
            try:
                await self._deliver(event)
            finally:
                self._queue.task_done()

    def start(self) -> None:
        """Start the worker task on the running loop. No-op if running."""
        if self.running:
            return
        self._worker = asyncio.create_task(self.run(), name="notification-dispatcher")
        logfire.info("Notification dispatcher started")

    async def stop(self) -> None:
        """Stop the worker and deliver what is left in the queue.

        Safe to call more than once.
        """
        worker, self._worker = self._worker, None
        if worker is not None:
            worker.cancel()
            try:
                await worker
            except asyncio.CancelledError:
                pass

        remaining = await self.drain()
        if worker is not None or remaining:
            logfire.info("Notification dispatcher stopped", flushed=remaining)
