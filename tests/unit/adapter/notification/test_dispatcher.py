"""Unit tests for QueueNotificationDispatcher."""

import asyncio
from uuid import uuid4

import pytest

from qna.adapter.notification import QueueNotificationDispatcher
from qna.domain.model import Notification, NotificationEvent
from qna.domain.service import NotificationDelivery
from qna.domain.value import NotificationKind, UserId
from qna.persistence.delivery import RepositoryNotificationDelivery
from qna.persistence.repository.inmemory import InMemoryNotificationRepository


class FailingDelivery(NotificationDelivery):
    """Fails on the first delivery, succeeds afterwards."""

    def __init__(self) -> None:
        self.calls = 0
        self.delivered: list[NotificationEvent] = []

    async def deliver(self, event: NotificationEvent) -> Notification:
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("store unavailable")
        self.delivered.append(event)
        return event.to_notification()


def _event(recipient: UserId | None = None) -> NotificationEvent:
    return NotificationEvent(
        kind=NotificationKind.VOTE,
        recipient_id=recipient or UserId(uuid4()),
        sender_id=UserId(uuid4()),
        title="Vote Received",
        message="voter upvoted your question",
        link="/questions/1",
    )


class TestQueueNotificationDispatcher:
    """Tests for the queue-backed dispatcher."""

    @pytest.mark.asyncio
    async def test_worker_delivers_submitted_events(self):
        """A running worker stores submitted events."""
        # Arrange
        repo = InMemoryNotificationRepository()
        dispatcher = QueueNotificationDispatcher(RepositoryNotificationDelivery(repo))
        recipient = UserId(uuid4())
        dispatcher.start()

        # Act
        dispatcher.submit(_event(recipient))
        dispatcher.submit(_event(recipient))
        for _ in range(50):
            if await repo.count_by_recipient(recipient) == 2:
                break
            await asyncio.sleep(0.01)

        # Assert
        assert await repo.count_by_recipient(recipient) == 2
        assert dispatcher.backlog == 0
        await dispatcher.stop()
        assert not dispatcher.running

    @pytest.mark.asyncio
    async def test_full_queue_drops_event(self):
        """Submit never blocks; overflow is dropped."""
        # Arrange
        repo = InMemoryNotificationRepository()
        dispatcher = QueueNotificationDispatcher(
            RepositoryNotificationDelivery(repo), queue_size=2
        )
        recipient = UserId(uuid4())

        # Act
        for _ in range(3):
            dispatcher.submit(_event(recipient))

        # Assert
        assert dispatcher.backlog == 2
        assert await dispatcher.drain() == 2
        assert await repo.count_by_recipient(recipient) == 2

    @pytest.mark.asyncio
    async def test_failed_delivery_is_not_fatal(self):
        """A failing delivery is logged and the next event still goes out."""
        # Arrange
        delivery = FailingDelivery()
        dispatcher = QueueNotificationDispatcher(delivery)
        dispatcher.submit(_event())
        second = _event()
        dispatcher.submit(second)

        # Act
        delivered = await dispatcher.drain()

        # Assert
        assert delivered == 1
        assert delivery.delivered == [second]

    @pytest.mark.asyncio
    async def test_stop_flushes_backlog_and_is_idempotent(self):
        """Stopping delivers what is queued; stopping again is harmless."""
        # Arrange
        repo = InMemoryNotificationRepository()
        dispatcher = QueueNotificationDispatcher(RepositoryNotificationDelivery(repo))
        recipient = UserId(uuid4())
        dispatcher.submit(_event(recipient))

        # Act
        await dispatcher.stop()
        await dispatcher.stop()

        # Assert
        assert await repo.count_by_recipient(recipient) == 1
        assert dispatcher.backlog == 0
