"""In-memory notification repository for testing."""

from typing import Optional

from qna.domain.model import Notification
from qna.domain.repository.notification import NotificationRepository
from qna.domain.value import NotificationId, UserId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}

    def _owned(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> Optional[Notification]:
        notification = self._notifications.get(notification_id)
        if notification is None or notification.recipient_id != recipient_id:
            return None
        return notification

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        return self._notifications.get(notification_id)

    async def find_by_recipient(
        self, recipient_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Notification]:
        """Find a user's notifications, newest first."""
        notifications = [
            n for n in self._notifications.values() if n.recipient_id == recipient_id
        ]
        notifications.sort(key=lambda n: n.created_at, reverse=True)
        return notifications[offset : offset + limit]

    async def count_by_recipient(
        self, recipient_id: UserId, unread_only: bool = False
    ) -> int:
        """Count a user's notifications."""
        return sum(
            1
            for n in self._notifications.values()
            if n.recipient_id == recipient_id and not (unread_only and n.read)
        )

    async def save(self, notification: Notification) -> Notification:
        """Save a notification."""
        self._notifications[notification.id] = notification
        return notification

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> Optional[Notification]:
        """Mark one of the recipient's notifications as read."""
        notification = self._owned(notification_id, recipient_id)
        if notification is None:
            return None

        updated = notification.model_copy(update={"read": True})
        self._notifications[notification_id] = updated
        return updated

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark all of a user's unread notifications as read."""
        changed = 0
        for notification_id, notification in list(self._notifications.items()):
            if notification.recipient_id == recipient_id and not notification.read:
                self._notifications[notification_id] = notification.model_copy(
                    update={"read": True}
                )
                changed += 1
        return changed

    async def delete(self, notification_id: NotificationId, recipient_id: UserId) -> bool:
        """Delete one of the recipient's notifications."""
        if self._owned(notification_id, recipient_id) is None:
            return False
        del self._notifications[notification_id]
        return True
