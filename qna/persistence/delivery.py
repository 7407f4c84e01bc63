"""Notification delivery into the notification store."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qna.domain.model import Notification, NotificationEvent
from qna.domain.repository import NotificationRepository
from qna.domain.service import NotificationDelivery
from qna.persistence.repository.notification import PostgresNotificationRepository


class SessionNotificationDelivery(NotificationDelivery):
    """Stores each notification in its own short transaction.

    Runs outside any request, so it cannot share the request session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def deliver(self, event: NotificationEvent) -> Notification:
        async with self.session_factory() as session:
            saved = await PostgresNotificationRepository(session).save(
                event.to_notification()
            )
            await session.commit()
            return saved


class RepositoryNotificationDelivery(NotificationDelivery):
    """Stores notifications through a long-lived repository."""

    def __init__(self, notification_repository: NotificationRepository) -> None:
        self.notification_repository = notification_repository

    async def deliver(self, event: NotificationEvent) -> Notification:
        return await self.notification_repository.save(event.to_notification())
