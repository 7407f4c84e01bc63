"""PostgreSQL implementation of Notification repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from qna.domain.model import Notification
from qna.domain.repository.notification import NotificationRepository
from qna.domain.value import NotificationId, UserId
from qna.persistence.mappers import notification_to_dict, row_to_notification
from qna.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None

    async def find_by_recipient(
        self, recipient_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Notification]:
        """Find a user's notifications, newest first."""
        with logfire.span(
            "notification_repository.find_by_recipient",
            recipient_id=str(recipient_id),
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(notifications_table)
                .where(notifications_table.c.recipient_id == recipient_id)
                .order_by(desc(notifications_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_notification(row._asdict()) for row in result.fetchall()]

    async def count_by_recipient(
        self, recipient_id: UserId, unread_only: bool = False
    ) -> int:
        """Count a user's notifications."""
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(notifications_table.c.recipient_id == recipient_id)
        )
        if unread_only:
            stmt = stmt.where(notifications_table.c.read.is_(False))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, notification: Notification) -> Notification:
        """Insert a notification."""
        with logfire.span(
            "notification_repository.save", notification_id=str(notification.id)
        ):
            stmt = (
                insert(notifications_table)
                .values(**notification_to_dict(notification))
                .returning(notifications_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_notification(row._asdict())

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> Optional[Notification]:
        """Mark one of the recipient's notifications as read."""
        stmt = (
            update(notifications_table)
            .where(
                notifications_table.c.id == notification_id,
                notifications_table.c.recipient_id == recipient_id,
            )
            .values(read=True)
            .returning(notifications_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark all of a user's unread notifications as read."""
        stmt = (
            update(notifications_table)
            .where(
                notifications_table.c.recipient_id == recipient_id,
                notifications_table.c.read.is_(False),
            )
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete(self, notification_id: NotificationId, recipient_id: UserId) -> bool:
        """Delete one of the recipient's notifications."""
        stmt = delete(notifications_table).where(
            notifications_table.c.id == notification_id,
            notifications_table.c.recipient_id == recipient_id,
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
