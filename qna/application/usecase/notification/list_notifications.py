"""List notifications use case."""

from datetime import datetime
from typing import Optional

import logfire
from pydantic import BaseModel, Field

from qna.domain.model.notification import Notification
from qna.domain.service import NotificationService
from qna.domain.value import NotificationKind, UserId, parse_uuid


class NotificationItem(BaseModel):
    """Notification item in response."""

    notification_id: str
    kind: NotificationKind
    sender_id: str
    title: str
    message: str
    link: str
    read: bool
    question_id: Optional[str]
    answer_id: Optional[str]
    created_at: datetime

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationItem":
        return cls(
            notification_id=str(notification.id),
            kind=notification.kind,
            sender_id=str(notification.sender_id),
            title=notification.title,
            message=notification.message,
            link=notification.link,
            read=notification.read,
            question_id=str(notification.question_id) if notification.question_id else None,
            answer_id=str(notification.answer_id) if notification.answer_id else None,
            created_at=notification.created_at,
        )


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: str  # User ID from authenticated user
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: list[NotificationItem]
    total: int
    unread_count: int
    limit: int
    offset: int


class ListNotificationsUseCase:
    """Use case for listing the current user's notifications."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize list notifications use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        """Execute list notifications flow.

        Args:
            request: List notifications request

        Returns:
            Page of notifications, newest first, with total and unread counts
        """
        with logfire.span(
            "list_notifications.execute", limit=request.limit, offset=request.offset
        ):
            notifications, total, unread = (
                await self.notification_service.list_notifications(
                    UserId(parse_uuid(request.user_id)),
                    limit=request.limit,
                    offset=request.offset,
                )
            )
            return ListNotificationsResponse(
                notifications=[
                    NotificationItem.from_notification(n) for n in notifications
                ],
                total=total,
                unread_count=unread,
                limit=request.limit,
                offset=request.offset,
            )
