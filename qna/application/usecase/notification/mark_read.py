"""Mark notifications read use cases."""


import logfire
from pydantic import BaseModel

from qna.application.usecase.notification.list_notifications import NotificationItem
from qna.domain.service import NotificationService
from qna.domain.value import NotificationId, UserId, parse_uuid


class MarkReadRequest(BaseModel):
    """Mark one notification read request."""

    notification_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class MarkReadResponse(BaseModel):
    """Mark one notification read response."""

    notification: NotificationItem


class MarkReadUseCase:
    """Use case for marking a single notification as read."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: MarkReadRequest) -> MarkReadResponse:
        """Execute mark read flow.

        Raises:
            NotFoundError: If the user has no such notification
        """
        with logfire.span("mark_read.execute", notification_id=request.notification_id):
            notification = await self.notification_service.mark_read(
                NotificationId(parse_uuid(request.notification_id)),
                UserId(parse_uuid(request.user_id)),
            )
            return MarkReadResponse(
                notification=NotificationItem.from_notification(notification)
            )


class MarkAllReadRequest(BaseModel):
    """Mark all notifications read request."""

    user_id: str  # User ID from authenticated user


class MarkAllReadResponse(BaseModel):
    """Mark all notifications read response."""

    updated: int


class MarkAllReadUseCase:
    """Use case for marking every notification of the user as read."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark all read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: MarkAllReadRequest) -> MarkAllReadResponse:
        """Execute mark all read flow."""
        with logfire.span("mark_all_read.execute"):
            updated = await self.notification_service.mark_all_read(
                UserId(parse_uuid(request.user_id))
            )
            return MarkAllReadResponse(updated=updated)
