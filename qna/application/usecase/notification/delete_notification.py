"""Delete notification use case."""


import logfire
from pydantic import BaseModel

from qna.domain.service import NotificationService
from qna.domain.value import NotificationId, UserId, parse_uuid


class DeleteNotificationRequest(BaseModel):
    """Delete notification request."""

    notification_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class DeleteNotificationResponse(BaseModel):
    """Delete notification response."""

    success: bool
    message: str


class DeleteNotificationUseCase:
    """Use case for deleting one of the user's notifications."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize delete notification use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: DeleteNotificationRequest
    ) -> DeleteNotificationResponse:
        """Execute delete notification flow.

        Raises:
            NotFoundError: If the user has no such notification
        """
        with logfire.span(
            "delete_notification.execute", notification_id=request.notification_id
        ):
            await self.notification_service.delete_notification(
                NotificationId(parse_uuid(request.notification_id)),
                UserId(parse_uuid(request.user_id)),
            )
            return DeleteNotificationResponse(
                success=True, message="Notification deleted"
            )
