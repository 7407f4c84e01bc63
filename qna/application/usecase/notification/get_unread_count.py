"""Unread notification count use case."""


from pydantic import BaseModel

from qna.domain.service import NotificationService
from qna.domain.value import UserId, parse_uuid


class GetUnreadCountRequest(BaseModel):
    """Unread count request."""

    user_id: str  # User ID from authenticated user


class GetUnreadCountResponse(BaseModel):
    """Unread count response."""

    unread_count: int


class GetUnreadCountUseCase:
    """Use case for the notification badge."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: GetUnreadCountRequest) -> GetUnreadCountResponse:
        count = await self.notification_service.unread_count(UserId(parse_uuid(request.user_id)))
        return GetUnreadCountResponse(unread_count=count)
