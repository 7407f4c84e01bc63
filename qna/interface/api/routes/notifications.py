"""Notification routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from qna.application.usecase.notification import (
    DeleteNotificationRequest,
    DeleteNotificationResponse,
    DeleteNotificationUseCase,
    GetUnreadCountRequest,
    GetUnreadCountResponse,
    GetUnreadCountUseCase,
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllReadRequest,
    MarkAllReadResponse,
    MarkAllReadUseCase,
    MarkReadRequest,
    MarkReadResponse,
    MarkReadUseCase,
)
from qna.domain.service import JWTService
from qna.interface.api.auth import require_identity

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListNotificationsResponse:
    """List the current user's notifications, newest first."""
    identity = require_identity(jwt_service, auth_token, "read notifications")

    return await list_notifications_use_case.execute(
        ListNotificationsRequest(
            user_id=str(identity.user_id), limit=limit, offset=offset
        )
    )


@router.get("/unread-count", response_model=GetUnreadCountResponse)
async def get_unread_count(
    get_unread_count_use_case: FromDishka[GetUnreadCountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetUnreadCountResponse:
    """Number of unread notifications."""
    identity = require_identity(jwt_service, auth_token, "read notifications")

    return await get_unread_count_use_case.execute(
        GetUnreadCountRequest(user_id=str(identity.user_id))
    )


@router.patch("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    mark_all_read_use_case: FromDishka[MarkAllReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkAllReadResponse:
    """Mark every notification as read."""
    identity = require_identity(jwt_service, auth_token, "update notifications")

    return await mark_all_read_use_case.execute(
        MarkAllReadRequest(user_id=str(identity.user_id))
    )


@router.patch("/{notification_id}/read", response_model=MarkReadResponse)
async def mark_read(
    notification_id: str,
    mark_read_use_case: FromDishka[MarkReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkReadResponse:
    """Mark one notification as read."""
    identity = require_identity(jwt_service, auth_token, "update notifications")

    return await mark_read_use_case.execute(
        MarkReadRequest(notification_id=notification_id, user_id=str(identity.user_id))
    )


@router.delete("/{notification_id}", response_model=DeleteNotificationResponse)
async def delete_notification(
    notification_id: str,
    delete_notification_use_case: FromDishka[DeleteNotificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteNotificationResponse:
    """Delete one notification."""
    identity = require_identity(jwt_service, auth_token, "delete notifications")

    return await delete_notification_use_case.execute(
        DeleteNotificationRequest(
            notification_id=notification_id, user_id=str(identity.user_id)
        )
    )
