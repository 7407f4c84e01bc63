"""Notification domain service."""

from abc import ABC, abstractmethod
from typing import List, Optional

import logfire

from qna.domain.error import NotFoundError
from qna.domain.model.answer import Answer
from qna.domain.model.ledger import VoteOutcome
from qna.domain.model.notification import Notification, NotificationEvent
from qna.domain.model.question import Question
from qna.domain.repository import NotificationRepository
from qna.domain.value import (
    AnswerId,
    Identity,
    NotificationId,
    NotificationKind,
    QuestionId,
    UserId,
    VotableType,
    VoteDirection,
)

from .base import Service
from .vote_service import VoteResult


class NotificationSink(ABC):
    """Accepts notification events for later delivery."""

    @abstractmethod
    def submit(self, event: NotificationEvent) -> None:
        """Hand over an event. Must not block and must not raise."""
        pass


class NotificationDelivery(ABC):
    """Stores a notification so its recipient can see it."""

    @abstractmethod
    async def deliver(self, event: NotificationEvent) -> Notification:
        """Persist the event as a notification.

        Args:
            event: Event to deliver

        Returns:
            The stored notification
        """
        pass


def question_link(question_id: QuestionId, answer_id: Optional[AnswerId] = None) -> str:
    """Frontend link to a question, optionally anchored at an answer."""
    if answer_id is None:
        return f"/questions/{question_id}"
    return f"/questions/{question_id}#answer-{answer_id}"


class NotificationService(Service):
    """Domain service for building and reading notifications."""

    def __init__(self, notification_repository: NotificationRepository) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
        """
        self.notification_repository = notification_repository

    @staticmethod
    def answer_posted(question: Question, answer: Answer) -> Optional[NotificationEvent]:
        """Event for the question author when someone answers.

        Returns None when the author answered their own question.
        """
        if question.author_id == answer.author_id:
            return None

        return NotificationEvent(
            kind=NotificationKind.ANSWER,
            recipient_id=question.author_id,
            sender_id=answer.author_id,
            title="New Answer",
            message=f"{answer.author_username} answered your question",
            link=question_link(question.id, answer.id),
            question_id=question.id,
            answer_id=answer.id,
        )

    @staticmethod
    def answer_accepted(
        question_id: QuestionId,
        answer_id: AnswerId,
        answer_author_id: UserId,
        accepted_by: Identity,
    ) -> NotificationEvent:
        """Event for the answer author when their answer is accepted."""
        return NotificationEvent(
            kind=NotificationKind.ACCEPT,
            recipient_id=answer_author_id,
            sender_id=accepted_by.user_id,
            title="Answer Accepted",
            message=f"{accepted_by.username} accepted your answer",
            link=question_link(question_id, answer_id),
            question_id=question_id,
            answer_id=answer_id,
        )

    @staticmethod
    def vote_received(vote: VoteResult, voter: Identity) -> Optional[NotificationEvent]:
        """Event for the item author when a vote lands.

        Returns None when the vote was withdrawn.
        """
        if vote.outcome == VoteOutcome.REMOVED or vote.direction is None:
            return None

        verb = "upvoted" if vote.direction == VoteDirection.UP else "downvoted"
        if vote.item_type == VotableType.ANSWER:
            answer_id: Optional[AnswerId] = AnswerId(vote.item_id)
        else:
            answer_id = None

        return NotificationEvent(
            kind=NotificationKind.VOTE,
            recipient_id=vote.author_id,
            sender_id=voter.user_id,
            title="Vote Received",
            message=f"{voter.username} {verb} your {vote.item_type.value}",
            link=question_link(vote.question_id, answer_id),
            question_id=vote.question_id,
            answer_id=answer_id,
        )

    async def list_notifications(
        self, recipient_id: UserId, limit: int = 20, offset: int = 0
    ) -> tuple[List[Notification], int, int]:
        """List a user's notifications, newest first.

        Returns:
            Tuple of the page, the total count and the unread count
        """
        with logfire.span(
            "notification_service.list_notifications",
            recipient_id=str(recipient_id),
            limit=limit,
            offset=offset,
        ):
            notifications = await self.notification_repository.find_by_recipient(
                recipient_id, limit=limit, offset=offset
            )
            total = await self.notification_repository.count_by_recipient(recipient_id)
            unread = await self.notification_repository.count_by_recipient(
                recipient_id, unread_only=True
            )
            logfire.info(
                "Notifications listed", count=len(notifications), total=total, unread=unread
            )
            return notifications, total, unread

    async def unread_count(self, recipient_id: UserId) -> int:
        """Number of unread notifications."""
        return await self.notification_repository.count_by_recipient(
            recipient_id, unread_only=True
        )

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> Notification:
        """Mark one notification as read.

        Raises:
            NotFoundError: If no such notification belongs to the recipient
        """
        with logfire.span(
            "notification_service.mark_read",
            notification_id=str(notification_id),
            recipient_id=str(recipient_id),
        ):
            notification = await self.notification_repository.mark_read(
                notification_id, recipient_id
            )
            if notification is None:
                logfire.warn("Notification not found", notification_id=str(notification_id))
                raise NotFoundError("Notification", str(notification_id))
            return notification

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark every notification of the recipient as read.

        Returns:
            Number of notifications changed
        """
        with logfire.span(
            "notification_service.mark_all_read", recipient_id=str(recipient_id)
        ):
            changed = await self.notification_repository.mark_all_read(recipient_id)
            logfire.info("Notifications marked read", count=changed)
            return changed

    async def delete_notification(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> None:
        """Delete one notification.

        Raises:
            NotFoundError: If no such notification belongs to the recipient
        """
        with logfire.span(
            "notification_service.delete_notification",
            notification_id=str(notification_id),
            recipient_id=str(recipient_id),
        ):
            deleted = await self.notification_repository.delete(
                notification_id, recipient_id
            )
            if not deleted:
                logfire.warn("Notification not found", notification_id=str(notification_id))
                raise NotFoundError("Notification", str(notification_id))
