"""Notification entity and the event that produces it."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import Field

from qna.domain.model.common import DomainModel
from qna.domain.value import (
    AnswerId,
    NotificationId,
    NotificationKind,
    QuestionId,
    UserId,
)
from qna.domain.value.common import ValueObject


class NotificationEvent(ValueObject):
    """A notification that has been requested but not yet stored.

    Events are handed to the dispatcher once the triggering change has
    committed. Delivery is best-effort.
    """

    kind: NotificationKind
    recipient_id: UserId
    sender_id: UserId
    title: str = Field(max_length=200)
    message: str = Field(max_length=500)
    link: str
    question_id: Optional[QuestionId] = None
    answer_id: Optional[AnswerId] = None

    def to_notification(self) -> "Notification":
        """Materialize the event as a new unread notification."""
        return Notification(
            id=NotificationId(uuid4()),
            recipient_id=self.recipient_id,
            sender_id=self.sender_id,
            kind=self.kind,
            title=self.title,
            message=self.message,
            link=self.link,
            question_id=self.question_id,
            answer_id=self.answer_id,
        )


class Notification(DomainModel):
    """Stored notification shown to its recipient."""

    id: NotificationId
    recipient_id: UserId
    sender_id: UserId
    kind: NotificationKind
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=500)
    link: str
    read: bool = False
    question_id: Optional[QuestionId] = None
    answer_id: Optional[AnswerId] = None
    created_at: datetime = Field(default_factory=datetime.now)
