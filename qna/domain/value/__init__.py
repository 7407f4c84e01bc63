"""Domain value objects for the Q&A site."""

from qna.domain.value.identifiers import (
    AnswerId,
    NotificationId,
    QuestionId,
    UserId,
    parse_uuid,
)
from qna.domain.value.types import (
    Identity,
    NotificationKind,
    TagName,
    Username,
    VotableType,
    VoteDirection,
)

__all__ = [
    # Identifiers
    "UserId",
    "QuestionId",
    "AnswerId",
    "NotificationId",
    "parse_uuid",
    # Types
    "Identity",
    "NotificationKind",
    "TagName",
    "Username",
    "VotableType",
    "VoteDirection",
]
