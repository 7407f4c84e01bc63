"""Domain value objects for the Q&A site.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from qna.domain.value.common import RootValueObject, ValueObject
from qna.domain.value.identifiers import UserId


class VoteDirection(str, Enum):
    """Direction of a single vote."""

    UP = "up"
    DOWN = "down"

    @property
    def delta(self) -> int:
        """Contribution of this direction to an item's score."""
        return 1 if self is VoteDirection.UP else -1


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    QUESTION = "question"
    ANSWER = "answer"


class NotificationKind(str, Enum):
    """What a notification is about."""

    ANSWER = "answer"  # Someone answered your question
    VOTE = "vote"  # Someone voted on your question or answer
    ACCEPT = "accept"  # Your answer was accepted


class TagName(RootValueObject[str]):
    """Tag attached to a question.

    Stored trimmed and lowercased, 1-20 characters.
    Examples: 'python', 'asyncio', 'c++'
    """

    @field_validator("root")
    @classmethod
    def normalize_tag_name(cls, v: str) -> str:
        """Trim, lowercase and validate length."""
        v = v.strip().lower()
        if len(v) < 1 or len(v) > 20:
            raise ValueError("Tag name must be 1-20 characters")
        return v


class Username(RootValueObject[str]):
    """Display name of a user, 3-30 characters, no whitespace."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^\S{3,30}$", v):
            raise ValueError("Username must be 3-30 characters without spaces")
        return v


class Identity(ValueObject):
    """The authenticated user performing an operation.

    Passed explicitly into every operation that needs to know who is acting.
    """

    user_id: UserId
    username: Username
