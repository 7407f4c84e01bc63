"""Test configuration and shared helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

from qna.domain.model import Answer, Question
from qna.domain.value import (
    AnswerId,
    Identity,
    QuestionId,
    TagName,
    UserId,
    Username,
)

QUESTION_DESCRIPTION = (
    "I keep getting an error when running my tests and cannot work out why."
)
ANSWER_CONTENT = "You need to await the coroutine before reading its result here."


def make_identity(username: str = "alice") -> Identity:
    """Build an identity with a fresh user ID."""
    return Identity(user_id=UserId(uuid4()), username=Username(username))


def make_question(
    author: Identity | None = None,
    title: str = "Why does my async test hang forever?",
    tags: list[str] | None = None,
    age: timedelta = timedelta(0),
    **overrides,
) -> Question:
    """Build a valid question; ``age`` shifts ``created_at`` into the past."""
    author = author or make_identity("asker")
    created_at = datetime.now() - age
    fields = {
        "id": QuestionId(uuid4()),
        "title": title,
        "description": QUESTION_DESCRIPTION,
        "tags": [TagName(tag) for tag in (tags or ["python"])],
        "author_id": author.user_id,
        "author_username": author.username,
        "created_at": created_at,
        "updated_at": created_at,
    }
    fields.update(overrides)
    return Question(**fields)


def make_answer(
    question: Question,
    author: Identity | None = None,
    content: str = ANSWER_CONTENT,
    **overrides,
) -> Answer:
    """Build a valid answer to ``question``."""
    author = author or make_identity("answerer")
    fields = {
        "id": AnswerId(uuid4()),
        "question_id": question.id,
        "content": content,
        "author_id": author.user_id,
        "author_username": author.username,
    }
    fields.update(overrides)
    return Answer(**fields)
