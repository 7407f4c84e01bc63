"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of with SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from qna.domain.model import Answer, Notification, Question, VoteLedger
from qna.domain.value import (
    AnswerId,
    NotificationId,
    NotificationKind,
    QuestionId,
    TagName,
    UserId,
    Username,
    VoteDirection,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return None if value is None else _uuid(value)


def row_to_ledger(vote_history: Optional[Dict[str, str]]) -> VoteLedger:
    """Convert the JSONB vote history to a ledger.

    The score is recomputed from the entries rather than read from the
    ``score`` column, so a ledger loaded from the database is always
    consistent.
    """
    entries = {
        UserId(UUID(voter)): VoteDirection(direction)
        for voter, direction in (vote_history or {}).items()
    }
    return VoteLedger.from_entries(entries)


def ledger_to_dict(ledger: VoteLedger) -> Dict[str, Any]:
    """Convert a ledger to the ``vote_history`` and ``score`` columns."""
    return {
        "vote_history": {
            str(voter): direction.value for voter, direction in ledger.entries.items()
        },
        "score": ledger.score,
    }


def row_to_question(row: Dict[str, Any]) -> Question:
    """Convert database row to Question domain model.

    Args:
        row: Database row as dict

    Returns:
        Question domain model
    """
    return Question(
        id=QuestionId(_uuid(row["id"])),
        title=row["title"],
        description=row["description"],
        tags=[TagName(tag) for tag in row["tags"]],
        author_id=UserId(_uuid(row["author_id"])),
        author_username=Username(row["author_username"]),
        ledger=row_to_ledger(row.get("vote_history")),
        version=row["version"],
        views=row["views"],
        answer_count=row["answer_count"],
        is_closed=row["is_closed"],
        accepted_answer_id=_optional_uuid(row.get("accepted_answer_id")),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def question_to_dict(question: Question) -> Dict[str, Any]:
    """Convert Question domain model to database dict.

    Args:
        question: Question domain model

    Returns:
        Dict suitable for database insertion
    """
    data = question.model_dump(exclude={"ledger"})
    data["tags"] = [tag.root for tag in question.tags]
    data.update(ledger_to_dict(question.ledger))
    return data


def row_to_answer(row: Dict[str, Any]) -> Answer:
    """Convert database row to Answer domain model.

    Args:
        row: Database row as dict

    Returns:
        Answer domain model
    """
    return Answer(
        id=AnswerId(_uuid(row["id"])),
        question_id=QuestionId(_uuid(row["question_id"])),
        content=row["content"],
        author_id=UserId(_uuid(row["author_id"])),
        author_username=Username(row["author_username"]),
        ledger=row_to_ledger(row.get("vote_history")),
        version=row["version"],
        is_accepted=row["is_accepted"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Convert Answer domain model to database dict."""
    data = answer.model_dump(exclude={"ledger"})
    data.update(ledger_to_dict(answer.ledger))
    return data


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        recipient_id=UserId(_uuid(row["recipient_id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        kind=NotificationKind(row["kind"]),
        title=row["title"],
        message=row["message"],
        link=row["link"],
        read=row["read"],
        question_id=_optional_uuid(row.get("question_id")),
        answer_id=_optional_uuid(row.get("answer_id")),
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump()
    data["kind"] = notification.kind.value
    return data
