"""PostgreSQL repository implementations."""

from qna.persistence.repository.answer import PostgresAnswerRepository
from qna.persistence.repository.notification import PostgresNotificationRepository
from qna.persistence.repository.question import PostgresQuestionRepository

__all__ = [
    "PostgresAnswerRepository",
    "PostgresNotificationRepository",
    "PostgresQuestionRepository",
]
