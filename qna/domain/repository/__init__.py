"""Repository interfaces for the Q&A domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from qna.domain.repository.answer import AnswerRepository
from qna.domain.repository.notification import NotificationRepository
from qna.domain.repository.question import QuestionRepository, QuestionSortOrder
from qna.domain.repository.votable import VotableRepository

__all__ = [
    "AnswerRepository",
    "NotificationRepository",
    "QuestionRepository",
    "QuestionSortOrder",
    "VotableRepository",
]
