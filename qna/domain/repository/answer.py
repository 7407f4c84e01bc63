"""Answer repository interface."""

from abc import abstractmethod
from typing import List, Optional

from qna.domain.model.activity import ContentTotals
from qna.domain.model.answer import Answer
from qna.domain.repository.votable import VotableRepository
from qna.domain.value import AnswerId, QuestionId, UserId


class AnswerRepository(VotableRepository[Answer]):
    """Repository for Answer entity.

    Defines the contract for answer persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID.

        Args:
            answer_id: The answer's unique identifier

        Returns:
            The answer if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_question(
        self,
        question_id: QuestionId,
        include_deleted: bool = False,
    ) -> List[Answer]:
        """Find the answers of a question.

        Ordered accepted answer first, then score descending, then oldest
        first.

        Args:
            question_id: The question ID
            include_deleted: Whether to include soft-deleted answers

        Returns:
            List of answers
        """
        pass

    @abstractmethod
    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create or update).

        Args:
            answer: The answer to save

        Returns:
            The saved answer
        """
        pass

    @abstractmethod
    async def set_accepted(self, answer_id: AnswerId, accepted: bool) -> Optional[Answer]:
        """Set the accepted flag and nothing else.

        Only ``is_accepted`` is written so a concurrent vote on the same
        answer is never overwritten.

        Args:
            answer_id: The answer ID
            accepted: New flag value

        Returns:
            The updated answer, or None if it does not exist
        """
        pass

    @abstractmethod
    async def find_by_author(
        self, author_id: UserId, limit: int = 10, offset: int = 0
    ) -> List[Answer]:
        """Find an author's live answers, newest first.

        Args:
            author_id: The author
            limit: Maximum number of answers to return
            offset: Number of answers to skip

        Returns:
            List of answers
        """
        pass

    @abstractmethod
    async def author_totals(self, author_id: UserId) -> ContentTotals:
        """Count, score and accepted count over an author's live answers."""
        pass
