"""Question repository interface."""

from abc import abstractmethod
from enum import Enum
from typing import List, Optional

from qna.domain.model.question import Question
from qna.domain.model.activity import ContentTotals
from qna.domain.model.tag import TagStats, TagUsage
from qna.domain.repository.votable import VotableRepository
from qna.domain.value import AnswerId, QuestionId, TagName, UserId


class QuestionSortOrder(str, Enum):
    """Sort order for question listings."""

    NEWEST = "newest"  # created_at DESC
    MOST_VOTED = "most_voted"  # score DESC, created_at DESC
    MOST_VIEWED = "most_viewed"  # views DESC, created_at DESC
    UNANSWERED = "unanswered"  # answer_count = 0, created_at DESC


class QuestionRepository(VotableRepository[Question]):
    """Repository for Question aggregate.

    Defines the contract for question persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's unique identifier

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_for_update(
        self, question_id: QuestionId
    ) -> Optional[Question]:
        """Find a question by ID and lock it for the current transaction.

        Serializes acceptance changes on the same question.

        Args:
            question_id: The question's unique identifier

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        tag: Optional[TagName] = None,
        search: Optional[str] = None,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination.

        Args:
            sort: Sort order (UNANSWERED also filters)
            tag: Filter by tag name (None for all tags)
            search: Case-insensitive substring of title or description
            include_deleted: Whether to include soft-deleted questions
            limit: Maximum number of questions to return
            offset: Number of questions to skip

        Returns:
            List of questions matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        tag: Optional[TagName] = None,
        search: Optional[str] = None,
        unanswered_only: bool = False,
        include_deleted: bool = False,
    ) -> int:
        """Count questions matching the given filters.

        Args:
            tag: Filter by tag name (None for all tags)
            search: Case-insensitive substring of title or description
            unanswered_only: Only count questions without answers
            include_deleted: Whether to include soft-deleted questions

        Returns:
            Total number of questions matching the criteria
        """
        pass

    @abstractmethod
    async def save(self, question: Question) -> Question:
        """Save a question (create or update).

        Args:
            question: The question to save

        Returns:
            The saved question
        """
        pass

    @abstractmethod
    async def set_accepted_answer(
        self,
        question_id: QuestionId,
        expected: Optional[AnswerId],
        answer_id: Optional[AnswerId],
    ) -> bool:
        """Move the accepted-answer pointer if it still equals ``expected``.

        Args:
            question_id: The question ID
            expected: Pointer value the caller observed
            answer_id: New pointer value (None to clear)

        Returns:
            True if the pointer was written, False if it had changed
        """
        pass

    @abstractmethod
    async def increment_views(self, question_id: QuestionId) -> None:
        """Atomically increment the view counter by 1.

        Args:
            question_id: The question ID
        """
        pass

    @abstractmethod
    async def increment_answer_count(self, question_id: QuestionId) -> None:
        """Atomically increment the answer counter by 1.

        Args:
            question_id: The question ID
        """
        pass

    @abstractmethod
    async def decrement_answer_count(self, question_id: QuestionId) -> None:
        """Atomically decrement the answer counter by 1 (minimum 0).

        Args:
            question_id: The question ID
        """
        pass

    @abstractmethod
    async def tag_usage(
        self, limit: int = 100, search: Optional[str] = None
    ) -> List[TagUsage]:
        """Aggregate tag usage over live questions.

        Args:
            limit: Maximum number of tags to return
            search: Only tags containing this substring

        Returns:
            Tags ordered by question count (desc), then name
        """
        pass

    @abstractmethod
    async def tag_stats(self, tag: TagName) -> TagStats:
        """Totals over the live questions carrying a tag.

        Args:
            tag: The tag

        Returns:
            Question count, score and views (all 0 for an unused tag)
        """
        pass

    @abstractmethod
    async def find_by_ids(self, question_ids: List[QuestionId]) -> List[Question]:
        """Find several questions at once, deleted ones included.

        Args:
            question_ids: Question IDs; unknown ones are skipped

        Returns:
            The questions found, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_author(
        self, author_id: UserId, limit: int = 10, offset: int = 0
    ) -> List[Question]:
        """Find an author's live questions, newest first.

        Args:
            author_id: The author
            limit: Maximum number of questions to return
            offset: Number of questions to skip

        Returns:
            List of questions
        """
        pass

    @abstractmethod
    async def author_totals(self, author_id: UserId) -> ContentTotals:
        """Count, score and views over an author's live questions."""
        pass
