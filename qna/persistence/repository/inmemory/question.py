"""In-memory question repository for testing."""

from collections import Counter
from datetime import datetime
from typing import Optional

from qna.domain.model import ContentTotals, Question, TagStats, TagUsage, VoteLedger
from qna.domain.repository.question import QuestionRepository, QuestionSortOrder
from qna.domain.value import AnswerId, QuestionId, TagName, UserId


class InMemoryQuestionRepository(QuestionRepository):
    """In-memory implementation of QuestionRepository for testing.

    Mirrors the PostgreSQL column semantics: ``save`` never overwrites the
    ledger, counters or accepted pointer of an existing question.
    """

    def __init__(self) -> None:
        self._questions: dict[QuestionId, Question] = {}

    def _filtered(
        self,
        tag: Optional[TagName],
        search: Optional[str],
        unanswered_only: bool,
        include_deleted: bool,
    ) -> list[Question]:
        questions = list(self._questions.values())

        if tag is not None:
            questions = [q for q in questions if tag in q.tags]
        if search:
            needle = search.lower()
            questions = [
                q
                for q in questions
                if needle in q.title.lower() or needle in q.description.lower()
            ]
        if unanswered_only:
            questions = [q for q in questions if q.answer_count == 0]
        if not include_deleted:
            questions = [q for q in questions if q.deleted_at is None]

        return questions

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        return self._questions.get(question_id)

    async def find_by_id_for_update(
        self, question_id: QuestionId
    ) -> Optional[Question]:
        """Find a question by ID (no locking needed in a single event loop)."""
        return self._questions.get(question_id)

    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        tag: Optional[TagName] = None,
        search: Optional[str] = None,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Question]:
        """Find questions with filtering and pagination."""
        questions = self._filtered(
            tag, search, sort == QuestionSortOrder.UNANSWERED, include_deleted
        )

        # Stable sort keeps newest first among ties
        questions.sort(key=lambda q: q.created_at, reverse=True)
        if sort == QuestionSortOrder.MOST_VOTED:
            questions.sort(key=lambda q: q.score, reverse=True)
        elif sort == QuestionSortOrder.MOST_VIEWED:
            questions.sort(key=lambda q: q.views, reverse=True)

        return questions[offset : offset + limit]

    async def count(
        self,
        tag: Optional[TagName] = None,
        search: Optional[str] = None,
        unanswered_only: bool = False,
        include_deleted: bool = False,
    ) -> int:
        """Count questions matching the given filters."""
        return len(self._filtered(tag, search, unanswered_only, include_deleted))

    async def save(self, question: Question) -> Question:
        """Insert a question, or update its content fields if it exists."""
        existing = self._questions.get(question.id)
        if existing is not None:
            question = existing.model_copy(
                update={
                    "title": question.title,
                    "description": question.description,
                    "tags": question.tags,
                    "is_closed": question.is_closed,
                    "updated_at": question.updated_at,
                    "deleted_at": question.deleted_at,
                }
            )
        self._questions[question.id] = question
        return question

    async def compare_and_set_ledger(
        self, item_id: QuestionId, expected_version: int, ledger: VoteLedger
    ) -> Optional[Question]:
        """Write the ledger if the version still matches."""
        question = self._questions.get(item_id)
        if question is None or question.version != expected_version:
            return None

        updated = question.model_copy(
            update={"ledger": ledger, "version": question.version + 1}
        )
        self._questions[item_id] = updated
        return updated

    async def set_accepted_answer(
        self,
        question_id: QuestionId,
        expected: Optional[AnswerId],
        answer_id: Optional[AnswerId],
    ) -> bool:
        """Move the accepted pointer if it still equals ``expected``."""
        question = self._questions.get(question_id)
        if question is None or question.accepted_answer_id != expected:
            return False

        self._questions[question_id] = question.model_copy(
            update={"accepted_answer_id": answer_id, "updated_at": datetime.now()}
        )
        return True

    async def _bump(self, question_id: QuestionId, field: str, delta: int) -> None:
        question = self._questions.get(question_id)
        if question is None:
            return
        value = max(getattr(question, field) + delta, 0)
        self._questions[question_id] = question.model_copy(update={field: value})

    async def increment_views(self, question_id: QuestionId) -> None:
        """Increment the view counter."""
        await self._bump(question_id, "views", 1)

    async def increment_answer_count(self, question_id: QuestionId) -> None:
        """Increment the answer counter."""
        await self._bump(question_id, "answer_count", 1)

    async def decrement_answer_count(self, question_id: QuestionId) -> None:
        """Decrement the answer counter (minimum 0)."""
        await self._bump(question_id, "answer_count", -1)

    async def tag_usage(
        self, limit: int = 100, search: Optional[str] = None
    ) -> list[TagUsage]:
        """Aggregate tag usage over live questions."""
        needle = search.lower() if search else ""
        counts = Counter(
            tag.root
            for question in self._questions.values()
            if question.deleted_at is None
            for tag in question.tags
            if needle in tag.root
        )
        ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [
            TagUsage(name=TagName(name), question_count=count)
            for name, count in ordered[:limit]
        ]

    def _live(self) -> list[Question]:
        return [q for q in self._questions.values() if q.deleted_at is None]

    async def tag_stats(self, tag: TagName) -> TagStats:
        """Totals over the live questions carrying a tag."""
        tagged = [q for q in self._live() if tag in q.tags]
        return TagStats(
            name=tag,
            question_count=len(tagged),
            total_score=sum(q.score for q in tagged),
            total_views=sum(q.views for q in tagged),
        )

    async def find_by_ids(self, question_ids: list[QuestionId]) -> list[Question]:
        """Find several questions at once."""
        return [self._questions[i] for i in question_ids if i in self._questions]

    async def find_by_author(
        self, author_id: UserId, limit: int = 10, offset: int = 0
    ) -> list[Question]:
        """Find an author's live questions, newest first."""
        questions = [q for q in self._live() if q.author_id == author_id]
        questions.sort(key=lambda q: q.created_at, reverse=True)
        return questions[offset : offset + limit]

    async def author_totals(self, author_id: UserId) -> ContentTotals:
        """Count, score and views over an author's live questions."""
        questions = [q for q in self._live() if q.author_id == author_id]
        return ContentTotals(
            count=len(questions),
            total_score=sum(q.score for q in questions),
            total_views=sum(q.views for q in questions),
        )
