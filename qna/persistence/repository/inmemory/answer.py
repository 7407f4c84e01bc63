"""In-memory answer repository for testing."""

from datetime import datetime
from typing import Optional

from qna.domain.model import Answer, ContentTotals, VoteLedger
from qna.domain.repository.answer import AnswerRepository
from qna.domain.value import AnswerId, QuestionId, UserId


class InMemoryAnswerRepository(AnswerRepository):
    """In-memory implementation of AnswerRepository for testing."""

    def __init__(self) -> None:
        self._answers: dict[AnswerId, Answer] = {}

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        return self._answers.get(answer_id)

    async def find_by_question(
        self,
        question_id: QuestionId,
        include_deleted: bool = False,
    ) -> list[Answer]:
        """Find the answers of a question, accepted first."""
        answers = [a for a in self._answers.values() if a.question_id == question_id]

        if not include_deleted:
            answers = [a for a in answers if a.deleted_at is None]

        answers.sort(key=lambda a: (not a.is_accepted, -a.score, a.created_at))
        return answers

    async def save(self, answer: Answer) -> Answer:
        """Insert an answer, or update its content fields if it exists."""
        existing = self._answers.get(answer.id)
        if existing is not None:
            answer = existing.model_copy(
                update={
                    "content": answer.content,
                    "updated_at": answer.updated_at,
                    "deleted_at": answer.deleted_at,
                }
            )
        self._answers[answer.id] = answer
        return answer

    async def compare_and_set_ledger(
        self, item_id: AnswerId, expected_version: int, ledger: VoteLedger
    ) -> Optional[Answer]:
        """Write the ledger if the version still matches."""
        answer = self._answers.get(item_id)
        if answer is None or answer.version != expected_version:
            return None

        updated = answer.model_copy(update={"ledger": ledger, "version": answer.version + 1})
        self._answers[item_id] = updated
        return updated

    async def set_accepted(self, answer_id: AnswerId, accepted: bool) -> Optional[Answer]:
        """Write only the accepted flag."""
        answer = self._answers.get(answer_id)
        if answer is None:
            return None

        updated = answer.model_copy(
            update={"is_accepted": accepted, "updated_at": datetime.now()}
        )
        self._answers[answer_id] = updated
        return updated

    def _live_by(self, author_id: UserId) -> list[Answer]:
        return [
            a
            for a in self._answers.values()
            if a.author_id == author_id and a.deleted_at is None
        ]

    async def find_by_author(
        self, author_id: UserId, limit: int = 10, offset: int = 0
    ) -> list[Answer]:
        """Find an author's live answers, newest first."""
        answers = self._live_by(author_id)
        answers.sort(key=lambda a: a.created_at, reverse=True)
        return answers[offset : offset + limit]

    async def author_totals(self, author_id: UserId) -> ContentTotals:
        """Count, score and accepted count over an author's live answers."""
        answers = self._live_by(author_id)
        return ContentTotals(
            count=len(answers),
            total_score=sum(a.score for a in answers),
            accepted_count=sum(1 for a in answers if a.is_accepted),
        )
