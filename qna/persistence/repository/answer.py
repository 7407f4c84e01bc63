"""PostgreSQL implementation of Answer repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from qna.domain.model import Answer, ContentTotals, VoteLedger
from qna.domain.repository.answer import AnswerRepository
from qna.domain.value import AnswerId, QuestionId, UserId
from qna.persistence.mappers import answer_to_dict, ledger_to_dict, row_to_answer
from qna.persistence.tables import answers_table

# Columns a plain save may overwrite
_CONTENT_COLUMNS = ("content", "updated_at", "deleted_at")


class PostgresAnswerRepository(AnswerRepository):
    """PostgreSQL implementation of AnswerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        with logfire.span("answer_repository.find_by_id", answer_id=str(answer_id)):
            stmt = select(answers_table).where(answers_table.c.id == answer_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Answer not found", answer_id=str(answer_id))
                return None

            return row_to_answer(row._asdict())

    async def find_by_question(
        self,
        question_id: QuestionId,
        include_deleted: bool = False,
    ) -> List[Answer]:
        """Find the answers of a question, accepted first."""
        with logfire.span(
            "answer_repository.find_by_question", question_id=str(question_id)
        ):
            stmt = select(answers_table).where(answers_table.c.question_id == question_id)
            if not include_deleted:
                stmt = stmt.where(answers_table.c.deleted_at.is_(None))
            stmt = stmt.order_by(
                desc(answers_table.c.is_accepted),
                desc(answers_table.c.score),
                answers_table.c.created_at,
            )

            result = await self.session.execute(stmt)
            answers = [row_to_answer(row._asdict()) for row in result.fetchall()]

            logfire.info("Found answers", count=len(answers))
            return answers

    async def save(self, answer: Answer) -> Answer:
        """Insert an answer, or update its content columns if it exists."""
        with logfire.span("answer_repository.save", answer_id=str(answer.id)):
            data = answer_to_dict(answer)
            stmt = (
                pg_insert(answers_table)
                .values(**data)
                .on_conflict_do_update(
                    index_elements=[answers_table.c.id],
                    set_={column: data[column] for column in _CONTENT_COLUMNS},
                )
                .returning(answers_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_answer(row._asdict())

    async def compare_and_set_ledger(
        self, item_id: AnswerId, expected_version: int, ledger: VoteLedger
    ) -> Optional[Answer]:
        """Write the ledger if the version still matches."""
        with logfire.span(
            "answer_repository.compare_and_set_ledger",
            answer_id=str(item_id),
            expected_version=expected_version,
        ):
            stmt = (
                update(answers_table)
                .where(
                    answers_table.c.id == item_id,
                    answers_table.c.version == expected_version,
                )
                .values(
                    **ledger_to_dict(ledger),
                    version=answers_table.c.version + 1,
                )
                .returning(answers_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_answer(row._asdict()) if row else None

    async def set_accepted(self, answer_id: AnswerId, accepted: bool) -> Optional[Answer]:
        """Write only the accepted flag."""
        with logfire.span(
            "answer_repository.set_accepted", answer_id=str(answer_id), accepted=accepted
        ):
            stmt = (
                update(answers_table)
                .where(answers_table.c.id == answer_id)
                .values(is_accepted=accepted, updated_at=func.now())
                .returning(answers_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_answer(row._asdict()) if row else None

    async def find_by_author(
        self, author_id: UserId, limit: int = 10, offset: int = 0
    ) -> List[Answer]:
        """Find an author's live answers, newest first."""
        with logfire.span(
            "answer_repository.find_by_author",
            author_id=str(author_id),
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(answers_table)
                .where(
                    answers_table.c.author_id == author_id,
                    answers_table.c.deleted_at.is_(None),
                )
                .order_by(desc(answers_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_answer(row._asdict()) for row in result.fetchall()]

    async def author_totals(self, author_id: UserId) -> ContentTotals:
        """Count, score and accepted count over an author's live answers."""
        with logfire.span("answer_repository.author_totals", author_id=str(author_id)):
            stmt = select(
                func.count().label("answer_count"),
                func.coalesce(func.sum(answers_table.c.score), 0).label("total_score"),
                func.count().filter(answers_table.c.is_accepted).label("accepted_count"),
            ).where(
                answers_table.c.author_id == author_id,
                answers_table.c.deleted_at.is_(None),
            )
            row = (await self.session.execute(stmt)).one()
            return ContentTotals(
                count=row.answer_count,
                total_score=row.total_score,
                accepted_count=row.accepted_count,
            )
