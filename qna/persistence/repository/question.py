"""PostgreSQL implementation of Question repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from qna.domain.model import ContentTotals, Question, TagStats, TagUsage, VoteLedger
from qna.domain.repository.question import QuestionRepository, QuestionSortOrder
from qna.domain.value import AnswerId, QuestionId, TagName, UserId
from qna.persistence.mappers import ledger_to_dict, question_to_dict, row_to_question
from qna.persistence.tables import questions_table

# Columns a plain save may overwrite. Ledger, counters and the accepted
# pointer each have their own targeted update.
_CONTENT_COLUMNS = ("title", "description", "tags", "is_closed", "updated_at", "deleted_at")


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text matches literally (escape char \\)."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresQuestionRepository(QuestionRepository):
    """PostgreSQL implementation of QuestionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _filtered(
        self,
        stmt,
        tag: Optional[TagName],
        search: Optional[str],
        unanswered_only: bool,
        include_deleted: bool,
    ):
        if tag:
            stmt = stmt.where(questions_table.c.tags.any(tag.root))
        if search:
            pattern = f"%{escape_like(search)}%"
            stmt = stmt.where(
                or_(
                    questions_table.c.title.ilike(pattern, escape="\\"),
                    questions_table.c.description.ilike(pattern, escape="\\"),
                )
            )
        if unanswered_only:
            stmt = stmt.where(questions_table.c.answer_count == 0)
        if not include_deleted:
            stmt = stmt.where(questions_table.c.deleted_at.is_(None))
        return stmt

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        with logfire.span("question_repository.find_by_id", question_id=str(question_id)):
            stmt = select(questions_table).where(questions_table.c.id == question_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Question not found", question_id=str(question_id))
                return None

            return row_to_question(row._asdict())

    async def find_by_id_for_update(
        self, question_id: QuestionId
    ) -> Optional[Question]:
        """Find a question by ID, holding a row lock until commit."""
        with logfire.span(
            "question_repository.find_by_id_for_update", question_id=str(question_id)
        ):
            stmt = (
                select(questions_table)
                .where(questions_table.c.id == question_id)
                .with_for_update()
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_question(row._asdict()) if row else None

    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        tag: Optional[TagName] = None,
        search: Optional[str] = None,
        include_deleted: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination."""
        with logfire.span(
            "question_repository.find_all",
            sort=sort.value,
            tag=tag.root if tag else None,
            include_deleted=include_deleted,
            limit=limit,
            offset=offset,
        ):
            stmt = self._filtered(
                select(questions_table),
                tag=tag,
                search=search,
                unanswered_only=sort == QuestionSortOrder.UNANSWERED,
                include_deleted=include_deleted,
            )

            if sort == QuestionSortOrder.MOST_VOTED:
                stmt = stmt.order_by(desc(questions_table.c.score))
            elif sort == QuestionSortOrder.MOST_VIEWED:
                stmt = stmt.order_by(desc(questions_table.c.views))
            stmt = stmt.order_by(desc(questions_table.c.created_at))

            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            questions = [row_to_question(row._asdict()) for row in result.fetchall()]

            logfire.info("Found questions", count=len(questions))
            return questions

    async def count(
        self,
        tag: Optional[TagName] = None,
        search: Optional[str] = None,
        unanswered_only: bool = False,
        include_deleted: bool = False,
    ) -> int:
        """Count questions matching the given filters."""
        with logfire.span("question_repository.count", tag=tag.root if tag else None):
            stmt = self._filtered(
                select(func.count()).select_from(questions_table),
                tag=tag,
                search=search,
                unanswered_only=unanswered_only,
                include_deleted=include_deleted,
            )
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def save(self, question: Question) -> Question:
        """Insert a question, or update its content columns if it exists."""
        with logfire.span("question_repository.save", question_id=str(question.id)):
            data = question_to_dict(question)
            stmt = (
                pg_insert(questions_table)
                .values(**data)
                .on_conflict_do_update(
                    index_elements=[questions_table.c.id],
                    set_={column: data[column] for column in _CONTENT_COLUMNS},
                )
                .returning(questions_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_question(row._asdict())

    async def compare_and_set_ledger(
        self, item_id: QuestionId, expected_version: int, ledger: VoteLedger
    ) -> Optional[Question]:
        """Write the ledger if the version still matches."""
        with logfire.span(
            "question_repository.compare_and_set_ledger",
            question_id=str(item_id),
            expected_version=expected_version,
        ):
            stmt = (
                update(questions_table)
                .where(
                    questions_table.c.id == item_id,
                    questions_table.c.version == expected_version,
                )
                .values(
                    **ledger_to_dict(ledger),
                    version=questions_table.c.version + 1,
                )
                .returning(questions_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_question(row._asdict()) if row else None

    async def set_accepted_answer(
        self,
        question_id: QuestionId,
        expected: Optional[AnswerId],
        answer_id: Optional[AnswerId],
    ) -> bool:
        """Move the accepted pointer if it still equals ``expected``."""
        with logfire.span(
            "question_repository.set_accepted_answer",
            question_id=str(question_id),
            answer_id=str(answer_id) if answer_id else None,
        ):
            stmt = (
                update(questions_table)
                .where(
                    questions_table.c.id == question_id,
                    questions_table.c.accepted_answer_id.is_not_distinct_from(expected),
                )
                .values(accepted_answer_id=answer_id, updated_at=func.now())
            )
            result = await self.session.execute(stmt)
            return result.rowcount == 1

    async def increment_views(self, question_id: QuestionId) -> None:
        """Atomically increment the view counter."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(views=questions_table.c.views + 1)
        )
        await self.session.execute(stmt)

    async def increment_answer_count(self, question_id: QuestionId) -> None:
        """Atomically increment the answer counter."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(answer_count=questions_table.c.answer_count + 1)
        )
        await self.session.execute(stmt)

    async def decrement_answer_count(self, question_id: QuestionId) -> None:
        """Atomically decrement the answer counter, never below zero."""
        stmt = (
            update(questions_table)
            .where(
                questions_table.c.id == question_id,
                questions_table.c.answer_count > 0,
            )
            .values(answer_count=questions_table.c.answer_count - 1)
        )
        await self.session.execute(stmt)

    async def tag_usage(
        self, limit: int = 100, search: Optional[str] = None
    ) -> List[TagUsage]:
        """Aggregate tag usage over live questions."""
        with logfire.span("question_repository.tag_usage", limit=limit, search=search):
            tag = func.unnest(questions_table.c.tags).label("name")
            inner = (
                select(tag)
                .where(questions_table.c.deleted_at.is_(None))
                .subquery()
            )
            count = func.count().label("question_count")
            stmt = select(inner.c.name, count)
            if search:
                stmt = stmt.where(
                    inner.c.name.ilike(f"%{escape_like(search)}%", escape="\\")
                )
            stmt = (
                stmt.group_by(inner.c.name)
                .order_by(desc(count), inner.c.name)
                .limit(limit)
            )
            result = await self.session.execute(stmt)
            return [
                TagUsage(name=TagName(row.name), question_count=row.question_count)
                for row in result.fetchall()
            ]

    async def tag_stats(self, tag: TagName) -> TagStats:
        """Totals over the live questions carrying a tag."""
        with logfire.span("question_repository.tag_stats", tag=tag.root):
            stmt = select(
                func.count().label("question_count"),
                func.coalesce(func.sum(questions_table.c.score), 0).label("total_score"),
                func.coalesce(func.sum(questions_table.c.views), 0).label("total_views"),
            ).where(
                questions_table.c.tags.any(tag.root),
                questions_table.c.deleted_at.is_(None),
            )
            row = (await self.session.execute(stmt)).one()
            return TagStats(
                name=tag,
                question_count=row.question_count,
                total_score=row.total_score,
                total_views=row.total_views,
            )

    async def find_by_ids(self, question_ids: List[QuestionId]) -> List[Question]:
        """Find several questions at once."""
        if not question_ids:
            return []
        stmt = select(questions_table).where(questions_table.c.id.in_(question_ids))
        result = await self.session.execute(stmt)
        return [row_to_question(row._asdict()) for row in result.fetchall()]

    async def find_by_author(
        self, author_id: UserId, limit: int = 10, offset: int = 0
    ) -> List[Question]:
        """Find an author's live questions, newest first."""
        with logfire.span(
            "question_repository.find_by_author",
            author_id=str(author_id),
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(questions_table)
                .where(
                    questions_table.c.author_id == author_id,
                    questions_table.c.deleted_at.is_(None),
                )
                .order_by(desc(questions_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_question(row._asdict()) for row in result.fetchall()]

    async def author_totals(self, author_id: UserId) -> ContentTotals:
        """Count, score and views over an author's live questions."""
        with logfire.span("question_repository.author_totals", author_id=str(author_id)):
            stmt = select(
                func.count().label("question_count"),
                func.coalesce(func.sum(questions_table.c.score), 0).label("total_score"),
                func.coalesce(func.sum(questions_table.c.views), 0).label("total_views"),
            ).where(
                questions_table.c.author_id == author_id,
                questions_table.c.deleted_at.is_(None),
            )
            row = (await self.session.execute(stmt)).one()
            return ContentTotals(
                count=row.question_count,
                total_score=row.total_score,
                total_views=row.total_views,
            )
