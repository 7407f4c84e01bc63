"""Question domain service."""

from datetime import datetime
from typing import List, Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as ModelValidationError

from qna.domain.error import ForbiddenError, NotFoundError, ValidationError
from qna.domain.model.activity import ContentTotals
from qna.domain.model.question import Question
from qna.domain.model.tag import TagStats, TagUsage
from qna.domain.repository import QuestionRepository, QuestionSortOrder
from qna.domain.value import Identity, QuestionId, TagName, UserId

from .base import Service


def _unique(tags: list[TagName]) -> list[TagName]:
    # Duplicate tags collapse, order kept
    return list(dict.fromkeys(tags))


class QuestionService(Service):
    """Domain service for question operations."""

    def __init__(self, question_repository: QuestionRepository) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
        """
        self.question_repository = question_repository

    async def create_question(
        self,
        author: Identity,
        title: str,
        description: str,
        tags: list[TagName],
    ) -> Question:
        """Create a new question with an empty vote ledger.

        Args:
            author: Asking user
            title: Question title
            description: Question body
            tags: One to five tags

        Returns:
            Created question
        """
        with logfire.span(
            "question_service.create_question",
            author_id=str(author.user_id),
            tags=[t.root for t in tags],
        ):
            question = Question(
                id=QuestionId(uuid4()),
                title=title.strip(),
                description=description.strip(),
                tags=_unique(tags),
                author_id=author.user_id,
                author_username=author.username,
            )
            saved = await self.question_repository.save(question)
            logfire.info("Question created", question_id=str(saved.id))
            return saved

    async def get_question(self, question_id: QuestionId) -> Question:
        """Get a live question.

        Raises:
            NotFoundError: If missing or soft-deleted
        """
        with logfire.span("question_service.get_question", question_id=str(question_id)):
            question = await self.question_repository.find_by_id(question_id)
            if question is None or question.is_deleted:
                logfire.warn("Question not found", question_id=str(question_id))
                raise NotFoundError("Question", str(question_id))
            return question

    async def record_view(self, question_id: QuestionId) -> None:
        """Count one view of a question."""
        await self.question_repository.increment_views(question_id)

    async def list_questions(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        tag: Optional[TagName] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[List[Question], int]:
        """List live questions.

        Args:
            sort: Sort order
            tag: Only questions with this tag
            search: Substring to look for in title or description
            limit: Page size
            offset: Number of questions to skip

        Returns:
            Tuple of the page of questions and the total matching count
        """
        with logfire.span(
            "question_service.list_questions",
            sort=sort.value,
            tag=tag.root if tag else None,
            limit=limit,
            offset=offset,
        ):
            search = search.strip() if search else None
            questions = await self.question_repository.find_all(
                sort=sort, tag=tag, search=search or None, limit=limit, offset=offset
            )
            total = await self.question_repository.count(
                tag=tag,
                search=search or None,
                unanswered_only=sort == QuestionSortOrder.UNANSWERED,
            )
            logfire.info("Questions listed", count=len(questions), total=total)
            return questions, total

    async def update_question(
        self,
        question_id: QuestionId,
        requester_id: UserId,
        title: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[list[TagName]] = None,
    ) -> Question:
        """Edit the title, description or tags of a question.

        Fields left as None keep their value. Votes, counters and the
        accepted answer are untouched.

        Raises:
            NotFoundError: If missing or deleted
            ForbiddenError: If the requester is not the author
            ValidationError: If an edited field breaks the content rules
        """
        with logfire.span(
            "question_service.update_question",
            question_id=str(question_id),
            requester_id=str(requester_id),
        ):
            question = await self.get_question(question_id)
            if question.author_id != requester_id:
                logfire.warn(
                    "Edit by non-author rejected",
                    question_id=str(question_id),
                    requester_id=str(requester_id),
                )
                raise ForbiddenError(
                    "edit", "question", str(question_id), str(requester_id)
                )

            changes: dict = {"updated_at": datetime.now()}
            if title is not None:
                changes["title"] = title.strip()
            if description is not None:
                changes["description"] = description.strip()
            if tags is not None:
                changes["tags"] = _unique(tags)

            try:
                edited = Question(**{**dict(question), **changes})
            except ModelValidationError as e:
                raise ValidationError(f"Invalid question: {e}") from e

            saved = await self.question_repository.save(edited)
            logfire.info("Question updated", question_id=str(question_id))
            return saved

    async def delete_question(
        self, question_id: QuestionId, requester_id: UserId
    ) -> Question:
        """Soft delete a question.

        Raises:
            NotFoundError: If missing or already deleted
            ForbiddenError: If the requester is not the author
        """
        with logfire.span(
            "question_service.delete_question",
            question_id=str(question_id),
            requester_id=str(requester_id),
        ):
            question = await self.get_question(question_id)
            if question.author_id != requester_id:
                logfire.warn(
                    "Delete by non-author rejected",
                    question_id=str(question_id),
                    requester_id=str(requester_id),
                )
                raise ForbiddenError(
                    "delete", "question", str(question_id), str(requester_id)
                )

            now = datetime.now()
            deleted = await self.question_repository.save(
                question.model_copy(update={"deleted_at": now, "updated_at": now})
            )
            logfire.info("Question deleted", question_id=str(question_id))
            return deleted

    async def get_tag_usage(self, limit: int = 100) -> List[TagUsage]:
        """Get tags in use, most used first."""
        with logfire.span("question_service.get_tag_usage", limit=limit):
            tags = await self.question_repository.tag_usage(limit=limit)
            logfire.info("Tags retrieved", count=len(tags))
            return tags

    async def search_tags(self, query: str, limit: int = 10) -> List[TagUsage]:
        """Tags in use whose name contains ``query``, most used first.

        Raises:
            ValidationError: If the query is blank
        """
        query = query.strip().lower()
        if not query:
            raise ValidationError("Tag search query must not be empty")

        with logfire.span("question_service.search_tags", query=query, limit=limit):
            tags = await self.question_repository.tag_usage(limit=limit, search=query)
            logfire.info("Tags found", count=len(tags))
            return tags

    async def get_tag_stats(self, tag: TagName) -> TagStats:
        """Totals for one tag; an unused tag has all zeros."""
        return await self.question_repository.tag_stats(tag)

    async def list_by_author(
        self, author_id: UserId, limit: int = 10, offset: int = 0
    ) -> tuple[List[Question], int]:
        """An author's live questions, newest first, with the total count."""
        with logfire.span(
            "question_service.list_by_author", author_id=str(author_id), limit=limit
        ):
            questions = await self.question_repository.find_by_author(
                author_id, limit=limit, offset=offset
            )
            totals = await self.question_repository.author_totals(author_id)
            return questions, totals.count

    async def author_totals(self, author_id: UserId) -> ContentTotals:
        """Count, score and views over an author's live questions."""
        return await self.question_repository.author_totals(author_id)

    async def get_titles(self, question_ids: List[QuestionId]) -> dict[QuestionId, str]:
        """Titles of the given questions, deleted ones included."""
        questions = await self.question_repository.find_by_ids(list(set(question_ids)))
        return {question.id: question.title for question in questions}
