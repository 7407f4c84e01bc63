"""Answer domain service."""

from datetime import datetime
from typing import List
from uuid import uuid4

import logfire
from pydantic import ValidationError as ModelValidationError

from qna.domain.error import (
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)
from qna.domain.model.activity import ContentTotals
from qna.domain.model.answer import Answer
from qna.domain.model.question import Question
from qna.domain.repository import AnswerRepository, QuestionRepository
from qna.domain.value import AnswerId, Identity, QuestionId, UserId

from .base import Service


class AnswerService(Service):
    """Domain service for answer operations."""

    def __init__(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
    ) -> None:
        """Initialize answer service.

        Args:
            answer_repository: Answer repository
            question_repository: Question repository
        """
        self.answer_repository = answer_repository
        self.question_repository = question_repository

    async def create_answer(
        self, question: Question, author: Identity, content: str
    ) -> Answer:
        """Post an answer to a live question.

        Args:
            question: The question being answered
            author: Answering user
            content: Answer body

        Returns:
            Created answer

        Raises:
            InvalidOperationError: If the question is closed
        """
        with logfire.span(
            "answer_service.create_answer",
            question_id=str(question.id),
            author_id=str(author.user_id),
        ):
            if question.is_closed:
                logfire.warn("Answer on closed question", question_id=str(question.id))
                raise InvalidOperationError("Cannot answer a closed question")

            answer = Answer(
                id=AnswerId(uuid4()),
                question_id=question.id,
                content=content.strip(),
                author_id=author.user_id,
                author_username=author.username,
            )
            saved = await self.answer_repository.save(answer)
            await self.question_repository.increment_answer_count(question.id)

            logfire.info(
                "Answer created", answer_id=str(saved.id), question_id=str(question.id)
            )
            return saved

    async def get_answers(self, question_id: QuestionId) -> List[Answer]:
        """Live answers of a question, accepted first, then by score."""
        with logfire.span("answer_service.get_answers", question_id=str(question_id)):
            answers = await self.answer_repository.find_by_question(question_id)
            logfire.info("Answers retrieved", count=len(answers))
            return answers

    async def _get_own_answer(
        self, answer_id: AnswerId, requester_id: UserId, action: str
    ) -> Answer:
        answer = await self.answer_repository.find_by_id(answer_id)
        if answer is None or answer.is_deleted:
            logfire.warn("Answer not found", answer_id=str(answer_id))
            raise NotFoundError("Answer", str(answer_id))

        if answer.author_id != requester_id:
            logfire.warn(
                f"{action.capitalize()} by non-author rejected",
                answer_id=str(answer_id),
                requester_id=str(requester_id),
            )
            raise ForbiddenError(action, "answer", str(answer_id), str(requester_id))
        return answer

    async def update_answer(
        self, answer_id: AnswerId, requester_id: UserId, content: str
    ) -> Answer:
        """Replace the content of an answer.

        Votes and the accepted flag are untouched.

        Raises:
            NotFoundError: If missing or deleted
            ForbiddenError: If the requester is not the author
            ValidationError: If the new content is too short
        """
        with logfire.span(
            "answer_service.update_answer",
            answer_id=str(answer_id),
            requester_id=str(requester_id),
        ):
            answer = await self._get_own_answer(answer_id, requester_id, "edit")

            try:
                edited = Answer(
                    **{
                        **dict(answer),
                        "content": content.strip(),
                        "updated_at": datetime.now(),
                    }
                )
            except ModelValidationError as e:
                raise ValidationError(f"Invalid answer: {e}") from e

            saved = await self.answer_repository.save(edited)
            logfire.info("Answer updated", answer_id=str(answer_id))
            return saved

    async def delete_answer(self, answer_id: AnswerId, requester_id: UserId) -> Answer:
        """Soft delete an answer.

        The accepted answer cannot be deleted; unaccept it first.

        Raises:
            NotFoundError: If missing or already deleted
            ForbiddenError: If the requester is not the author
            InvalidOperationError: If the answer is accepted
        """
        with logfire.span(
            "answer_service.delete_answer",
            answer_id=str(answer_id),
            requester_id=str(requester_id),
        ):
            answer = await self._get_own_answer(answer_id, requester_id, "delete")

            # Serialize with acceptance changes on the same question
            question = await self.question_repository.find_by_id_for_update(
                answer.question_id
            )
            if answer.is_accepted or (
                question is not None and question.accepted_answer_id == answer.id
            ):
                raise InvalidOperationError("Cannot delete the accepted answer")

            now = datetime.now()
            deleted = await self.answer_repository.save(
                answer.model_copy(update={"deleted_at": now, "updated_at": now})
            )
            await self.question_repository.decrement_answer_count(answer.question_id)

            logfire.info("Answer deleted", answer_id=str(answer_id))
            return deleted

    async def list_by_author(
        self, author_id: UserId, limit: int = 10, offset: int = 0
    ) -> tuple[List[Answer], int]:
        """An author's live answers, newest first, with the total count."""
        with logfire.span(
            "answer_service.list_by_author", author_id=str(author_id), limit=limit
        ):
            answers = await self.answer_repository.find_by_author(
                author_id, limit=limit, offset=offset
            )
            totals = await self.answer_repository.author_totals(author_id)
            return answers, totals.count

    async def author_totals(self, author_id: UserId) -> ContentTotals:
        """Count, score and accepted count over an author's live answers."""
        return await self.answer_repository.author_totals(author_id)
