"""Answer acceptance domain service."""

from typing import Optional

import logfire

from qna.domain.error import (
    ConflictError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
)
from qna.domain.model.answer import Answer
from qna.domain.model.question import Question
from qna.domain.repository import AnswerRepository, QuestionRepository
from qna.domain.value import AnswerId, QuestionId, UserId
from qna.domain.value.common import ValueObject

from .base import Service


class AcceptanceResult(ValueObject):
    """Outcome of an accept or unaccept request."""

    question_id: QuestionId
    answer_id: AnswerId
    answer_author_id: UserId
    accepted: bool
    changed: bool  # False when the request left state as it was
    previous_answer_id: Optional[AnswerId] = None


class AcceptanceService(Service):
    """Domain service that moves a question's accepted answer.

    The question row is locked for the duration of the transaction, so two
    acceptance requests on the same question run one after the other.
    Writes happen in a fixed order: clear the previous answer's flag, set
    the new answer's flag, then move the question's pointer.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
    ) -> None:
        """Initialize acceptance service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository

    async def accept_answer(
        self, question_id: QuestionId, answer_id: AnswerId, requester_id: UserId
    ) -> AcceptanceResult:
        """Mark an answer as the question's accepted answer.

        Accepting the answer that is already accepted changes nothing.

        Args:
            question_id: Question ID
            answer_id: Answer to accept
            requester_id: User making the request

        Returns:
            Acceptance result

        Raises:
            NotFoundError: If the question or answer is missing or deleted,
                or the answer belongs to another question
            ForbiddenError: If the requester did not ask the question
            ConflictError: If the pointer moved underneath the lock
        """
        with logfire.span(
            "acceptance_service.accept_answer",
            question_id=str(question_id),
            answer_id=str(answer_id),
            requester_id=str(requester_id),
        ):
            question = await self._load_question(question_id, requester_id, "accept")
            answer = await self._load_answer(question, answer_id)

            previous = question.accepted_answer_id
            if previous == answer.id:
                logfire.info("Answer already accepted", answer_id=str(answer_id))
                return AcceptanceResult(
                    question_id=question_id,
                    answer_id=answer.id,
                    answer_author_id=answer.author_id,
                    accepted=True,
                    changed=False,
                    previous_answer_id=previous,
                )

            if previous is not None:
                await self.answer_repository.set_accepted(previous, False)
            await self.answer_repository.set_accepted(answer.id, True)

            moved = await self.question_repository.set_accepted_answer(
                question_id, previous, answer.id
            )
            if not moved:
                logfire.error(
                    "Accepted answer pointer changed concurrently",
                    question_id=str(question_id),
                )
                raise ConflictError("Question", str(question_id))

            logfire.info(
                "Answer accepted",
                question_id=str(question_id),
                answer_id=str(answer_id),
                previous_answer_id=str(previous) if previous else None,
            )
            return AcceptanceResult(
                question_id=question_id,
                answer_id=answer.id,
                answer_author_id=answer.author_id,
                accepted=True,
                changed=True,
                previous_answer_id=previous,
            )

    async def unaccept_answer(
        self, question_id: QuestionId, answer_id: AnswerId, requester_id: UserId
    ) -> AcceptanceResult:
        """Clear the question's accepted answer.

        Args:
            question_id: Question ID
            answer_id: The currently accepted answer
            requester_id: User making the request

        Returns:
            Acceptance result

        Raises:
            NotFoundError: If the question or answer is missing
            ForbiddenError: If the requester did not ask the question
            InvalidOperationError: If the answer is not the accepted one
            ConflictError: If the pointer moved underneath the lock
        """
        with logfire.span(
            "acceptance_service.unaccept_answer",
            question_id=str(question_id),
            answer_id=str(answer_id),
            requester_id=str(requester_id),
        ):
            question = await self._load_question(question_id, requester_id, "unaccept")
            answer = await self._load_answer(question, answer_id)

            if question.accepted_answer_id != answer.id:
                logfire.warn(
                    "Unaccept of an answer that is not accepted",
                    question_id=str(question_id),
                    answer_id=str(answer_id),
                )
                raise InvalidOperationError("This answer is not currently accepted")

            await self.answer_repository.set_accepted(answer.id, False)
            moved = await self.question_repository.set_accepted_answer(
                question_id, answer.id, None
            )
            if not moved:
                logfire.error(
                    "Accepted answer pointer changed concurrently",
                    question_id=str(question_id),
                )
                raise ConflictError("Question", str(question_id))

            logfire.info(
                "Answer unaccepted",
                question_id=str(question_id),
                answer_id=str(answer_id),
            )
            return AcceptanceResult(
                question_id=question_id,
                answer_id=answer.id,
                answer_author_id=answer.author_id,
                accepted=False,
                changed=True,
                previous_answer_id=answer.id,
            )

    async def _load_question(
        self, question_id: QuestionId, requester_id: UserId, action: str
    ) -> Question:
        question = await self.question_repository.find_by_id_for_update(question_id)
        if question is None or question.is_deleted:
            logfire.warn("Question not found", question_id=str(question_id))
            raise NotFoundError("Question", str(question_id))

        if question.author_id != requester_id:
            logfire.warn(
                "Only the question author can change acceptance",
                question_id=str(question_id),
                requester_id=str(requester_id),
            )
            raise ForbiddenError(
                f"{action} an answer on", "question", str(question_id), str(requester_id)
            )
        return question

    async def _load_answer(self, question: Question, answer_id: AnswerId) -> Answer:
        answer = await self.answer_repository.find_by_id(answer_id)
        if answer is None or answer.is_deleted or answer.question_id != question.id:
            logfire.warn(
                "Answer not found on question",
                question_id=str(question.id),
                answer_id=str(answer_id),
            )
            raise NotFoundError("Answer", str(answer_id))
        return answer
