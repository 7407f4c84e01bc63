"""Unit tests for AcceptanceService."""

from uuid import uuid4

import pytest

from qna.domain.error import ForbiddenError, InvalidOperationError, NotFoundError
from qna.domain.repository import AnswerRepository, QuestionRepository
from qna.domain.service import AcceptanceService
from qna.domain.value import AnswerId, UserId
from tests.conftest import make_answer, make_identity, make_question
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(unit_env, answers: int = 2):
    question_repo = await unit_env.get(QuestionRepository)
    answer_repo = await unit_env.get(AnswerRepository)
    asker = make_identity("asker")
    question = await question_repo.save(make_question(author=asker))
    saved = [
        await answer_repo.save(make_answer(question, make_identity(f"helper{i}")))
        for i in range(answers)
    ]
    return asker, question, saved


async def _accepted_ids(unit_env, question):
    answer_repo = await unit_env.get(AnswerRepository)
    return {
        a.id
        for a in await answer_repo.find_by_question(question.id, include_deleted=True)
        if a.is_accepted
    }


class TestAcceptAnswer:
    """Tests for accept_answer."""

    @pytest.mark.asyncio
    async def test_accept_sets_flag_and_pointer(self, unit_env):
        """Accepting marks the answer and points the question at it."""
        # Arrange
        service = await unit_env.get(AcceptanceService)
        question_repo = await unit_env.get(QuestionRepository)
        asker, question, (answer, _) = await _seed(unit_env)

        # Act
        result = await service.accept_answer(question.id, answer.id, asker.user_id)

        # Assert
        assert result.accepted is True
        assert result.changed is True
        assert result.previous_answer_id is None
        assert result.answer_author_id == answer.author_id
        assert (await question_repo.find_by_id(question.id)).accepted_answer_id == answer.id
        assert await _accepted_ids(unit_env, question) == {answer.id}

    @pytest.mark.asyncio
    async def test_switching_keeps_exactly_one_accepted(self, unit_env):
        """Accepting B after A leaves only B accepted."""
        # Arrange
        service = await unit_env.get(AcceptanceService)
        question_repo = await unit_env.get(QuestionRepository)
        asker, question, (first, second) = await _seed(unit_env)
        await service.accept_answer(question.id, first.id, asker.user_id)

        # Act
        result = await service.accept_answer(question.id, second.id, asker.user_id)

        # Assert
        assert result.previous_answer_id == first.id
        assert (await question_repo.find_by_id(question.id)).accepted_answer_id == second.id
        assert await _accepted_ids(unit_env, question) == {second.id}

    @pytest.mark.asyncio
    async def test_reaccepting_same_answer_changes_nothing(self, unit_env):
        """Accepting the accepted answer again is a no-op."""
        # Arrange
        service = await unit_env.get(AcceptanceService)
        asker, question, (answer, _) = await _seed(unit_env)
        await service.accept_answer(question.id, answer.id, asker.user_id)

        # Act
        result = await service.accept_answer(question.id, answer.id, asker.user_id)

        # Assert
        assert result.accepted is True
        assert result.changed is False
        assert await _accepted_ids(unit_env, question) == {answer.id}

    @pytest.mark.asyncio
    async def test_only_question_author_may_accept(self, unit_env):
        """Anyone else gets ForbiddenError and nothing changes."""
        # Arrange
        service = await unit_env.get(AcceptanceService)
        _, question, (answer, _) = await _seed(unit_env)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await service.accept_answer(question.id, answer.id, answer.author_id)

        assert await _accepted_ids(unit_env, question) == set()

    @pytest.mark.asyncio
    async def test_answer_of_another_question_is_not_found(self, unit_env):
        """An answer must belong to the question it is accepted on."""
        # Arrange
        service = await unit_env.get(AcceptanceService)
        asker, question, _ = await _seed(unit_env)
        _, _, (foreign, _) = await _seed(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.accept_answer(question.id, foreign.id, asker.user_id)

    @pytest.mark.asyncio
    async def test_missing_question_is_not_found(self, unit_env):
        """Unknown questions raise NotFoundError."""
        service = await unit_env.get(AcceptanceService)

        with pytest.raises(NotFoundError, match="Question"):
            await service.accept_answer(uuid4(), AnswerId(uuid4()), UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_deleted_answer_cannot_be_accepted(self, unit_env):
        """Soft-deleted answers are treated as missing."""
        # Arrange
        service = await unit_env.get(AcceptanceService)
        answer_repo = await unit_env.get(AnswerRepository)
        asker, question, (answer, _) = await _seed(unit_env)
        await answer_repo.save(answer.model_copy(update={"deleted_at": answer.created_at}))

        # Act & Assert
        with pytest.raises(NotFoundError, match="Answer"):
            await service.accept_answer(question.id, answer.id, asker.user_id)


class TestUnacceptAnswer:
    """Tests for unaccept_answer."""

    @pytest.mark.asyncio
    async def test_unaccept_clears_flag_and_pointer(self, unit_env):
        """Unaccepting leaves the question without an accepted answer."""
        # Arrange
        service = await unit_env.get(AcceptanceService)
        question_repo = await unit_env.get(QuestionRepository)
        asker, question, (answer, _) = await _seed(unit_env)
        await service.accept_answer(question.id, answer.id, asker.user_id)

        # Act
        result = await service.unaccept_answer(question.id, answer.id, asker.user_id)

        # Assert
        assert result.accepted is False
        assert (await question_repo.find_by_id(question.id)).accepted_answer_id is None
        assert await _accepted_ids(unit_env, question) == set()

    @pytest.mark.asyncio
    async def test_unaccepting_other_answer_is_invalid(self, unit_env):
        """Only the currently accepted answer can be unaccepted."""
        # Arrange
        service = await unit_env.get(AcceptanceService)
        asker, question, (accepted, other) = await _seed(unit_env)
        await service.accept_answer(question.id, accepted.id, asker.user_id)

        # Act & Assert
        with pytest.raises(InvalidOperationError, match="not currently accepted"):
            await service.unaccept_answer(question.id, other.id, asker.user_id)

        assert await _accepted_ids(unit_env, question) == {accepted.id}

    @pytest.mark.asyncio
    async def test_unaccept_by_non_author_is_forbidden(self, unit_env):
        """Only the question author may unaccept."""
        # Arrange
        service = await unit_env.get(AcceptanceService)
        asker, question, (answer, _) = await _seed(unit_env)
        await service.accept_answer(question.id, answer.id, asker.user_id)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await service.unaccept_answer(question.id, answer.id, answer.author_id)
