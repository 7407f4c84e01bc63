"""Unit tests for the user content use cases."""

from uuid import uuid4

import pytest

from qna.application.usecase.user import (
    GetUserStatsRequest,
    GetUserStatsUseCase,
    ListUserAnswersRequest,
    ListUserAnswersUseCase,
    ListUserQuestionsRequest,
    ListUserQuestionsUseCase,
)
from qna.domain.error import ValidationError
from qna.domain.model import VoteLedger
from qna.domain.repository import AnswerRepository, QuestionRepository
from qna.domain.value import UserId, VoteDirection
from tests.conftest import make_answer, make_identity, make_question
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListUserQuestionsUseCase:
    """Tests for ListUserQuestionsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_only_that_users_questions(self, unit_env):
        """Other authors' questions are left out; the viewer's vote shows."""
        # Arrange
        use_case = await unit_env.get(ListUserQuestionsUseCase)
        question_repo = await unit_env.get(QuestionRepository)
        author = make_identity("asker")
        viewer = make_identity("viewer")
        ledger = VoteLedger.from_entries({viewer.user_id: VoteDirection.UP})
        mine = await question_repo.save(make_question(author=author, ledger=ledger))
        await question_repo.save(make_question())

        # Act
        response = await use_case.execute(
            ListUserQuestionsRequest(
                user_id=str(author.user_id), viewer_id=str(viewer.user_id)
            )
        )

        # Assert
        assert response.total == 1
        assert [q.question_id for q in response.questions] == [str(mine.id)]
        assert response.questions[0].user_vote == "up"

    @pytest.mark.asyncio
    async def test_malformed_user_id_is_rejected(self, unit_env):
        use_case = await unit_env.get(ListUserQuestionsUseCase)

        with pytest.raises(ValidationError, match="Invalid identifier"):
            await use_case.execute(ListUserQuestionsRequest(user_id="nobody"))


class TestListUserAnswersUseCase:
    """Tests for ListUserAnswersUseCase."""

    @pytest.mark.asyncio
    async def test_answers_carry_question_titles(self, unit_env):
        """Each answer names the question it answers."""
        # Arrange
        use_case = await unit_env.get(ListUserAnswersUseCase)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        author = make_identity("helper")
        question = await question_repo.save(
            make_question(title="How do I cancel an asyncio task?")
        )
        answer = await answer_repo.save(make_answer(question, author=author))
        await answer_repo.save(make_answer(question))

        # Act
        response = await use_case.execute(
            ListUserAnswersRequest(user_id=str(author.user_id))
        )

        # Assert
        assert response.total == 1
        item = response.answers[0]
        assert item.answer_id == str(answer.id)
        assert item.question_title == "How do I cancel an asyncio task?"
        assert item.user_vote is None


class TestGetUserStatsUseCase:
    """Tests for GetUserStatsUseCase."""

    @pytest.mark.asyncio
    async def test_stats_sum_questions_and_answers(self, unit_env):
        """Totals count live content only."""
        # Arrange
        use_case = await unit_env.get(GetUserStatsUseCase)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        user = make_identity("regular")
        up = VoteLedger.from_entries({UserId(uuid4()): VoteDirection.UP})
        await question_repo.save(make_question(author=user, ledger=up, views=9))
        other = await question_repo.save(make_question())
        await answer_repo.save(
            make_answer(other, author=user, ledger=up, is_accepted=True)
        )
        await answer_repo.save(make_answer(other, author=user))

        # Act
        response = await use_case.execute(
            GetUserStatsRequest(user_id=str(user.user_id))
        )

        # Assert
        assert response.user_id == str(user.user_id)
        assert response.question_count == 1
        assert response.question_score == 1
        assert response.question_views == 9
        assert response.answer_count == 2
        assert response.answer_score == 1
        assert response.accepted_answer_count == 1

    @pytest.mark.asyncio
    async def test_user_without_content_has_zeros(self, unit_env):
        """Unknown users are not an error."""
        use_case = await unit_env.get(GetUserStatsUseCase)

        response = await use_case.execute(GetUserStatsRequest(user_id=str(uuid4())))

        assert response.question_count == 0
        assert response.answer_count == 0
        assert response.question_views == 0
