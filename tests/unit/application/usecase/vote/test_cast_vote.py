"""Unit tests for CastVoteUseCase."""

import pytest

from qna.application.outbox import NotificationOutbox
from qna.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from qna.domain.error import InvalidOperationError, ValidationError
from qna.domain.model import VoteOutcome
from qna.domain.repository import AnswerRepository, QuestionRepository
from qna.domain.value import NotificationKind
from tests.conftest import make_answer, make_identity, make_question
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _request(item_type: str, item_id, direction: str, voter) -> CastVoteRequest:
    return CastVoteRequest(
        item_type=item_type,
        item_id=str(item_id),
        direction=direction,
        user_id=str(voter.user_id),
        username=voter.username.root,
    )


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_vote_returns_score_and_records_notification(self, unit_env):
        """A new vote reports the score and queues a vote notification."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        outbox = await unit_env.get(NotificationOutbox)
        question_repo = await unit_env.get(QuestionRepository)
        question = await question_repo.save(make_question())
        voter = make_identity("voter")

        # Act
        response = await use_case.execute(_request("question", question.id, "up", voter))

        # Assert
        assert response.score == 1
        assert response.outcome == VoteOutcome.ADDED
        assert response.user_vote == "up"
        (event,) = outbox.pending
        assert event.kind == NotificationKind.VOTE
        assert event.recipient_id == question.author_id

    @pytest.mark.asyncio
    async def test_withdrawn_vote_records_nothing(self, unit_env):
        """Toggling a vote off notifies nobody."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        outbox = await unit_env.get(NotificationOutbox)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        question = await question_repo.save(make_question())
        answer = await answer_repo.save(make_answer(question))
        voter = make_identity("voter")
        await use_case.execute(_request("answer", answer.id, "down", voter))
        outbox.discard()

        # Act
        response = await use_case.execute(_request("answer", answer.id, "down", voter))

        # Assert
        assert response.score == 0
        assert response.outcome == VoteOutcome.REMOVED
        assert response.user_vote is None
        assert outbox.pending == []

    @pytest.mark.asyncio
    async def test_self_vote_raises(self, unit_env):
        """Self-votes fail before anything is recorded."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        outbox = await unit_env.get(NotificationOutbox)
        question_repo = await unit_env.get(QuestionRepository)
        author = make_identity("author")
        question = await question_repo.save(make_question(author=author))

        # Act & Assert
        with pytest.raises(InvalidOperationError):
            await use_case.execute(_request("question", question.id, "up", author))
        assert outbox.pending == []

    @pytest.mark.asyncio
    async def test_bad_direction_raises_validation_error(self, unit_env):
        """Directions other than up/down are rejected."""
        use_case = await unit_env.get(CastVoteUseCase)
        question_repo = await unit_env.get(QuestionRepository)
        question = await question_repo.save(make_question())

        with pytest.raises(ValidationError):
            await use_case.execute(
                _request("question", question.id, "left", make_identity("voter"))
            )
