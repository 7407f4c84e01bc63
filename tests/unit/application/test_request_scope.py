"""Notification delivery follows the outcome of the request scope."""

import pytest
import pytest_asyncio

from qna.adapter.notification import QueueNotificationDispatcher
from qna.application.outbox import NotificationOutbox
from qna.application.usecase.answer import CreateAnswerRequest, CreateAnswerUseCase
from qna.domain.error import NotFoundError
from qna.domain.repository import NotificationRepository, QuestionRepository
from qna.domain.service import NotificationService
from tests.conftest import ANSWER_CONTENT, make_answer, make_identity, make_question
from tests.di import build_test_container


@pytest_asyncio.fixture
async def container():
    container = build_test_container()
    yield container
    await container.close()


class TestRequestScopeOutbox:
    """Tests for the request-scoped notification outbox."""

    @pytest.mark.asyncio
    async def test_clean_scope_flushes_to_dispatcher(self, container):
        """Events recorded in a successful request are delivered."""
        # Arrange
        question_repo = await container.get(QuestionRepository)
        question = await question_repo.save(make_question())
        helper = make_identity("helper")

        # Act
        async with container() as request:
            use_case = await request.get(CreateAnswerUseCase)
            await use_case.execute(
                CreateAnswerRequest(
                    question_id=str(question.id),
                    content=ANSWER_CONTENT,
                    user_id=str(helper.user_id),
                    username="helper",
                )
            )

        dispatcher = await container.get(QueueNotificationDispatcher)
        await dispatcher.drain()

        # Assert
        notification_repo = await container.get(NotificationRepository)
        assert await notification_repo.count_by_recipient(question.author_id) == 1

    @pytest.mark.asyncio
    async def test_failed_scope_discards_events(self, container):
        """Events recorded before a failure are never delivered."""
        # Arrange
        question = make_question()
        event = NotificationService.answer_posted(question, make_answer(question))

        # Act
        with pytest.raises(NotFoundError):
            async with container() as request:
                outbox = await request.get(NotificationOutbox)
                outbox.record(event)
                raise NotFoundError("Question", str(question.id))

        dispatcher = await container.get(QueueNotificationDispatcher)

        # Assert
        assert dispatcher.backlog == 0
        notification_repo = await container.get(NotificationRepository)
        assert await notification_repo.count_by_recipient(question.author_id) == 0
