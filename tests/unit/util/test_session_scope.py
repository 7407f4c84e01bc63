"""The production request scope commits or rolls back its session."""

import pytest
import pytest_asyncio
from dishka import Provider, Scope, make_async_container, provide
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from qna.adapter.notification import QueueNotificationDispatcher
from qna.application.outbox import NotificationOutbox
from qna.domain.error import ConflictError
from qna.domain.service import NotificationService
from qna.util.di import (
    ProdConfigProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
)
from tests.conftest import make_answer, make_question


class RecordingSession:
    """Stands in for AsyncSession and records how it was finished."""

    def __init__(self, calls: list[str]) -> None:
        self.calls = calls

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.calls.append("close")

    async def commit(self) -> None:
        self.calls.append("commit")

    async def rollback(self) -> None:
        self.calls.append("rollback")


class RecordingSessionProvider(Provider):
    """Replaces the database session factory."""

    def __init__(self, calls: list[str]) -> None:
        super().__init__()
        self.calls = calls

    @provide(scope=Scope.APP)
    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: RecordingSession(self.calls)


@pytest.fixture
def calls() -> list[str]:
    return []


@pytest_asyncio.fixture
async def container(calls):
    container = make_async_container(
        ProdConfigProvider(),
        ProdNotificationProvider(),
        ProdPersistenceProvider(),
        RecordingSessionProvider(calls),
    )
    yield container
    await container.close()


def _event():
    question = make_question()
    return NotificationService.answer_posted(question, make_answer(question))


class TestSessionScope:
    """Tests for ProdPersistenceProvider.get_session."""

    @pytest.mark.asyncio
    async def test_clean_scope_commits_and_flushes(self, container, calls):
        """A request without errors commits, then hands over its events."""
        async with container() as request:
            await request.get(AsyncSession)
            outbox = await request.get(NotificationOutbox)
            outbox.record(_event())

        dispatcher = await container.get(QueueNotificationDispatcher)

        assert calls == ["commit", "close"]
        assert dispatcher.backlog == 1

    @pytest.mark.asyncio
    async def test_failed_scope_rolls_back_and_discards(self, container, calls):
        """A request that raises rolls back and drops its events."""
        with pytest.raises(ConflictError):
            async with container() as request:
                await request.get(AsyncSession)
                outbox = await request.get(NotificationOutbox)
                outbox.record(_event())
                raise ConflictError("answer", "42", 5)

        dispatcher = await container.get(QueueNotificationDispatcher)

        assert calls == ["rollback", "close"]
        assert dispatcher.backlog == 0
