"""Persistence infrastructure providers."""

from collections.abc import AsyncGenerator, AsyncIterator
from typing import Optional

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from qna.application.outbox import NotificationOutbox
from qna.config import Settings
from qna.domain.repository import (
    AnswerRepository,
    NotificationRepository,
    QuestionRepository,
)
from qna.domain.service import NotificationDelivery
from qna.persistence.database import create_engine, create_session_factory
from qna.persistence.delivery import SessionNotificationDelivery
from qna.persistence.repository import (
    PostgresAnswerRepository,
    PostgresNotificationRepository,
    PostgresQuestionRepository,
)
from qna.util.di.base import ProviderBase
from qna.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_notification_delivery(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> NotificationDelivery:
        """Provide notification delivery with its own sessions."""
        return SessionNotificationDelivery(session_factory)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        outbox: NotificationOutbox,
    ) -> AsyncGenerator[AsyncSession, Optional[BaseException]]:
        """Provide database session for request scope.

        The container sends the exception that ended the scope, if any, into
        this generator: the session is rolled back on error and committed
        otherwise. Depending on the outbox makes the container close the
        session first, so buffered notifications are only flushed after the
        commit succeeded.
        """
        async with session_factory() as session:
            exc = yield session
            if exc is not None:
                logfire.warn("Session rollback", error=str(exc))
                await session.rollback()
                outbox.discard()
                return

            try:
                await session.commit()
            except Exception:
                outbox.discard()
                raise
            logfire.debug("Session committed")

    @provide(scope=Scope.REQUEST)
    def get_question_repository(self, session: AsyncSession) -> QuestionRepository:
        """Provide Question repository."""
        return PostgresQuestionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_answer_repository(self, session: AsyncSession) -> AnswerRepository:
        """Provide Answer repository."""
        return PostgresAnswerRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, session: AsyncSession
    ) -> NotificationRepository:
        """Provide Notification repository."""
        return PostgresNotificationRepository(session)
