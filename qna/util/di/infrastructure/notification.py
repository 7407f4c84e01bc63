"""Notification infrastructure providers."""

from collections.abc import AsyncIterator, Generator
from typing import Optional

from dishka import Scope, provide

from qna.adapter.notification import QueueNotificationDispatcher
from qna.application.outbox import NotificationOutbox
from qna.config import Settings
from qna.domain.service import NotificationDelivery, NotificationSink
from qna.util.di.base import ProviderBase


class ProdNotificationProvider(ProviderBase):
    """Notification dispatcher and per-request outbox.

    Concrete: where notifications end up is decided by the persistence
    component's ``NotificationDelivery``.
    """

    @provide(scope=Scope.APP)
    async def get_dispatcher(
        self, delivery: NotificationDelivery, settings: Settings
    ) -> AsyncIterator[QueueNotificationDispatcher]:
        """Provide the dispatcher; stopped when the container closes.

        The worker itself is started by the application lifespan.
        """
        dispatcher = QueueNotificationDispatcher(
            delivery, queue_size=settings.notifications.queue_size
        )
        yield dispatcher
        await dispatcher.stop()

    @provide(scope=Scope.APP)
    def get_sink(self, dispatcher: QueueNotificationDispatcher) -> NotificationSink:
        """Provide the sink outboxes flush into."""
        return dispatcher

    @provide(scope=Scope.REQUEST)
    def get_outbox(
        self, sink: NotificationSink
    ) -> Generator[NotificationOutbox, Optional[BaseException], None]:
        """Provide the request outbox.

        Flushed when the request scope closes cleanly, discarded otherwise.
        """
        outbox = NotificationOutbox(sink)
        exc = yield outbox
        if exc is not None:
            outbox.discard()
            return
        outbox.flush()
