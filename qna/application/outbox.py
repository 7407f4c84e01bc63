"""Request-scoped buffer of notification events."""

import logfire

from qna.domain.model.notification import NotificationEvent
from qna.domain.service import NotificationSink


class NotificationOutbox:
    """Collects notification events raised while handling one request.

    Events are only handed to the sink by ``flush``, which runs after the
    request's transaction has committed. If the request fails, the events
    are discarded and nobody is notified about a change that never happened.
    """

    def __init__(self, sink: NotificationSink) -> None:
        self.sink = sink
        self._events: list[NotificationEvent] = []

    @property
    def pending(self) -> list[NotificationEvent]:
        """Events recorded and not yet flushed."""
        return list(self._events)

    def record(self, event: NotificationEvent | None) -> None:
        """Buffer an event. ``None`` is ignored."""
        if event is None:
            return
        self._events.append(event)

    def flush(self) -> int:
        """Hand all buffered events to the sink.

        Returns:
            Number of events handed over
        """
        events, self._events = self._events, []
        for event in events:
            self.sink.submit(event)
        if events:
            logfire.debug("Notification outbox flushed", count=len(events))
        return len(events)

    def discard(self) -> int:
        """Drop all buffered events.

        Returns:
            Number of events dropped
        """
        dropped = len(self._events)
        self._events = []
        if dropped:
            logfire.info("Notification outbox discarded", count=dropped)
        return dropped
