"""Unit tests for NotificationOutbox."""

from uuid import uuid4

import pytest

from qna.application.outbox import NotificationOutbox
from qna.domain.model import NotificationEvent
from qna.domain.service import NotificationDelivery, NotificationSink
from qna.domain.value import NotificationKind, UserId


class RecordingSink(NotificationSink):
    """Sink that keeps what it was given."""

    def __init__(self) -> None:
        self.events: list[NotificationEvent] = []

    def submit(self, event: NotificationEvent) -> None:
        self.events.append(event)


def _event() -> NotificationEvent:
    return NotificationEvent(
        kind=NotificationKind.ANSWER,
        recipient_id=UserId(uuid4()),
        sender_id=UserId(uuid4()),
        title="New Answer",
        message="helper answered your question",
        link="/questions/1",
    )


class TestNotificationOutbox:
    """Tests for NotificationOutbox."""

    def test_nothing_reaches_sink_before_flush(self):
        """Recording only buffers."""
        sink = RecordingSink()
        outbox = NotificationOutbox(sink)

        outbox.record(_event())
        outbox.record(None)

        assert len(outbox.pending) == 1
        assert sink.events == []

    def test_flush_hands_over_in_order(self):
        """Flush submits every event once, in order."""
        # Arrange
        sink = RecordingSink()
        outbox = NotificationOutbox(sink)
        first, second = _event(), _event()
        outbox.record(first)
        outbox.record(second)

        # Act
        flushed = outbox.flush()

        # Assert
        assert flushed == 2
        assert sink.events == [first, second]
        assert outbox.pending == []
        assert outbox.flush() == 0

    def test_discard_drops_events(self):
        """Discarded events never reach the sink."""
        sink = RecordingSink()
        outbox = NotificationOutbox(sink)
        outbox.record(_event())

        assert outbox.discard() == 1
        assert outbox.flush() == 0
        assert sink.events == []


class TestNotificationPorts:
    """Sinks and deliveries must implement their single method."""

    def test_sink_without_submit_cannot_be_built(self):
        class SilentSink(NotificationSink):
            pass

        with pytest.raises(TypeError):
            SilentSink()

    def test_delivery_without_deliver_cannot_be_built(self):
        class LostDelivery(NotificationDelivery):
            pass

        with pytest.raises(TypeError):
            LostDelivery()
