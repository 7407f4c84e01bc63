"""Unit tests for NotificationService."""

from uuid import uuid4

import pytest

from qna.domain.error import NotFoundError
from qna.domain.model import VoteOutcome
from qna.domain.repository import NotificationRepository
from qna.domain.service import NotificationService, VoteResult
from qna.domain.value import (
    NotificationId,
    NotificationKind,
    QuestionId,
    UserId,
    VotableType,
    VoteDirection,
)
from tests.conftest import make_answer, make_identity, make_question
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _vote(outcome: VoteOutcome, direction, item_type=VotableType.QUESTION) -> VoteResult:
    question_id = QuestionId(uuid4())
    return VoteResult(
        item_type=item_type,
        item_id=question_id if item_type == VotableType.QUESTION else uuid4(),
        author_id=UserId(uuid4()),
        question_id=question_id,
        score=1,
        outcome=outcome,
        direction=direction,
    )


class TestEventBuilders:
    """Tests for the static event builders."""

    def test_answer_posted_notifies_question_author(self):
        """The question author hears about new answers."""
        question = make_question()
        answer = make_answer(question, make_identity("helper"))

        event = NotificationService.answer_posted(question, answer)

        assert event.kind == NotificationKind.ANSWER
        assert event.recipient_id == question.author_id
        assert event.sender_id == answer.author_id
        assert event.message == "helper answered your question"
        assert event.link == f"/questions/{question.id}#answer-{answer.id}"

    def test_answering_own_question_is_silent(self):
        """Nobody is notified about their own answer."""
        asker = make_identity("asker")
        question = make_question(author=asker)

        assert NotificationService.answer_posted(question, make_answer(question, asker)) is None

    def test_answer_accepted_notifies_answer_author(self):
        """The answer author hears that their answer was accepted."""
        question = make_question()
        answer = make_answer(question)
        accepter = make_identity("asker")

        event = NotificationService.answer_accepted(
            question.id, answer.id, answer.author_id, accepter
        )

        assert event.kind == NotificationKind.ACCEPT
        assert event.recipient_id == answer.author_id
        assert event.message == "asker accepted your answer"

    @pytest.mark.parametrize(
        "outcome, direction, verb",
        [
            (VoteOutcome.ADDED, VoteDirection.UP, "upvoted"),
            (VoteOutcome.CHANGED, VoteDirection.DOWN, "downvoted"),
        ],
    )
    def test_vote_received(self, outcome, direction, verb):
        """Added and changed votes notify the item author."""
        vote = _vote(outcome, direction)

        event = NotificationService.vote_received(vote, make_identity("voter"))

        assert event.kind == NotificationKind.VOTE
        assert event.recipient_id == vote.author_id
        assert event.message == f"voter {verb} your question"
        assert event.link == f"/questions/{vote.question_id}"

    def test_vote_on_answer_links_to_answer(self):
        """Answer votes link to the answer anchor."""
        vote = _vote(VoteOutcome.ADDED, VoteDirection.UP, VotableType.ANSWER)

        event = NotificationService.vote_received(vote, make_identity("voter"))

        assert event.answer_id == vote.item_id
        assert event.link.endswith(f"#answer-{vote.item_id}")

    def test_withdrawn_vote_is_silent(self):
        """Removing a vote notifies nobody."""
        vote = _vote(VoteOutcome.REMOVED, None)

        assert NotificationService.vote_received(vote, make_identity("voter")) is None


class TestReadingNotifications:
    """Tests for listing and updating stored notifications."""

    async def _deliver(self, unit_env, recipient: UserId, count: int):
        repo = await unit_env.get(NotificationRepository)
        question = make_question(author=make_identity("asker"))
        stored = []
        for i in range(count):
            answer = make_answer(question, make_identity(f"helper{i}"))
            event = NotificationService.answer_posted(
                question.model_copy(update={"author_id": recipient}), answer
            )
            stored.append(await repo.save(event.to_notification()))
        return stored

    @pytest.mark.asyncio
    async def test_list_returns_counts(self, unit_env):
        """Listing reports total and unread counts."""
        # Arrange
        service = await unit_env.get(NotificationService)
        recipient = UserId(uuid4())
        stored = await self._deliver(unit_env, recipient, 3)
        await service.mark_read(stored[0].id, recipient)

        # Act
        notifications, total, unread = await service.list_notifications(
            recipient, limit=2
        )

        # Assert
        assert len(notifications) == 2
        assert total == 3
        assert unread == 2
        assert await service.unread_count(recipient) == 2

    @pytest.mark.asyncio
    async def test_mark_all_read(self, unit_env):
        """Marking all read reports how many changed."""
        service = await unit_env.get(NotificationService)
        recipient = UserId(uuid4())
        await self._deliver(unit_env, recipient, 2)

        assert await service.mark_all_read(recipient) == 2
        assert await service.unread_count(recipient) == 0
        assert await service.mark_all_read(recipient) == 0

    @pytest.mark.asyncio
    async def test_other_users_notifications_are_not_found(self, unit_env):
        """A notification can only be read or deleted by its recipient."""
        # Arrange
        service = await unit_env.get(NotificationService)
        recipient = UserId(uuid4())
        (notification,) = await self._deliver(unit_env, recipient, 1)
        stranger = UserId(uuid4())

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.mark_read(notification.id, stranger)
        with pytest.raises(NotFoundError):
            await service.delete_notification(notification.id, stranger)

    @pytest.mark.asyncio
    async def test_delete_notification(self, unit_env):
        """Deleted notifications are gone."""
        # Arrange
        service = await unit_env.get(NotificationService)
        recipient = UserId(uuid4())
        (notification,) = await self._deliver(unit_env, recipient, 1)

        # Act
        await service.delete_notification(notification.id, recipient)

        # Assert
        _, total, _ = await service.list_notifications(recipient)
        assert total == 0
        with pytest.raises(NotFoundError):
            await service.delete_notification(NotificationId(uuid4()), recipient)
