"""Unit tests for QuestionService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from qna.domain.error import ForbiddenError, NotFoundError, ValidationError
from qna.domain.model import VoteLedger
from qna.domain.repository import QuestionRepository, QuestionSortOrder
from qna.domain.service import QuestionService
from qna.domain.value import QuestionId, TagName, UserId, VoteDirection
from tests.conftest import QUESTION_DESCRIPTION, make_identity, make_question
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateQuestion:
    """Tests for create_question."""

    @pytest.mark.asyncio
    async def test_create_question_starts_empty(self, unit_env):
        """New questions have no votes, views or answers."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        author = make_identity("asker")

        # Act
        question = await question_service.create_question(
            author=author,
            title="  How do I cancel an asyncio task?  ",
            description=QUESTION_DESCRIPTION,
            tags=[TagName("Python"), TagName("asyncio"), TagName("python")],
        )

        # Assert
        assert question.title == "How do I cancel an asyncio task?"
        assert question.tags == [TagName("python"), TagName("asyncio")]
        assert question.score == 0
        assert question.views == 0
        assert question.answer_count == 0
        assert question.accepted_answer_id is None
        assert question.author_username == author.username


class TestGetQuestion:
    """Tests for get_question and record_view."""

    @pytest.mark.asyncio
    async def test_missing_question_raises(self, unit_env):
        """Unknown IDs raise NotFoundError."""
        question_service = await unit_env.get(QuestionService)

        with pytest.raises(NotFoundError):
            await question_service.get_question(QuestionId(uuid4()))

    @pytest.mark.asyncio
    async def test_record_view_increments(self, unit_env):
        """Each view adds one."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await question_repo.save(make_question())

        # Act
        await question_service.record_view(question.id)
        await question_service.record_view(question.id)

        # Assert
        assert (await question_service.get_question(question.id)).views == 2


class TestListQuestions:
    """Tests for list_questions."""

    async def _seed(self, unit_env):
        question_repo = await unit_env.get(QuestionRepository)
        old = make_question(title="Old question about decorators", age=timedelta(days=2))
        mid = make_question(
            title="Middle question about asyncio",
            tags=["asyncio"],
            age=timedelta(days=1),
            answer_count=3,
        )
        new = make_question(title="New question about generators", views=0)
        ledger, _ = old.ledger.cast(UserId(uuid4()), VoteDirection.UP)
        old = old.model_copy(update={"ledger": ledger, "views": 10})
        for question in (old, mid, new):
            await question_repo.save(question)
        return old, mid, new

    @pytest.mark.asyncio
    async def test_newest_first_by_default(self, unit_env):
        """Default order is newest first, with the total count."""
        question_service = await unit_env.get(QuestionService)
        old, mid, new = await self._seed(unit_env)

        questions, total = await question_service.list_questions()

        assert [q.id for q in questions] == [new.id, mid.id, old.id]
        assert total == 3

    @pytest.mark.asyncio
    async def test_most_voted_and_most_viewed(self, unit_env):
        """Vote and view orders put the popular question first."""
        question_service = await unit_env.get(QuestionService)
        old, _, _ = await self._seed(unit_env)

        by_votes, _ = await question_service.list_questions(sort=QuestionSortOrder.MOST_VOTED)
        by_views, _ = await question_service.list_questions(sort=QuestionSortOrder.MOST_VIEWED)

        assert by_votes[0].id == old.id
        assert by_views[0].id == old.id

    @pytest.mark.asyncio
    async def test_unanswered_only_lists_questions_without_answers(self, unit_env):
        """The unanswered order filters out answered questions."""
        question_service = await unit_env.get(QuestionService)
        old, mid, new = await self._seed(unit_env)

        questions, total = await question_service.list_questions(
            sort=QuestionSortOrder.UNANSWERED
        )

        assert {q.id for q in questions} == {old.id, new.id}
        assert total == 2

    @pytest.mark.asyncio
    async def test_filter_by_tag_and_search(self, unit_env):
        """Tag and search filters narrow the list."""
        question_service = await unit_env.get(QuestionService)
        _, mid, new = await self._seed(unit_env)

        by_tag, tag_total = await question_service.list_questions(tag=TagName("asyncio"))
        by_search, _ = await question_service.list_questions(search="  GENERATORS ")

        assert [q.id for q in by_tag] == [mid.id]
        assert tag_total == 1
        assert [q.id for q in by_search] == [new.id]

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        """Limit and offset page through the list."""
        question_service = await unit_env.get(QuestionService)
        old, mid, _ = await self._seed(unit_env)

        questions, total = await question_service.list_questions(limit=2, offset=1)

        assert [q.id for q in questions] == [mid.id, old.id]
        assert total == 3


class TestDeleteQuestion:
    """Tests for delete_question."""

    @pytest.mark.asyncio
    async def test_author_soft_deletes(self, unit_env):
        """Deleted questions disappear from reads and listings."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        author = make_identity("asker")
        question = await question_repo.save(make_question(author=author))

        # Act
        await question_service.delete_question(question.id, author.user_id)

        # Assert
        with pytest.raises(NotFoundError):
            await question_service.get_question(question.id)
        _, total = await question_service.list_questions()
        assert total == 0

    @pytest.mark.asyncio
    async def test_non_author_is_forbidden(self, unit_env):
        """Only the author may delete a question."""
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await question_repo.save(make_question())

        with pytest.raises(ForbiddenError):
            await question_service.delete_question(question.id, UserId(uuid4()))


class TestTagUsage:
    """Tests for get_tag_usage."""

    @pytest.mark.asyncio
    async def test_counts_live_questions_per_tag(self, unit_env):
        """Tags are counted over live questions, most used first."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        await question_repo.save(make_question(tags=["python", "asyncio"]))
        await question_repo.save(make_question(tags=["python"]))
        deleted = make_question(tags=["rust"])
        await question_repo.save(deleted.model_copy(update={"deleted_at": deleted.created_at}))

        # Act
        usage = await question_service.get_tag_usage()

        # Assert
        assert [(t.name.root, t.question_count) for t in usage] == [
            ("python", 2),
            ("asyncio", 1),
        ]


class TestUpdateQuestion:
    """Tests for update_question."""

    @pytest.mark.asyncio
    async def test_author_edits_content_only(self, unit_env):
        """Edits change content and keep votes, views and acceptance."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        author = make_identity("asker")
        ledger = VoteLedger.from_entries({UserId(uuid4()): VoteDirection.UP})
        question = await question_repo.save(
            make_question(author=author, ledger=ledger, views=7)
        )

        # Act
        updated = await question_service.update_question(
            question.id,
            author.user_id,
            title="  Why does my async test hang on CI only?  ",
            tags=[TagName("pytest"), TagName("PYTEST"), TagName("asyncio")],
        )

        # Assert
        assert updated.title == "Why does my async test hang on CI only?"
        assert updated.description == question.description
        assert updated.tags == [TagName("pytest"), TagName("asyncio")]
        stored = await question_repo.find_by_id(question.id)
        assert stored.title == updated.title
        assert stored.score == 1
        assert stored.views == 7
        assert stored.updated_at >= question.updated_at

    @pytest.mark.asyncio
    async def test_non_author_is_forbidden(self, unit_env):
        """Only the author may edit."""
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        question = await question_repo.save(make_question())

        with pytest.raises(ForbiddenError):
            await question_service.update_question(
                question.id, UserId(uuid4()), title="A completely different title"
            )

    @pytest.mark.asyncio
    async def test_deleted_question_is_not_found(self, unit_env):
        """Deleted questions cannot be edited."""
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        author = make_identity("asker")
        question = await question_repo.save(make_question(author=author))
        await question_service.delete_question(question.id, author.user_id)

        with pytest.raises(NotFoundError):
            await question_service.update_question(
                question.id, author.user_id, title="A completely different title"
            )

    @pytest.mark.asyncio
    async def test_too_short_title_is_rejected(self, unit_env):
        """Edited content follows the same rules as new content."""
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        author = make_identity("asker")
        question = await question_repo.save(make_question(author=author))

        with pytest.raises(ValidationError):
            await question_service.update_question(
                question.id, author.user_id, title="   too short   "
            )

        stored = await question_repo.find_by_id(question.id)
        assert stored.title == question.title


class TestTagLookups:
    """Tests for search_tags and get_tag_stats."""

    @pytest.mark.asyncio
    async def test_search_matches_substring(self, unit_env):
        """Search is case-insensitive and ordered by usage."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        await question_repo.save(make_question(tags=["python", "python-3"]))
        await question_repo.save(make_question(tags=["python"]))
        await question_repo.save(make_question(tags=["rust"]))

        # Act
        tags = await question_service.search_tags(" PYTH ")

        # Assert
        assert [(t.name.root, t.question_count) for t in tags] == [
            ("python", 2),
            ("python-3", 1),
        ]

    @pytest.mark.asyncio
    async def test_blank_search_is_rejected(self, unit_env):
        question_service = await unit_env.get(QuestionService)

        with pytest.raises(ValidationError):
            await question_service.search_tags("   ")

    @pytest.mark.asyncio
    async def test_tag_stats_sum_live_questions(self, unit_env):
        """Stats add up score and views of live tagged questions."""
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        up = VoteLedger.from_entries({UserId(uuid4()): VoteDirection.UP})
        await question_repo.save(make_question(tags=["sql"], ledger=up, views=3))
        await question_repo.save(make_question(tags=["sql", "python"], views=2))
        await question_repo.save(make_question(tags=["python"], views=50))

        # Act
        stats = await question_service.get_tag_stats(TagName("sql"))
        unused = await question_service.get_tag_stats(TagName("cobol"))

        # Assert
        assert (stats.question_count, stats.total_score, stats.total_views) == (2, 1, 5)
        assert (unused.question_count, unused.total_score, unused.total_views) == (0, 0, 0)


class TestAuthorQueries:
    """Tests for list_by_author and author_totals."""

    @pytest.mark.asyncio
    async def test_lists_own_live_questions_newest_first(self, unit_env):
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        author = make_identity("asker")
        old = await question_repo.save(make_question(author=author, age=timedelta(days=1)))
        new = await question_repo.save(make_question(author=author, views=4))
        await question_repo.save(make_question())
        gone = await question_repo.save(make_question(author=author))
        await question_service.delete_question(gone.id, author.user_id)

        # Act
        questions, total = await question_service.list_by_author(author.user_id)
        totals = await question_service.author_totals(author.user_id)

        # Assert
        assert [q.id for q in questions] == [new.id, old.id]
        assert total == 2
        assert (totals.count, totals.total_views) == (2, 4)


class TestSearchIsLiteral:
    """Search text is matched literally, wildcards included."""

    @pytest.mark.asyncio
    async def test_percent_matches_only_itself(self, unit_env):
        # Arrange
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        await question_repo.save(make_question(title="Why is 100% CPU used by my loop?"))
        await question_repo.save(make_question(title="Why does my async test hang forever?"))

        # Act
        questions, total = await question_service.list_questions(search="%")

        # Assert
        assert total == 1
        assert questions[0].title == "Why is 100% CPU used by my loop?"
