"""Unit tests for literal LIKE matching in the PostgreSQL question repository."""

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from qna.persistence.repository.question import PostgresQuestionRepository, escape_like
from qna.persistence.tables import questions_table


class StatementRecorder:
    """Stands in for AsyncSession and keeps the executed statements."""

    def __init__(self) -> None:
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        return self

    def fetchall(self):
        return []


def _compile(stmt):
    return stmt.compile(dialect=postgresql.dialect())


class TestEscapeLike:
    """Tests for escape_like."""

    def test_wildcards_are_escaped(self):
        assert escape_like("50%_off") == "50\\%\\_off"

    def test_escape_char_is_escaped_first(self):
        assert escape_like("a\\%") == "a\\\\\\%"

    def test_plain_text_is_unchanged(self):
        assert escape_like("asyncio") == "asyncio"


class TestSearchStatements:
    """The built statements carry the escaped pattern and an ESCAPE clause."""

    def test_question_search_is_literal(self):
        repo = PostgresQuestionRepository(StatementRecorder())

        stmt = repo._filtered(select(questions_table), None, "100%", False, False)
        compiled = _compile(stmt)

        assert "ESCAPE" in str(compiled)
        assert "%100\\%%" in compiled.params.values()

    @pytest.mark.asyncio
    async def test_tag_search_is_literal(self):
        session = StatementRecorder()
        repo = PostgresQuestionRepository(session)

        await repo.tag_usage(limit=5, search="c_")
        compiled = _compile(session.statements[0])

        assert "ESCAPE" in str(compiled)
        assert "%c\\_%" in compiled.params.values()
