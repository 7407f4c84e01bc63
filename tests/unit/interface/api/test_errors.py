"""Unit tests for domain error translation."""

import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import ValidationError as ModelValidationError

from qna.domain.error import (
    ConflictError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
)
from qna.domain.value import TagName, parse_uuid
from qna.interface.api.errors import DomainErrorMiddleware, error_response


def _tag_error() -> ModelValidationError:
    with pytest.raises(ModelValidationError) as exc_info:
        TagName(" ")
    return exc_info.value


class TestErrorResponse:
    """Tests for error_response."""

    @pytest.mark.parametrize(
        "error, status_code, code",
        [
            (ValidationError("bad direction"), 400, "validation_error"),
            (NotFoundError("Question", "123"), 404, "not_found"),
            (ForbiddenError("delete", "answer", "1", "2"), 403, "forbidden"),
            (InvalidOperationError("Cannot vote on your own answer"), 400, "invalid_operation"),
            (ConflictError("question", "123", 5), 409, "conflict"),
            (_tag_error(), 400, "validation_error"),
        ],
    )
    def test_status_and_body(self, error, status_code, code):
        """Each error type maps to its status and error code."""
        response = error_response(error)

        assert response.status_code == status_code
        body = json.loads(response.body)
        assert body == {"error": code, "detail": str(error)}

    def test_conflict_detail_mentions_attempts(self):
        """Conflicts report how often the vote was retried."""
        body = json.loads(error_response(ConflictError("answer", "42", 3)).body)

        assert body["detail"] == "Concurrent update on answer 42 after 3 attempts"


@pytest.fixture
def client():
    app = FastAPI()
    app.add_middleware(DomainErrorMiddleware)

    @app.get("/bad-id")
    async def bad_id():
        parse_uuid("not-a-uuid")

    @app.get("/bad-tag")
    async def bad_tag():
        TagName("")

    @app.get("/bug")
    async def bug():
        raise ValueError("unexpected internal state")

    return TestClient(app, raise_server_exceptions=False)


class TestDomainErrorMiddleware:
    """Tests for which errors the middleware turns into 400s."""

    def test_malformed_identifier_is_400(self, client):
        response = client.get("/bad-id")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid identifier: not-a-uuid"

    def test_invalid_value_object_is_400(self, client):
        response = client.get("/bad-tag")

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_plain_value_error_is_not_masked(self, client):
        """Bugs surface as server errors instead of client errors."""
        response = client.get("/bug")

        assert response.status_code == 500
