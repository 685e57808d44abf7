"""Tests for global exception handlers.

Validates that errors are rendered with a consistent JSON shape and that
unexpected exceptions never leak internals.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ratekey.core.errors import AppError, ValidationAppError
from ratekey.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def handler_client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers)


class TestAppErrorHandler:
    def test_validation_error_returns_400(self, handler_client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-validation")
        async def test_endpoint():
            raise ValidationAppError(
                code="unknown_limit_category",
                message="Unknown rate limit category: 'uploads'",
            )

        response = handler_client.get("/test-validation")

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "unknown_limit_category"
        assert data["error"]["message"] == "Unknown rate limit category: 'uploads'"
        assert "request_id" in data["error"]
        assert "details" not in data["error"]

    def test_details_are_included_when_present(self, handler_client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-details")
        async def test_endpoint():
            raise ValidationAppError(
                code="unknown_limit_category",
                message="nope",
                details={"category": "uploads", "allowed_categories": ["requests"]},
            )

        data = handler_client.get("/test-details").json()

        assert data["error"]["details"] == {
            "category": "uploads",
            "allowed_categories": ["requests"],
        }

    def test_str_of_error_is_message(self):
        assert str(AppError(code="x", message="readable")) == "readable"


class TestGeneralExceptionHandler:
    def test_unexpected_exception_handler_registered(self, app_with_handlers: FastAPI):
        assert Exception in app_with_handlers.exception_handlers

    def test_general_exception_handler_hides_details(self):
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        exc = RuntimeError("Unexpected error: redis connection failed")
        response = asyncio.run(general_exception_handler(request, exc))

        data = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert data["error"]["code"] == "internal_server_error"
        assert "redis" not in data["error"]["message"]
        assert "RuntimeError" not in bytes(response.body).decode()
        assert "request_id" in data["error"]


def test_multiple_handler_setups_does_not_fail():
    app = FastAPI()

    setup_exception_handlers(app)
    setup_exception_handlers(app)

    assert AppError in app.exception_handlers
