# tests/errors/test_base.py
"""Tests for app/errors/base.py module."""

from collections.abc import AsyncGenerator
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.configs import settings
from app.errors import (
    BaseAppError,
    BlogNotFoundError,
    DuplicateEntryError,
    ForbiddenError,
    MissingTokenError,
    ValidationError,
    create_exception_handler,
    unhandled_exception_handler,
)


class TestBaseAppError:
    """Tests for BaseAppError exception."""

    def test_default_values(self) -> None:
        error = BaseAppError()
        assert error.detail == "Internal Server Error"
        assert error.status_code == 500

    def test_custom_values(self) -> None:
        error = BaseAppError(detail="Custom error", status_code=400)
        assert error.detail == "Custom error"
        assert error.status_code == 400

    def test_str_representation(self) -> None:
        assert str(BaseAppError(detail="Test error")) == "Test error"

    @pytest.mark.parametrize(
        ("error", "status_code", "detail"),
        [
            (ValidationError("Invalid role"), 400, "Invalid role"),
            (MissingTokenError(), 401, "Access token required"),
            (ForbiddenError("Not authorized"), 403, "Not authorized"),
            (BlogNotFoundError(), 404, "Blog not found"),
            (DuplicateEntryError("Email already exists"), 409, "Email already exists"),
        ],
    )
    def test_error_taxonomy(self, error: BaseAppError, status_code: int, detail: str) -> None:
        assert error.status_code == status_code
        assert error.detail == detail


class TestCreateExceptionHandler:
    """Tests for create_exception_handler factory function."""

    async def test_handler_with_base_app_error(self) -> None:
        logger = MagicMock()
        handler = create_exception_handler(logger)
        request = MagicMock()
        request.client.host = "192.168.1.1"
        request.url.path = "/api/test"

        response = await handler(request, BaseAppError(detail="Test error", status_code=400))

        assert response.status_code == 400
        assert response.body == b'{"detail":"Test error"}'
        logger.warning.assert_called_once_with(
            "Test error for ip: 192.168.1.1 for endpoint /api/test",
            status_code=400,
        )

    async def test_auth_errors_carry_bearer_challenge(self) -> None:
        handler = create_exception_handler(MagicMock())
        request = MagicMock()
        request.client.host = "10.0.0.1"
        request.url.path = "/api/blogs/my"

        response = await handler(request, MissingTokenError())

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.body == b'{"detail":"Access token required"}'

    async def test_extra_attributes_are_included(self) -> None:
        handler = create_exception_handler(MagicMock())
        request = MagicMock()
        request.client.host = "10.0.0.1"
        request.url.path = "/api/test"
        error = ValidationError("Bad input", errors=[{"field": "title"}])

        response = await handler(request, error)

        assert response.body == b'{"detail":"Bad input","errors":[{"field":"title"}]}'


@pytest.fixture
async def crashing_client() -> AsyncGenerator[AsyncClient]:
    crash_app = FastAPI()
    crash_app.add_exception_handler(Exception, unhandled_exception_handler)

    @crash_app.get("/boom")
    async def boom() -> None:
        msg = "database exploded"
        raise RuntimeError(msg)

    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=crash_app, raise_app_exceptions=False),
    ) as ac:
        yield ac


class TestUnhandledExceptionHandler:
    """Tests for the catch-all 500 handler."""

    async def test_details_hidden_by_default(
        self,
        crashing_client: AsyncClient,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(settings, "DEBUG", False)

        response = await crashing_client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}

    async def test_details_shown_in_debug(
        self,
        crashing_client: AsyncClient,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(settings, "DEBUG", True)

        response = await crashing_client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "RuntimeError: database exploded"
