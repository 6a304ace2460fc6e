"""Tests for authentication schemas."""

from uuid import uuid4

from pydantic import ValidationError
from pytest import mark, raises

from app.schemas.auth import LoginRequest, LoginResponse, SignupRequest
from app.schemas.user import UserPublic


class TestSignupRequest:
    """Test cases for SignupRequest schema."""

    def test_valid_signup(self) -> None:
        request = SignupRequest(
            name=" Jane ",
            email=" Jane@Example.com ",
            username="janedoe",
            password="secret1",
        )
        assert request.name == "Jane"
        assert request.email == "jane@example.com"
        assert request.password.get_secret_value() == "secret1"
        assert request.role is None

    def test_password_hidden_in_repr(self) -> None:
        request = SignupRequest(
            name="Jane",
            email="jane@example.com",
            username="janedoe",
            password="secret1",
        )
        assert "secret1" not in repr(request)

    @mark.parametrize(
        ("field", "value", "message"),
        [
            ("password", "12345", "Password must be at least 6 characters"),
            ("username", "jd", "Username must be at least 3 characters"),
            ("email", "jane.example.com", "Invalid email format"),
            ("email", "jane@example", "Invalid email format"),
        ],
    )
    def test_invalid_fields(self, field: str, value: str, message: str) -> None:
        data = {
            "name": "Jane",
            "email": "jane@example.com",
            "username": "janedoe",
            "password": "secret1",
        }
        data[field] = value

        with raises(ValidationError) as exc_info:
            SignupRequest(**data)

        assert message in str(exc_info.value)


class TestLoginSchemas:
    """Test cases for login request and response schemas."""

    def test_empty_password_rejected(self) -> None:
        with raises(ValidationError):
            LoginRequest(username="jane", password="")

    def test_response_serializes_with_aliases(self) -> None:
        user = UserPublic(
            id=uuid4(),
            name="Jane",
            username="janedoe",
            email="jane@example.com",
            role="user",
        )
        response = LoginResponse(token="abc", user=user)

        data = response.model_dump(by_alias=True)
        assert data["tokenType"] == "bearer"
        assert data["message"] == "Login successful"
        assert data["user"]["isActive"] is True
