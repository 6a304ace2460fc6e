"""Tests for the JWT token manager."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import jwt

from app.configs import settings
from app.managers.token_manager import (
    create_access_token,
    decode_access_token,
    get_token_expiry,
)


class TestCreateAccessToken:
    """Test cases for create_access_token function."""

    def test_token_contains_correct_claims(self) -> None:
        user_id = uuid4()

        token = create_access_token(user_id=user_id, role="admin")
        token_data = decode_access_token(token)

        assert token_data is not None
        assert token_data.user_id == user_id
        assert token_data.role == "admin"
        assert token_data.token_type == "access"
        assert token_data.jti

    def test_default_expiry_is_one_day(self) -> None:
        token = create_access_token(user_id=uuid4(), role="user")

        expiry = get_token_expiry(token)

        assert expiry is not None
        remaining = expiry - datetime.now(UTC)
        assert timedelta(hours=23, minutes=59) < remaining <= timedelta(hours=24)

    def test_custom_expiration(self) -> None:
        token = create_access_token(
            user_id=uuid4(),
            role="user",
            expires_delta=timedelta(hours=2),
        )

        expiry = get_token_expiry(token)

        assert expiry is not None
        assert expiry - datetime.now(UTC) <= timedelta(hours=2)

    def test_unique_jti(self) -> None:
        user_id = uuid4()
        first = decode_access_token(create_access_token(user_id=user_id, role="user"))
        second = decode_access_token(create_access_token(user_id=user_id, role="user"))

        assert first is not None
        assert second is not None
        assert first.jti != second.jti


class TestDecodeAccessToken:
    """Test cases for decode_access_token function."""

    def test_expired_token(self) -> None:
        token = create_access_token(
            user_id=uuid4(),
            role="user",
            expires_delta=timedelta(seconds=-1),
        )

        assert decode_access_token(token) is None

    def test_garbage_token(self) -> None:
        assert decode_access_token("not-a-jwt") is None

    def test_wrong_secret(self) -> None:
        token = jwt.encode(
            {"sub": str(uuid4()), "role": "user", "jti": "x", "type": "access"},
            "another-secret-entirely",
            algorithm=settings.ALGORITHM,
        )

        assert decode_access_token(token) is None

    def test_wrong_token_type(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": str(uuid4()),
                "role": "user",
                "jti": "x",
                "type": "refresh",
                "iat": now,
                "exp": now + timedelta(minutes=5),
                "iss": settings.JWT_ISSUER,
                "aud": settings.JWT_AUDIENCE,
            },
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )

        assert decode_access_token(token) is None
