"""Tests for password hashing."""

import pytest
from passlib.hash import pbkdf2_sha256

from app.managers.password_manager import PasswordHasher, hash_password, verify_password


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher("low")


class TestPasswordHasher:
    """Test cases for the synchronous hasher."""

    def test_hash_and_verify(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("secret1")

        assert hashed.startswith("$argon2")
        assert hasher.verify("secret1", hashed) is True
        assert hasher.verify("wrong", hashed) is False

    def test_empty_password_rejected(self, hasher: PasswordHasher) -> None:
        with pytest.raises(ValueError, match="empty"):
            hasher.hash("")

    @pytest.mark.parametrize("bad_hash", [None, "", "   ", "not-a-hash"])
    def test_invalid_hash_never_raises(self, hasher: PasswordHasher, bad_hash: str | None) -> None:
        assert hasher.verify("secret1", bad_hash) is False

    def test_legacy_hash_needs_rehash(self, hasher: PasswordHasher) -> None:
        legacy = pbkdf2_sha256.hash("secret1")

        assert hasher.verify("secret1", legacy) is True
        assert hasher.needs_rehash(legacy) is True
        assert hasher.needs_rehash(hasher.hash("secret1")) is False


class TestAsyncHelpers:
    """Test cases for the executor-backed coroutines."""

    async def test_round_trip(self) -> None:
        hashed = await hash_password("secret1")

        assert await verify_password("secret1", hashed) is True
        assert await verify_password("secret2", hashed) is False
