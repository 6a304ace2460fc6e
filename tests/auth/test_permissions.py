"""Tests for RBAC permission decisions."""

from uuid import uuid4

import pytest

from app.auth.permissions import (
    ROLE_HIERARCHY,
    can_delete_comment,
    can_mutate,
    is_admin,
    require_role,
)


class TestRoleHierarchy:
    """Test cases for role hierarchy."""

    def test_hierarchy_contains_expected_roles(self) -> None:
        assert set(ROLE_HIERARCHY) == {"user", "admin"}

    def test_hierarchy_order_is_correct(self) -> None:
        assert ROLE_HIERARCHY["user"] < ROLE_HIERARCHY["admin"]


class TestRequireRole:
    """Test cases for exact role checks."""

    @pytest.mark.parametrize(
        ("actor_role", "required", "expected"),
        [
            ("admin", "admin", True),
            ("user", "admin", False),
            ("user", "user", True),
            (None, "admin", False),
            ("Admin", "admin", False),
        ],
    )
    def test_require_role(self, actor_role: str | None, required: str, expected: bool) -> None:
        assert require_role(actor_role, required) is expected

    def test_is_admin(self) -> None:
        assert is_admin("admin") is True
        assert is_admin("user") is False
        assert is_admin(None) is False


class TestCanMutate:
    """Test cases for owner-or-admin mutation rights."""

    def test_owner_may_mutate(self) -> None:
        owner = uuid4()
        assert can_mutate(owner, "user", owner) is True

    def test_admin_may_mutate_anything(self) -> None:
        assert can_mutate(uuid4(), "admin", uuid4()) is True

    def test_other_user_may_not(self) -> None:
        assert can_mutate(uuid4(), "user", uuid4()) is False


class TestCanDeleteComment:
    """Test cases for comment deletion rights."""

    def test_comment_author_may_delete(self) -> None:
        commenter = uuid4()
        assert can_delete_comment(commenter, "user", uuid4(), commenter) is True

    def test_blog_owner_may_delete(self) -> None:
        owner = uuid4()
        assert can_delete_comment(owner, "user", owner, uuid4()) is True

    def test_admin_may_delete(self) -> None:
        assert can_delete_comment(uuid4(), "admin", uuid4(), uuid4()) is True

    def test_stranger_may_not(self) -> None:
        assert can_delete_comment(uuid4(), "user", uuid4(), uuid4()) is False
