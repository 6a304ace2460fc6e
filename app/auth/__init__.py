"""Authentication and authorization module."""

from app.auth.permissions import (
    ADMIN_ROLE,
    ROLE_HIERARCHY,
    can_delete_comment,
    can_mutate,
    is_admin,
    require_role,
)

__all__ = [
    "ADMIN_ROLE",
    "ROLE_HIERARCHY",
    "can_delete_comment",
    "can_mutate",
    "is_admin",
    "require_role",
]
