"""Role-based access control (RBAC) decisions.

Pure functions only: they answer "may this actor do that" and never touch
the database or the request, so services and dependencies can share them.
"""

from uuid import UUID

# Roles accepted by the role-change endpoint
ROLE_HIERARCHY = {
    "user": 0,
    "admin": 1,
}

ADMIN_ROLE = "admin"


def require_role(actor_role: str | None, required_role: str) -> bool:
    """
    Check an actor against an exact role.

    Args:
        actor_role: Role of the caller, None when unauthenticated
        required_role: Role the action demands

    Returns:
        bool: True if the actor holds that role
    """
    return actor_role is not None and actor_role == required_role


def is_admin(actor_role: str | None) -> bool:
    return require_role(actor_role, ADMIN_ROLE)


def can_mutate(actor_id: UUID, actor_role: str, owner_id: UUID) -> bool:
    """
    Decide whether an actor may edit or delete a resource.

    Args:
        actor_id: Caller id
        actor_role: Caller role
        owner_id: Owner of the resource

    Returns:
        bool: True for admins and for the owner
    """
    return is_admin(actor_role) or actor_id == owner_id


def can_delete_comment(
    actor_id: UUID,
    actor_role: str,
    blog_owner_id: UUID,
    comment_author_id: UUID,
) -> bool:
    """
    Decide whether an actor may delete a comment.

    Besides the blog owner and admins, the comment's own author may delete it.

    Args:
        actor_id: Caller id
        actor_role: Caller role
        blog_owner_id: Owner of the blog the comment belongs to
        comment_author_id: Author of the comment

    Returns:
        bool: True if deletion is allowed
    """
    return actor_id == comment_author_id or can_mutate(actor_id, actor_role, blog_owner_id)
