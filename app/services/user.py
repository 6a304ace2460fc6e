"""User profile and administration service."""

from dataclasses import dataclass
from uuid import UUID

from app.auth.permissions import ROLE_HIERARCHY
from app.errors import UserNotFoundError, ValidationError
from app.models import UserDB
from app.monitoring import get_logger
from app.repositories import UserRepository
from app.schemas.user import ProfileUpdate
from app.utils.helpers import total_pages

logger = get_logger(__name__)


@dataclass
class UserPage:
    users: list[UserDB]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)

    @property
    def has_more(self) -> bool:
        return (self.page - 1) * self.limit + len(self.users) < self.total


class UserService:
    """Profile self-service and admin-only account management."""

    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    async def update_profile(self, user: UserDB, payload: ProfileUpdate) -> UserDB:
        """
        Update the caller's own profile.

        A blank name is ignored, bio is trimmed when supplied and the
        profile picture is set when supplied.

        Args:
            user: Caller
            payload: Profile fields

        Returns:
            UserDB: Updated user
        """
        changes: dict[str, object] = {}
        if payload.name and payload.name.strip():
            changes["name"] = payload.name.strip()
        if payload.bio is not None:
            changes["bio"] = payload.bio.strip()
        if "profile_picture" in payload.model_fields_set:
            changes["profile_picture"] = payload.profile_picture

        if not changes:
            return user
        return await self.user_repo.update(user, changes)

    async def list_users(self, page: int, limit: int) -> UserPage:
        """
        List users, newest first.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            UserPage: Requested page with the total user count
        """
        users = await self.user_repo.list_users(skip=(page - 1) * limit, limit=limit)
        total = await self.user_repo.count()
        return UserPage(users=users, total=total, page=page, limit=limit)

    async def toggle_status(self, admin: UserDB, user_id: UUID) -> UserDB:
        """
        Activate a deactivated account or deactivate an active one.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = await self.user_repo.get_or_raise(user_id, UserNotFoundError)
        user = await self.user_repo.update(user, {"is_active": not user.is_active})
        state = "activated" if user.is_active else "deactivated"
        logger.info(f"User {user.id} {state} by admin {admin.id}")
        return user

    async def change_role(self, admin: UserDB, user_id: UUID, role: str) -> UserDB:
        """
        Set the role of an account.

        Raises:
            ValidationError: If the role is unknown
            UserNotFoundError: If the user does not exist
        """
        if role not in ROLE_HIERARCHY:
            raise ValidationError("Invalid role")

        user = await self.user_repo.get_or_raise(user_id, UserNotFoundError)
        user = await self.user_repo.update(user, {"role": role})
        logger.info(f"User {user.id} role changed to {role} by admin {admin.id}")
        return user
