"""User repository for database operations."""

from typing import Any
from uuid import UUID

from sqlalchemy import desc, or_, select

from app.models.user import UserDB
from app.repositories.base import BaseRepository
from app.utils.helpers import utc_now


class UserRepository(BaseRepository[UserDB]):
    """
    Repository for User database operations.

    Username and e-mail uniqueness is enforced by the database; collisions
    surface as ``DuplicateEntryError`` with a field specific message.
    """

    model = UserDB
    duplicate_messages = {
        "username": "Username already exists",
        "email": "Email already exists",
    }

    async def create(
        self,
        *,
        name: str,
        email: str,
        username: str,
        password_hash: str,
    ) -> UserDB:
        """
        Create a new user with the default ``user`` role.

        Args:
            name: Display name
            email: Normalized (lowercase) e-mail
            username: Unique handle
            password_hash: Hashed password

        Returns:
            UserDB: Created user

        Raises:
            DuplicateEntryError: If username or email already exists
        """
        db_user = UserDB(
            name=name,
            email=email,
            username=username,
            password_hash=password_hash,
            role="user",
        )
        return await self._add_and_refresh(db_user)

    async def get_by_username(self, username: str) -> UserDB | None:
        """
        Get user by username.

        Args:
            username: Username to search for

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(select(UserDB).where(UserDB.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email.

        Args:
            email: Email to search for (compared lowercase)

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(UserDB.email == email.strip().lower()),
        )
        return result.scalar_one_or_none()

    async def get_by_login(self, identifier: str) -> UserDB | None:
        """
        Get user whose username or email matches a login identifier.

        Args:
            identifier: Username, or e-mail in any case

        Returns:
            UserDB | None: User if found, None otherwise
        """
        identifier = identifier.strip()
        result = await self.session.execute(
            select(UserDB)
            .where(or_(UserDB.username == identifier, UserDB.email == identifier.lower()))
            .limit(1),
        )
        return result.scalar_one_or_none()

    async def find_conflict(self, username: str, email: str) -> str | None:
        """
        Return the conflict message for an already taken username or email.

        Args:
            username: Requested username
            email: Requested (normalized) email

        Returns:
            str | None: Conflict message, or None when both are free
        """
        result = await self.session.execute(
            select(UserDB.username)
            .where(or_(UserDB.username == username, UserDB.email == email))
            .limit(1),
        )
        existing = result.scalar_one_or_none()
        if existing is None:
            return None
        return self.duplicate_messages["username" if existing == username else "email"]

    async def list_users(self, skip: int = 0, limit: int = 10) -> list[UserDB]:
        """
        Get users, newest first.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            list[UserDB]: List of users
        """
        result = await self.session.execute(
            select(UserDB)
            .order_by(desc(UserDB.created_at), desc(UserDB.id))
            .offset(skip)
            .limit(limit),
        )
        return list(result.scalars().all())

    async def update(self, user: UserDB, changes: dict[str, Any]) -> UserDB:
        """
        Apply field changes to a user.

        Args:
            user: User to change
            changes: Field values to set

        Returns:
            UserDB: Updated user
        """
        for key, value in changes.items():
            setattr(user, key, value)
        user.updated_at = utc_now()
        return await self._add_and_refresh(user)

    async def get_active_or_none(self, user_id: UUID) -> UserDB | None:
        """Get a user by id only if the account is active."""
        user = await self.get_by_id(user_id)
        return user if user and user.is_active else None
