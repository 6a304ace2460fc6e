"""User database model using SQLModel."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import Boolean, DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs.settings import MAX_BIO_LENGTH, MAX_NAME_LENGTH
from app.utils.helpers import utc_now


class UserDB(SQLModel, table=True):
    """
    User database model.

    Username and email are globally unique. The role always starts as
    ``user``; only an admin can elevate it later.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="User ID",
    )

    # Required fields
    name: str = Field(
        sa_column=Column(String(MAX_NAME_LENGTH), nullable=False),
        description="Display name",
    )
    username: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False, index=True),
        description="Username (unique)",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique, lowercase)",
    )
    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Hashed password",
    )

    # Role-based access control
    role: str = Field(
        default="user",
        sa_column=Column(String(20), nullable=False, server_default="user", index=True),
        description="User role (user, admin)",
    )
    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, server_default="1"),
        description="Whether the account may sign in",
    )

    # Optional profile fields
    bio: str = Field(
        default="",
        sa_column=Column(String(MAX_BIO_LENGTH), nullable=False, server_default=""),
        description="User bio",
    )
    profile_picture: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Profile picture URL",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Jane Doe",
                "username": "janedoe",
                "email": "jane@example.com",
                "role": "user",
                "is_active": True,
            },
        },
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
