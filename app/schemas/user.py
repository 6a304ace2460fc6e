"""
User schemas for profile, listing and administration endpoints.

Response models are built from ``UserDB`` rows (``from_attributes``) and
serialized with camelCase aliases.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import MAX_BIO_LENGTH, MAX_NAME_LENGTH


class UserSummary(BaseModel):
    """Minimal account view returned right after signup."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    email: str
    username: str
    role: str


class UserPublic(BaseModel):
    """User profile without credential data."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    username: str
    email: str
    role: str
    bio: str = ""
    profile_picture: str | None = Field(default=None, alias="profilePicture")
    is_active: bool = Field(default=True, alias="isActive")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left untouched."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    bio: str | None = Field(default=None, max_length=MAX_BIO_LENGTH)
    profile_picture: str | None = Field(default=None, alias="profilePicture", max_length=500)


class ProfileResponse(BaseModel):
    message: str = "Profile updated successfully"
    user: UserPublic


class RoleUpdate(BaseModel):
    role: str = Field(..., examples=["admin"])


class RoleChangeResponse(BaseModel):
    message: str
    user: UserPublic


class UserStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    username: str
    is_active: bool = Field(alias="isActive")


class UserStatusResponse(BaseModel):
    message: str
    user: UserStatus


class UserPagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_users: int = Field(alias="totalUsers")
    has_more: bool = Field(alias="hasMore")


class UserListResponse(BaseModel):
    users: list[UserPublic]
    pagination: UserPagination


