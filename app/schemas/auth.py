"""Request and response schemas for signup and login."""

from re import compile as re_compile
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from app.configs.settings import MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH, MIN_USERNAME_LENGTH
from app.schemas.user import UserPublic, UserSummary

EMAIL_PATTERN = re_compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email_format(value: str) -> str:
    """Trim and lowercase an e-mail address, rejecting obviously malformed ones."""
    email = value.strip().lower()
    if not EMAIL_PATTERN.match(email):
        mssg = "Invalid email format"
        raise ValueError(mssg)
    return email


class TokenData(BaseModel):
    """Claims extracted from a verified access token."""

    user_id: UUID
    role: str
    jti: str
    token_type: str = "access"


class SignupRequest(BaseModel):
    """Self-service account creation payload."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH, examples=["Jane Doe"])
    email: str = Field(..., min_length=1, max_length=255, examples=["jane@example.com"])
    username: str = Field(..., max_length=50, examples=["janedoe"])
    password: SecretStr = Field(..., examples=["secret1"])
    role: str | None = Field(
        default=None,
        description="Accepted for compatibility; new accounts always get the `user` role",
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return validate_email_format(v)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if len(v) < MIN_USERNAME_LENGTH:
            mssg = f"Username must be at least {MIN_USERNAME_LENGTH} characters"
            raise ValueError(mssg)
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: SecretStr) -> SecretStr:
        if len(v.get_secret_value()) < MIN_PASSWORD_LENGTH:
            mssg = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            raise ValueError(mssg)
        return v


class SignupResponse(BaseModel):
    message: str = "User created successfully"
    user: UserSummary


class LoginRequest(BaseModel):
    """Credentials; ``username`` may also hold the account e-mail."""

    username: str = Field(..., min_length=1, examples=["janedoe"])
    password: SecretStr = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Bearer token plus the public profile of the authenticated user."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Login successful"
    token: str
    token_type: str = Field(default="bearer", alias="tokenType")
    user: UserPublic
