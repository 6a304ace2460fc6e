from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.configs.settings import MAX_CONTACT_MESSAGE_LENGTH, MAX_NAME_LENGTH
from app.schemas.auth import validate_email_format


class ContactCreate(BaseModel):
    """Contact form submission, stored as received."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    email: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=MAX_CONTACT_MESSAGE_LENGTH)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return validate_email_format(v)


class ContactResponse(BaseModel):
    success: bool = True
    message: str = "Message received!"
