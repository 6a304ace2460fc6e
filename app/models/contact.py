"""Contact form message model."""

from datetime import datetime
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from app.configs.settings import MAX_NAME_LENGTH
from app.utils.helpers import utc_now


class ContactMessageDB(SQLModel, table=True):
    """A message submitted through the public contact form."""

    __tablename__ = cast("declared_attr[str]", "contact_messages")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    name: str = Field(sa_column=Column(String(MAX_NAME_LENGTH), nullable=False))
    email: str = Field(sa_column=Column(String(255), nullable=False))
    message: str = Field(sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
