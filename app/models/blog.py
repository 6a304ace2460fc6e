"""Blog, tag, like and comment database models using SQLModel.

Tags, likes and comments live in child tables owned by their blog: they are
loaded eagerly with it and removed together with it.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional, cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text, Uuid
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, Relationship, SQLModel, String

from app.configs.settings import MAX_COMMENT_LENGTH, MAX_SUMMARY_LENGTH, MAX_TITLE_LENGTH
from app.utils.helpers import utc_now

if TYPE_CHECKING:
    from app.models.user import UserDB


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    ``views`` is only ever changed through a single atomic UPDATE.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (
        Index("ix_blogs_status_created", "status", "created_at"),
        Index("ix_blogs_author_created", "author_id", "created_at"),
    )

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Blog ID",
    )

    # Foreign key to User (the owner)
    author_id: UUID = Field(
        sa_column=Column(
            "author_id",
            Uuid,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Owner ID (foreign key to users.id)",
    )

    # Required fields
    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Blog title",
    )
    summary: str = Field(
        sa_column=Column(String(MAX_SUMMARY_LENGTH), nullable=False),
        description="Blog summary",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Blog content",
    )

    # Optional fields
    image: str | None = Field(
        default=None,
        sa_column=Column(String(1000)),
        description="Cover image reference",
    )
    status: str = Field(
        default="published",
        sa_column=Column(String(20), nullable=False, server_default="published", index=True),
        description="Blog status (draft, published, archived)",
    )
    views: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
        description="View counter",
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

    author: Optional["UserDB"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    tag_rows: list["BlogTagDB"] = Relationship(
        back_populates="blog",
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "BlogTagDB.position",
        },
    )
    likes: list["BlogLikeDB"] = Relationship(
        back_populates="blog",
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "BlogLikeDB.created_at",
        },
    )
    comments: list["CommentDB"] = Relationship(
        back_populates="blog",
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "CommentDB.created_at",
        },
    )

    @property
    def tags(self) -> list[str]:
        return [row.name for row in self.tag_rows]

    @property
    def likes_count(self) -> int:
        return len(self.likes)

    @property
    def comments_count(self) -> int:
        return len(self.comments)


class BlogTagDB(SQLModel, table=True):
    """One normalized tag of a blog; ``position`` keeps the submitted order."""

    __tablename__ = cast("declared_attr[str]", "blog_tags")

    id: int | None = Field(default=None, primary_key=True)
    blog_id: UUID = Field(
        sa_column=Column(
            "blog_id",
            Uuid,
            ForeignKey("blogs.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    position: int = Field(default=0, nullable=False)
    name: str = Field(sa_column=Column(String(100), nullable=False, index=True))

    blog: Optional[BlogDB] = Relationship(back_populates="tag_rows")


class BlogLikeDB(SQLModel, table=True):
    """A like; the composite key allows each user to like a blog at most once."""

    __tablename__ = cast("declared_attr[str]", "blog_likes")

    blog_id: UUID = Field(
        sa_column=Column(
            "blog_id",
            Uuid,
            ForeignKey("blogs.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            Uuid,
            ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    blog: Optional[BlogDB] = Relationship(back_populates="likes")


class CommentDB(SQLModel, table=True):
    """A comment on a blog."""

    __tablename__ = cast("declared_attr[str]", "blog_comments")

    id: UUID = Field(default_factory=uuid4, primary_key=True, nullable=False)
    blog_id: UUID = Field(
        sa_column=Column(
            "blog_id",
            Uuid,
            ForeignKey("blogs.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            Uuid,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    content: str = Field(sa_column=Column(String(MAX_COMMENT_LENGTH), nullable=False))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    blog: Optional[BlogDB] = Relationship(back_populates="comments")
    user: Optional["UserDB"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
