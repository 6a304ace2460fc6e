"""
Blog schemas for the LifeBlog application.

Request models trim surrounding whitespace before length limits apply; tag
normalization and required-field checks happen in the blog service so the
same rules apply to every caller.
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import (
    MAX_COMMENT_LENGTH,
    MAX_SUMMARY_LENGTH,
    MAX_TITLE_LENGTH,
)

type BlogStatus = Literal["draft", "published", "archived"]


class BlogCreate(BaseModel):
    """Blog creation payload."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str | None = Field(
        default=None,
        max_length=MAX_TITLE_LENGTH,
        examples=["Morning routines that stick"],
    )
    summary: str | None = Field(default=None, max_length=MAX_SUMMARY_LENGTH)
    content: str | None = Field(default=None)
    tags: list[str] | None = Field(default=None, examples=[["Habits", " productivity "]])
    image: str | None = Field(default=None, max_length=1000)
    status: BlogStatus = Field(default="published")


class BlogUpdate(BaseModel):
    """Partial blog update; only supplied fields change."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str | None = Field(default=None, max_length=MAX_TITLE_LENGTH)
    summary: str | None = Field(default=None, max_length=MAX_SUMMARY_LENGTH)
    content: str | None = None
    tags: list[str] | None = None
    image: str | None = Field(default=None, max_length=1000)
    status: BlogStatus | None = None


class CommentCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str | None = Field(default=None, max_length=MAX_COMMENT_LENGTH)


class BlogAuthor(BaseModel):
    """Public author fields attached to a blog."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    username: str
    email: str
    name: str
    bio: str = ""
    profile_picture: str | None = Field(default=None, alias="profilePicture")


class CommentAuthor(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    username: str
    name: str
    profile_picture: str | None = Field(default=None, alias="profilePicture")


class CommentOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    content: str
    created_at: datetime = Field(alias="createdAt")
    user: CommentAuthor | None = None


class BlogOut(BaseModel):
    """Blog as returned by the API, with derived like/comment counts."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    summary: str
    content: str
    image: str | None = None
    tags: list[str]
    status: BlogStatus
    views: int
    likes: list[UUID]
    likes_count: int = Field(alias="likesCount")
    comments: list[CommentOut]
    comments_count: int = Field(alias="commentsCount")
    user: BlogAuthor | None = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class BlogPagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_blogs: int = Field(alias="totalBlogs")
    has_more: bool = Field(alias="hasMore")


class BlogFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    available_tags: list[str] = Field(alias="availableTags")
    current_tag: str | None = Field(default=None, alias="currentTag")
    current_search: str | None = Field(default=None, alias="currentSearch")


class BlogListResponse(BaseModel):
    blogs: list[BlogOut]
    pagination: BlogPagination
    filters: BlogFilters


class MyBlogsResponse(BaseModel):
    blogs: list[BlogOut]
    pagination: BlogPagination


class BlogStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_blogs: int = Field(default=0, alias="totalBlogs")
    published_blogs: int = Field(default=0, alias="publishedBlogs")
    draft_blogs: int = Field(default=0, alias="draftBlogs")
    total_views: int = Field(default=0, alias="totalViews")
    total_likes: int = Field(default=0, alias="totalLikes")
    total_comments: int = Field(default=0, alias="totalComments")


class BlogMutationResponse(BaseModel):
    message: str
    blog: BlogOut


class LikeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    liked: bool
    likes_count: int = Field(alias="likesCount")


class CommentResponse(BaseModel):
    message: str = "Comment added successfully"
    comment: CommentOut


class MessageResponse(BaseModel):
    message: str
