"""Database models for the application."""

from app.models.blog import BlogDB, BlogLikeDB, BlogTagDB, CommentDB
from app.models.contact import ContactMessageDB
from app.models.user import UserDB

__all__ = [
    "BlogDB",
    "BlogLikeDB",
    "BlogTagDB",
    "CommentDB",
    "ContactMessageDB",
    "UserDB",
]
