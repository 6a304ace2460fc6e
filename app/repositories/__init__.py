"""Repository layer for database operations."""

from app.repositories.base import BaseRepository
from app.repositories.blog import (
    BlogRepository,
    BlogStatsRow,
    build_blog_filters,
    normalize_tags,
    resolve_sort,
)
from app.repositories.contact import ContactRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BlogRepository",
    "BlogStatsRow",
    "ContactRepository",
    "UserRepository",
    "build_blog_filters",
    "normalize_tags",
    "resolve_sort",
]
