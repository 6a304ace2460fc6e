"""Blog repository for database operations.

Besides plain persistence this module owns the SQL side of blog listing:
filter predicates, search patterns, sort resolution and aggregate stats.
Every counter change (views, likes) is a single statement so concurrent
requests cannot lose updates.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal
from uuid import UUID

from sqlalchemy import asc, case, delete, desc, distinct, func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.sql.elements import ColumnElement

from app.models.blog import BlogDB, BlogLikeDB, BlogTagDB, CommentDB
from app.monitoring import get_logger
from app.repositories.base import BaseRepository
from app.utils.helpers import utc_now

logger = get_logger(__name__)

type SortOrder = Literal["asc", "desc"]

DEFAULT_SORT_FIELD = "created_at"

# Accepted sortBy values (camelCase as sent by clients, snake_case as stored)
SORT_COLUMNS: dict[str, Any] = {
    "createdAt": BlogDB.created_at,
    "created_at": BlogDB.created_at,
    "updatedAt": BlogDB.updated_at,
    "updated_at": BlogDB.updated_at,
    "title": BlogDB.title,
    "views": BlogDB.views,
    "status": BlogDB.status,
}


@dataclass(frozen=True)
class BlogStatsRow:
    """Aggregates over a set of blogs."""

    total_blogs: int = 0
    published_blogs: int = 0
    draft_blogs: int = 0
    total_views: int = 0
    total_likes: int = 0
    total_comments: int = 0


def normalize_tag(tag: str) -> str:
    """Trim and lowercase a single tag; blank tags become an empty string."""
    return tag.strip().lower()


def normalize_tags(tags: Sequence[str]) -> list[str]:
    """
    Trim and lowercase tags, dropping empty ones.

    Order is kept and duplicates are not removed.

    Args:
        tags: Raw tags as submitted

    Returns:
        list[str]: Normalized tags
    """
    return [name for name in (normalize_tag(tag) for tag in tags) if name]


def search_pattern(term: str) -> str:
    """Build a LIKE pattern matching ``term`` literally anywhere in a value."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_blog_filters(
    *,
    status: str | None = None,
    tag: str | None = None,
    search: str | None = None,
    author_id: UUID | None = None,
) -> list[ColumnElement[bool]]:
    """
    Compose the listing predicate as a list of AND-ed conditions.

    Args:
        status: Exact status to match
        tag: Tag that must be present (case-insensitive)
        search: Case-insensitive substring matched against title OR summary OR content
        author_id: Owner to restrict to

    Returns:
        list[ColumnElement[bool]]: Conditions for ``Select.where``
    """
    conditions: list[ColumnElement[bool]] = []
    if status:
        conditions.append(BlogDB.status == status)
    if author_id is not None:
        conditions.append(BlogDB.author_id == author_id)
    if tag and (wanted := normalize_tag(tag)):
        tagged = select(BlogTagDB.blog_id).where(BlogTagDB.name == wanted)
        conditions.append(BlogDB.id.in_(tagged))
    if search:
        pattern = search_pattern(search)
        conditions.append(
            or_(
                BlogDB.title.ilike(pattern, escape="\\"),
                BlogDB.summary.ilike(pattern, escape="\\"),
                BlogDB.content.ilike(pattern, escape="\\"),
            ),
        )
    return conditions


def resolve_sort(sort_by: str | None, order: str | None) -> list[Any]:
    """
    Translate request sort parameters into ORDER BY clauses.

    Unknown fields fall back to creation time; anything but ``asc`` sorts
    descending. The blog id is appended in the same direction so ties are
    ordered deterministically.

    Args:
        sort_by: Requested sort field
        order: Requested direction

    Returns:
        list[Any]: ORDER BY clauses
    """
    column = SORT_COLUMNS.get(sort_by or DEFAULT_SORT_FIELD, SORT_COLUMNS[DEFAULT_SORT_FIELD])
    direction = asc if order == "asc" else desc
    return [direction(column), direction(BlogDB.id)]


class BlogRepository(BaseRepository[BlogDB]):
    """
    Repository for Blog database operations.

    Blogs are always returned with their author, tags, likes and comments
    loaded, so callers can serialize them without further queries.
    """

    model = BlogDB

    async def create(
        self,
        *,
        author_id: UUID,
        title: str,
        summary: str,
        content: str,
        tags: list[str],
        image: str | None = None,
        status: str = "published",
    ) -> BlogDB:
        """
        Create a new blog post.

        Args:
            author_id: UUID of the owner
            title: Trimmed title
            summary: Trimmed summary
            content: Content
            tags: Normalized tags
            image: Optional image reference
            status: Initial status

        Returns:
            BlogDB: Created blog with relations loaded
        """
        db_blog = BlogDB(
            author_id=author_id,
            title=title,
            summary=summary,
            content=content,
            image=image,
            status=status,
            views=0,
        )
        db_blog.tag_rows = self._tag_rows(tags)
        self.session.add(db_blog)
        await self._flush()
        return await self.get_or_raise(db_blog.id)

    async def update(self, db_blog: BlogDB, changes: dict[str, Any]) -> BlogDB:
        """
        Apply a partial update to a blog.

        Args:
            db_blog: Blog to change
            changes: Column values to set; a ``tags`` entry replaces the tag list

        Returns:
            BlogDB: Updated blog with relations reloaded
        """
        changes = dict(changes)
        if (tags := changes.pop("tags", None)) is not None:
            db_blog.tag_rows = self._tag_rows(tags)
        for key, value in changes.items():
            setattr(db_blog, key, value)
        db_blog.updated_at = utc_now()

        self.session.add(db_blog)
        await self._flush()
        return await self.get_or_raise(db_blog.id)

    async def delete(self, db_blog: BlogDB) -> None:
        """
        Delete a blog together with its tags, likes and comments.

        Args:
            db_blog: Blog to delete
        """
        await self.session.delete(db_blog)
        await self._flush()

    async def increment_view_count(self, blog_id: UUID) -> bool:
        """
        Atomically add one to the view counter.

        Args:
            blog_id: Blog UUID

        Returns:
            bool: True if the blog exists and was updated
        """
        result = await self.session.execute(
            update(BlogDB).where(BlogDB.id == blog_id).values(views=BlogDB.views + 1),
        )
        return result.rowcount == 1

    async def toggle_like(self, blog_id: UUID, user_id: UUID) -> tuple[bool, int]:
        """
        Flip the like of a user on a blog.

        A single DELETE removes an existing like; when nothing was removed a
        conflict-ignoring INSERT adds it, so two racing toggles by different
        users never overwrite each other.

        Args:
            blog_id: Blog UUID
            user_id: Liking user UUID

        Returns:
            tuple[bool, int]: Whether the user now likes the blog, and the new like count
        """
        removed = await self.session.execute(
            delete(BlogLikeDB).where(
                BlogLikeDB.blog_id == blog_id,
                BlogLikeDB.user_id == user_id,
            ),
        )
        liked = removed.rowcount == 0
        if liked:
            await self.session.execute(
                self._insert_ignoring_conflicts(
                    blog_id=blog_id,
                    user_id=user_id,
                    created_at=utc_now(),
                ),
            )

        count = await self.session.execute(
            select(func.count()).select_from(BlogLikeDB).where(BlogLikeDB.blog_id == blog_id),
        )
        return liked, count.scalar() or 0

    async def add_comment(self, blog_id: UUID, user_id: UUID, content: str) -> CommentDB:
        """
        Append a comment to a blog.

        Args:
            blog_id: Blog UUID
            user_id: Author UUID
            content: Trimmed comment text

        Returns:
            CommentDB: Created comment with its author loaded
        """
        comment = CommentDB(blog_id=blog_id, user_id=user_id, content=content)
        self.session.add(comment)
        await self._flush()

        result = await self.session.execute(
            select(CommentDB)
            .where(CommentDB.id == comment.id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one()

    async def get_comment(self, blog_id: UUID, comment_id: UUID) -> CommentDB | None:
        """
        Get a comment addressed within its blog.

        Args:
            blog_id: Parent blog UUID
            comment_id: Comment UUID

        Returns:
            CommentDB | None: Comment if it exists on that blog
        """
        result = await self.session.execute(
            select(CommentDB).where(CommentDB.id == comment_id, CommentDB.blog_id == blog_id),
        )
        return result.scalar_one_or_none()

    async def delete_comment(self, comment: CommentDB) -> None:
        """
        Delete a single comment, leaving the rest of its blog untouched.

        Args:
            comment: Comment to delete, as returned by `get_comment`
        """
        await self.session.delete(comment)
        await self._flush()

    async def list_blogs(
        self,
        conditions: Sequence[ColumnElement[bool]],
        order_by: Sequence[Any],
        skip: int,
        limit: int,
    ) -> tuple[list[BlogDB], int]:
        """
        Run a listing query.

        Args:
            conditions: AND-ed filter conditions
            order_by: ORDER BY clauses
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            tuple[list[BlogDB], int]: The page of blogs and the total match count
        """
        page = await self.session.execute(
            select(BlogDB).where(*conditions).order_by(*order_by).offset(skip).limit(limit),
        )
        total = await self.session.execute(
            select(func.count()).select_from(BlogDB).where(*conditions),
        )
        return list(page.scalars().all()), total.scalar() or 0

    async def distinct_tags(self) -> list[str]:
        """
        Get every tag used by any blog, regardless of status or owner.

        Returns:
            list[str]: Sorted distinct tag names
        """
        result = await self.session.execute(
            select(distinct(BlogTagDB.name)).order_by(BlogTagDB.name),
        )
        return list(result.scalars().all())

    async def stats(self, author_id: UUID | None = None) -> BlogStatsRow:
        """
        Aggregate counters over all blogs, or over one owner's blogs.

        Likes and comments are summed per blog, not de-duplicated by user.

        Args:
            author_id: Owner to restrict to; None means every blog

        Returns:
            BlogStatsRow: Aggregated counters
        """
        scope = [BlogDB.author_id == author_id] if author_id is not None else []

        totals = await self.session.execute(
            select(
                func.count(BlogDB.id),
                func.coalesce(func.sum(case((BlogDB.status == "published", 1), else_=0)), 0),
                func.coalesce(func.sum(case((BlogDB.status == "draft", 1), else_=0)), 0),
                func.coalesce(func.sum(BlogDB.views), 0),
            ).where(*scope),
        )
        total_blogs, published, drafts, views = totals.one()

        likes = await self.session.execute(
            select(func.count())
            .select_from(BlogLikeDB)
            .join(BlogDB, BlogLikeDB.blog_id == BlogDB.id)
            .where(*scope),
        )
        comments = await self.session.execute(
            select(func.count())
            .select_from(CommentDB)
            .join(BlogDB, CommentDB.blog_id == BlogDB.id)
            .where(*scope),
        )

        return BlogStatsRow(
            total_blogs=int(total_blogs or 0),
            published_blogs=int(published or 0),
            draft_blogs=int(drafts or 0),
            total_views=int(views or 0),
            total_likes=likes.scalar() or 0,
            total_comments=comments.scalar() or 0,
        )

    @staticmethod
    def _tag_rows(tags: Sequence[str]) -> list[BlogTagDB]:
        return [BlogTagDB(position=position, name=name) for position, name in enumerate(tags)]

    def _insert_ignoring_conflicts(self, **values: Any) -> Any:
        dialect = self.session.get_bind().dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert
        return insert(BlogLikeDB).values(**values).on_conflict_do_nothing()
