"""Blog service: listing, statistics and ownership-gated mutations."""

from dataclasses import asdict, dataclass, field
from uuid import UUID

from app.auth.permissions import can_delete_comment, can_mutate, is_admin
from app.configs.settings import DEFAULT_PAGE_SIZE
from app.errors import (
    BlogNotFoundError,
    CommentNotFoundError,
    ForbiddenError,
    ValidationError,
)
from app.models import BlogDB, CommentDB
from app.monitoring import get_logger
from app.repositories import BlogRepository, build_blog_filters, normalize_tags, resolve_sort
from app.schemas.blog import BlogCreate, BlogStats, BlogUpdate
from app.utils.helpers import total_pages

logger = get_logger(__name__)

REQUIRED_FIELDS_MESSAGE = "Title, summary, and content are required"
COMMENT_REQUIRED_MESSAGE = "Comment content is required"


@dataclass(frozen=True)
class BlogListQuery:
    """Parameters of a public blog listing."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    tag: str | None = None
    search: str | None = None
    status: str | None = "published"
    sort_by: str | None = None
    order: str | None = "desc"

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class BlogPage:
    """One page of blogs plus the numbers needed to render pagination."""

    blogs: list[BlogDB]
    total: int
    page: int
    limit: int
    available_tags: list[str] = field(default_factory=list)
    current_tag: str | None = None
    current_search: str | None = None

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)

    @property
    def has_more(self) -> bool:
        return (self.page - 1) * self.limit + len(self.blogs) < self.total


def _trimmed(value: str | None) -> str:
    return value.strip() if value else ""


class BlogService:
    """
    Service for blog reads and writes.

    Every write that targets an existing blog loads it first (404 when
    absent), then asks the permission functions (403 when refused).
    """

    def __init__(self, repo: BlogRepository) -> None:
        self.repo = repo

    async def list_blogs(self, query: BlogListQuery) -> BlogPage:
        """
        List blogs matching filters, search and sort.

        Args:
            query: Listing parameters

        Returns:
            BlogPage: Requested page with total count and all known tags
        """
        conditions = build_blog_filters(
            status=query.status,
            tag=query.tag,
            search=query.search,
        )
        order_by = resolve_sort(query.sort_by, query.order)
        blogs, total = await self.repo.list_blogs(conditions, order_by, query.skip, query.limit)

        return BlogPage(
            blogs=blogs,
            total=total,
            page=query.page,
            limit=query.limit,
            available_tags=await self.repo.distinct_tags(),
            current_tag=query.tag,
            current_search=query.search,
        )

    async def get_my_blogs(
        self,
        actor_id: UUID,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        status: str | None = None,
    ) -> BlogPage:
        """
        List the caller's own blogs, newest first.

        Args:
            actor_id: Caller id
            page: 1-based page number
            limit: Page size
            status: Optional status filter; all statuses when omitted

        Returns:
            BlogPage: Requested page of the caller's blogs
        """
        conditions = build_blog_filters(status=status, author_id=actor_id)
        order_by = resolve_sort("createdAt", "desc")
        blogs, total = await self.repo.list_blogs(conditions, order_by, (page - 1) * limit, limit)
        return BlogPage(blogs=blogs, total=total, page=page, limit=limit)

    async def get_blog_stats(self, actor_id: UUID, actor_role: str) -> BlogStats:
        """
        Aggregate blog counters: every blog for admins, own blogs otherwise.

        Args:
            actor_id: Caller id
            actor_role: Caller role

        Returns:
            BlogStats: Aggregated counters
        """
        row = await self.repo.stats(None if is_admin(actor_role) else actor_id)
        return BlogStats(**asdict(row))

    async def get_blog(self, blog_id: UUID) -> BlogDB:
        """
        Fetch a blog, counting the read as one view.

        Args:
            blog_id: Blog UUID

        Returns:
            BlogDB: Blog with the incremented view count

        Raises:
            BlogNotFoundError: If the blog does not exist
        """
        if not await self.repo.increment_view_count(blog_id):
            raise BlogNotFoundError
        return await self.repo.get_or_raise(blog_id, BlogNotFoundError)

    async def create_blog(self, actor_id: UUID, payload: BlogCreate) -> BlogDB:
        """
        Create a blog owned by the caller.

        Args:
            actor_id: Owner id
            payload: Submitted fields

        Returns:
            BlogDB: Created blog

        Raises:
            ValidationError: If title, summary or content is missing or blank
        """
        title = _trimmed(payload.title)
        summary = _trimmed(payload.summary)
        content = _trimmed(payload.content)
        if not (title and summary and content):
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        blog = await self.repo.create(
            author_id=actor_id,
            title=title,
            summary=summary,
            content=content,
            tags=normalize_tags(payload.tags or []),
            image=payload.image,
            status=payload.status,
        )
        logger.info(f"Blog {blog.id} created by user {actor_id}")
        return blog

    async def update_blog(
        self,
        actor_id: UUID,
        actor_role: str,
        blog_id: UUID,
        payload: BlogUpdate,
    ) -> BlogDB:
        """
        Partially update a blog.

        Blank title, summary or content leave the stored value unchanged;
        tags are replaced only when supplied.

        Args:
            actor_id: Caller id
            actor_role: Caller role
            blog_id: Blog UUID
            payload: Submitted fields

        Returns:
            BlogDB: Updated blog

        Raises:
            BlogNotFoundError: If the blog does not exist
            ForbiddenError: If the caller is neither owner nor admin
        """
        blog = await self.repo.get_or_raise(blog_id, BlogNotFoundError)
        if not can_mutate(actor_id, actor_role, blog.author_id):
            raise ForbiddenError("Not authorized to edit this blog")

        changes: dict[str, object] = {}
        for name in ("title", "summary", "content"):
            if value := _trimmed(getattr(payload, name)):
                changes[name] = value
        if payload.tags is not None:
            changes["tags"] = normalize_tags(payload.tags)
        if "image" in payload.model_fields_set:
            changes["image"] = payload.image
        if payload.status is not None:
            changes["status"] = payload.status

        return await self.repo.update(blog, changes)

    async def delete_blog(self, actor_id: UUID, actor_role: str, blog_id: UUID) -> None:
        """
        Delete a blog with its tags, likes and comments.

        Raises:
            BlogNotFoundError: If the blog does not exist
            ForbiddenError: If the caller is neither owner nor admin
        """
        blog = await self.repo.get_or_raise(blog_id, BlogNotFoundError)
        if not can_mutate(actor_id, actor_role, blog.author_id):
            raise ForbiddenError("Not authorized to delete this blog")

        await self.repo.delete(blog)
        logger.info(f"Blog {blog_id} deleted by user {actor_id}")

    async def toggle_like(self, actor_id: UUID, blog_id: UUID) -> tuple[bool, int]:
        """
        Like the blog if the caller has not yet, otherwise remove the like.

        Returns:
            tuple[bool, int]: New liked state and like count

        Raises:
            BlogNotFoundError: If the blog does not exist
        """
        await self.repo.get_or_raise(blog_id, BlogNotFoundError)
        return await self.repo.toggle_like(blog_id, actor_id)

    async def add_comment(self, actor_id: UUID, blog_id: UUID, content: str | None) -> CommentDB:
        """
        Append a comment written by the caller.

        Raises:
            ValidationError: If content is blank
            BlogNotFoundError: If the blog does not exist
        """
        text = _trimmed(content)
        if not text:
            raise ValidationError(COMMENT_REQUIRED_MESSAGE)

        await self.repo.get_or_raise(blog_id, BlogNotFoundError)
        return await self.repo.add_comment(blog_id, actor_id, text)

    async def delete_comment(
        self,
        actor_id: UUID,
        actor_role: str,
        blog_id: UUID,
        comment_id: UUID,
    ) -> None:
        """
        Remove one comment from a blog.

        Allowed for the comment author, the blog owner and admins.

        Raises:
            BlogNotFoundError: If the blog does not exist
            CommentNotFoundError: If the blog has no such comment
            ForbiddenError: If the caller may not delete it
        """
        blog = await self.repo.get_or_raise(blog_id, BlogNotFoundError)
        comment = await self.repo.get_comment(blog_id, comment_id)
        if comment is None:
            raise CommentNotFoundError
        if not can_delete_comment(actor_id, actor_role, blog.author_id, comment.user_id):
            raise ForbiddenError("Not authorized to delete this comment")

        await self.repo.delete_comment(comment)
