"""Tests for blog listing, statistics and mutations."""

from asyncio import gather
from collections.abc import AsyncGenerator
from math import ceil
from pathlib import Path
from uuid import UUID, uuid4

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from app.errors import BlogNotFoundError, CommentNotFoundError, ForbiddenError, ValidationError
from app.db import create_session_maker
from app.models import BlogDB, CommentDB, UserDB
from app.repositories import BlogRepository
from app.schemas.blog import BlogCreate, BlogUpdate
from app.services import BlogListQuery, BlogService


async def make_blog(
    service: BlogService,
    owner: UserDB,
    title: str = "Title",
    *,
    summary: str = "Summary",
    content: str = "Content",
    tags: list[str] | None = None,
    status: str = "published",
) -> BlogDB:
    payload = BlogCreate(
        title=title,
        summary=summary,
        content=content,
        tags=tags or [],
        status=status,
    )
    return await service.create_blog(owner.id, payload)


class TestCreateBlog:
    """Test cases for blog creation."""

    async def test_tags_are_trimmed_and_lowercased_but_not_deduplicated(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        blog = await make_blog(
            blog_service,
            author,
            "A",
            summary="B",
            content="C",
            tags=["Tag1", " tag1 "],
        )

        assert blog.tags == ["tag1", "tag1"]

    async def test_empty_tags_are_dropped(self, blog_service: BlogService, author: UserDB) -> None:
        blog = await make_blog(blog_service, author, tags=["  ", "", "Python"])

        assert blog.tags == ["python"]

    async def test_defaults(self, blog_service: BlogService, author: UserDB) -> None:
        blog = await blog_service.create_blog(
            author.id,
            BlogCreate(title="  Hello  ", summary="Sum", content="Body"),
        )

        assert blog.title == "Hello"
        assert blog.status == "published"
        assert blog.views == 0
        assert blog.likes_count == 0
        assert blog.comments_count == 0
        assert blog.author is not None
        assert blog.author.id == author.id

    @pytest.mark.parametrize(
        "payload",
        [
            {"summary": "S", "content": "C"},
            {"title": "T", "content": "C"},
            {"title": "T", "summary": "S"},
            {"title": "   ", "summary": "S", "content": "C"},
        ],
    )
    async def test_required_fields(
        self,
        blog_service: BlogService,
        author: UserDB,
        payload: dict[str, str],
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await blog_service.create_blog(author.id, BlogCreate(**payload))

        assert exc_info.value.detail == "Title, summary, and content are required"


class TestListBlogs:
    """Test cases for the public listing."""

    async def test_pages_concatenate_to_full_result_without_duplicates(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        created = [await make_blog(blog_service, author, f"Post {i}") for i in range(7)]
        limit = 3

        first = await blog_service.list_blogs(BlogListQuery(page=1, limit=limit))
        pages = ceil(first.total / limit)
        seen = []
        for page in range(1, pages + 1):
            result = await blog_service.list_blogs(BlogListQuery(page=page, limit=limit))
            seen.extend(blog.id for blog in result.blogs)

        assert first.total == len(created)
        assert first.total_pages == pages
        assert len(seen) == len(created)
        assert len(set(seen)) == len(created)

    async def test_has_more(self, blog_service: BlogService, author: UserDB) -> None:
        for i in range(3):
            await make_blog(blog_service, author, f"Post {i}")

        first = await blog_service.list_blogs(BlogListQuery(page=1, limit=2))
        last = await blog_service.list_blogs(BlogListQuery(page=2, limit=2))

        assert first.has_more is True
        assert last.has_more is False
        assert len(last.blogs) == 1

    async def test_default_status_is_published(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        await make_blog(blog_service, author, "Live")
        await make_blog(blog_service, author, "Hidden", status="draft")

        published = await blog_service.list_blogs(BlogListQuery())
        drafts = await blog_service.list_blogs(BlogListQuery(status="draft"))

        assert [b.title for b in published.blogs] == ["Live"]
        assert [b.title for b in drafts.blogs] == ["Hidden"]

    async def test_tag_filter_is_case_insensitive(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        await make_blog(blog_service, author, "Tagged", tags=["Python", "web"])
        await make_blog(blog_service, author, "Other", tags=["rust"])

        result = await blog_service.list_blogs(BlogListQuery(tag="PYTHON"))

        assert [b.title for b in result.blogs] == ["Tagged"]
        assert all("python" in b.tags for b in result.blogs)

    async def test_available_tags_ignore_filters(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        await make_blog(blog_service, author, "One", tags=["b", "a"])
        await make_blog(blog_service, author, "Two", tags=["c"], status="draft")

        result = await blog_service.list_blogs(BlogListQuery(tag="a"))

        assert result.available_tags == ["a", "b", "c"]
        assert result.current_tag == "a"

    async def test_search_matches_title_summary_or_content(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        await make_blog(blog_service, author, "Foo in title")
        await make_blog(blog_service, author, "Second", summary="has FOO here")
        await make_blog(blog_service, author, "Third", content="deep foo content")
        await make_blog(blog_service, author, "Unrelated", summary="nothing", content="nope")

        result = await blog_service.list_blogs(BlogListQuery(search="foo"))

        titles = {b.title for b in result.blogs}
        assert titles == {"Foo in title", "Second", "Third"}
        assert result.current_search == "foo"

    async def test_search_treats_wildcards_literally(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        await make_blog(blog_service, author, "100% sure")
        await make_blog(blog_service, author, "100 percent")

        result = await blog_service.list_blogs(BlogListQuery(search="100%"))

        assert [b.title for b in result.blogs] == ["100% sure"]

    async def test_sort_by_title_ascending(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        for title in ("Banana", "Apple", "Cherry"):
            await make_blog(blog_service, author, title)

        result = await blog_service.list_blogs(BlogListQuery(sort_by="title", order="asc"))

        assert [b.title for b in result.blogs] == ["Apple", "Banana", "Cherry"]

    async def test_unknown_sort_field_falls_back_to_newest_first(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        for title in ("First", "Second", "Third"):
            await make_blog(blog_service, author, title)

        fallback = await blog_service.list_blogs(BlogListQuery(sort_by="nonsense"))
        default = await blog_service.list_blogs(BlogListQuery())

        assert [b.id for b in fallback.blogs] == [b.id for b in default.blogs]

    async def test_order_is_stable_across_calls(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        for _ in range(5):
            await make_blog(blog_service, author, "Same title")

        query = BlogListQuery(sort_by="title", order="asc", limit=2)
        first = [b.id for b in (await blog_service.list_blogs(query)).blogs]
        second = [b.id for b in (await blog_service.list_blogs(query)).blogs]

        assert first == second


class TestMyBlogsAndStats:
    """Test cases for owner-scoped listing and aggregate stats."""

    async def test_my_blogs_include_every_status(
        self,
        blog_service: BlogService,
        author: UserDB,
        other_user: UserDB,
    ) -> None:
        await make_blog(blog_service, author, "Mine", status="draft")
        await make_blog(blog_service, author, "Mine too")
        await make_blog(blog_service, other_user, "Theirs")

        result = await blog_service.get_my_blogs(author.id)
        drafts = await blog_service.get_my_blogs(author.id, status="draft")

        assert {b.title for b in result.blogs} == {"Mine", "Mine too"}
        assert result.total == 2
        assert [b.title for b in drafts.blogs] == ["Mine"]

    async def test_stats_scope_by_role(
        self,
        blog_service: BlogService,
        author: UserDB,
        other_user: UserDB,
        admin_user: UserDB,
    ) -> None:
        mine = await make_blog(blog_service, author, "Mine")
        await make_blog(blog_service, author, "Draft", status="draft")
        theirs = await make_blog(blog_service, other_user, "Theirs")
        await blog_service.get_blog(mine.id)
        await blog_service.get_blog(theirs.id)
        await blog_service.toggle_like(other_user.id, mine.id)
        await blog_service.toggle_like(author.id, mine.id)
        await blog_service.add_comment(other_user.id, theirs.id, "Nice")

        own = await blog_service.get_blog_stats(author.id, author.role)
        everything = await blog_service.get_blog_stats(admin_user.id, admin_user.role)

        assert own.total_blogs == 2
        assert own.published_blogs == 1
        assert own.draft_blogs == 1
        assert own.total_views == 1
        assert own.total_likes == 2
        assert own.total_comments == 0
        assert everything.total_blogs == 3
        assert everything.total_views == 2
        assert everything.total_likes == 2
        assert everything.total_comments == 1

    async def test_stats_without_blogs_are_zero(
        self,
        blog_service: BlogService,
        other_user: UserDB,
    ) -> None:
        stats = await blog_service.get_blog_stats(other_user.id, other_user.role)

        assert stats.total_blogs == 0
        assert stats.total_views == 0


class TestGetBlog:
    """Test cases for single blog reads."""

    async def test_each_read_counts_one_view(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author)

        first = await blog_service.get_blog(blog.id)
        assert first.views == 1
        second = await blog_service.get_blog(blog.id)
        assert second.views == 2

    async def test_missing_blog(self, blog_service: BlogService) -> None:
        with pytest.raises(BlogNotFoundError):
            await blog_service.get_blog(uuid4())


class TestUpdateAndDelete:
    """Test cases for ownership-gated mutations."""

    async def test_partial_update_keeps_untouched_fields(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author, "Old", tags=["keep"])

        updated = await blog_service.update_blog(
            author.id,
            author.role,
            blog.id,
            BlogUpdate(title="New", summary="   "),
        )

        assert updated.title == "New"
        assert updated.summary == "Summary"
        assert updated.tags == ["keep"]
        assert updated.updated_at is not None

    async def test_update_replaces_tags_and_status(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author, tags=["old"])

        updated = await blog_service.update_blog(
            author.id,
            author.role,
            blog.id,
            BlogUpdate(tags=[" New ", "Other"], status="archived"),
        )

        assert updated.tags == ["new", "other"]
        assert updated.status == "archived"

    async def test_non_owner_cannot_update(
        self,
        blog_service: BlogService,
        author: UserDB,
        other_user: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author)

        with pytest.raises(ForbiddenError) as exc_info:
            await blog_service.update_blog(
                other_user.id,
                other_user.role,
                blog.id,
                BlogUpdate(title="Hijacked"),
            )

        assert exc_info.value.detail == "Not authorized to edit this blog"

    async def test_admin_can_update_any_blog(
        self,
        blog_service: BlogService,
        author: UserDB,
        admin_user: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author)

        updated = await blog_service.update_blog(
            admin_user.id,
            admin_user.role,
            blog.id,
            BlogUpdate(status="draft"),
        )

        assert updated.status == "draft"

    async def test_delete_removes_blog_and_comments(
        self,
        blog_service: BlogService,
        session: AsyncSession,
        author: UserDB,
        other_user: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author)
        await blog_service.add_comment(other_user.id, blog.id, "First!")
        await blog_service.toggle_like(other_user.id, blog.id)

        await blog_service.delete_blog(author.id, author.role, blog.id)

        with pytest.raises(BlogNotFoundError):
            await blog_service.get_blog(blog.id)
        remaining = await session.execute(select(func.count()).select_from(CommentDB))
        assert remaining.scalar() == 0

    async def test_non_owner_cannot_delete(
        self,
        blog_service: BlogService,
        author: UserDB,
        other_user: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author)

        with pytest.raises(ForbiddenError):
            await blog_service.delete_blog(other_user.id, other_user.role, blog.id)

    async def test_delete_missing_blog(self, blog_service: BlogService, author: UserDB) -> None:
        with pytest.raises(BlogNotFoundError):
            await blog_service.delete_blog(author.id, author.role, uuid4())


class TestLikes:
    """Test cases for the like toggle."""

    async def test_toggle_twice_restores_state(
        self,
        blog_service: BlogService,
        author: UserDB,
        other_user: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author)

        liked, count = await blog_service.toggle_like(other_user.id, blog.id)
        assert (liked, count) == (True, 1)

        liked, count = await blog_service.toggle_like(other_user.id, blog.id)
        assert (liked, count) == (False, 0)

    async def test_two_users_both_count(
        self,
        blog_service: BlogService,
        author: UserDB,
        other_user: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author)

        await blog_service.toggle_like(author.id, blog.id)
        _, count = await blog_service.toggle_like(other_user.id, blog.id)
        reloaded = await blog_service.get_blog(blog.id)

        assert count == 2
        assert reloaded.likes_count == 2
        assert {like.user_id for like in reloaded.likes} == {author.id, other_user.id}

    async def test_like_missing_blog(self, blog_service: BlogService, author: UserDB) -> None:
        with pytest.raises(BlogNotFoundError):
            await blog_service.toggle_like(author.id, uuid4())


class TestConcurrentLikes:
    """Like toggles racing on separate connections to one database file."""

    @pytest.fixture
    async def file_session_maker(self, tmp_path: Path) -> AsyncGenerator[async_sessionmaker]:
        # BEGIN IMMEDIATE makes each writer wait for the lock instead of failing
        file_engine = create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path / 'likes.db'}",
            connect_args={"isolation_level": "IMMEDIATE", "timeout": 30},
        )
        async with file_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        yield create_session_maker(file_engine)
        await file_engine.dispose()

    async def test_two_users_liking_at_once_both_count(
        self,
        file_session_maker: async_sessionmaker,
    ) -> None:
        async with file_session_maker() as setup:
            alice = UserDB(
                name="Alice",
                username="alice",
                email="alice@example.com",
                password_hash="unused",
            )
            bob = UserDB(
                name="Bob",
                username="bob",
                email="bob@example.com",
                password_hash="unused",
            )
            setup.add_all([alice, bob])
            await setup.commit()
            blog = await make_blog(BlogService(BlogRepository(setup)), alice)
            await setup.commit()

        async def like(user_id: UUID) -> tuple[bool, int]:
            async with file_session_maker() as session:
                result = await BlogService(BlogRepository(session)).toggle_like(user_id, blog.id)
                await session.commit()
                return result

        results = await gather(like(alice.id), like(bob.id))

        assert all(liked for liked, _ in results)
        assert sorted(count for _, count in results) == [1, 2]

        async with file_session_maker() as check:
            reloaded = await BlogRepository(check).get_by_id(blog.id)
        assert reloaded is not None
        assert reloaded.likes_count == 2
        assert {row.user_id for row in reloaded.likes} == {alice.id, bob.id}


class TestComments:
    """Test cases for adding and deleting comments."""

    async def test_add_comment(
        self,
        blog_service: BlogService,
        author: UserDB,
        other_user: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author)

        comment = await blog_service.add_comment(other_user.id, blog.id, "  Great post  ")
        reloaded = await blog_service.get_blog(blog.id)

        assert comment.content == "Great post"
        assert comment.user is not None
        assert comment.user.username == other_user.username
        assert reloaded.comments_count == 1

    async def test_blank_comment_rejected(
        self,
        blog_service: BlogService,
        author: UserDB,
    ) -> None:
        blog = await make_blog(blog_service, author)

        with pytest.raises(ValidationError):
            await blog_service.add_comment(author.id, blog.id, "   ")

    @pytest.mark.parametrize("deleter", ["commenter", "owner", "admin"])
    async def test_allowed_deleters(
        self,
        blog_service: BlogService,
        author: UserDB,
        other_user: UserDB,
        admin_user: UserDB,
        deleter: str,
    ) -> None:
        blog = await make_blog(blog_service, author)
        comment = await blog_service.add_comment(other_user.id, blog.id, "Hi")
        actor = {"commenter": other_user, "owner": author, "admin": admin_user}[deleter]

        await blog_service.delete_comment(actor.id, actor.role, blog.id, comment.id)

        reloaded = await blog_service.get_blog(blog.id)
        assert reloaded.comments_count == 0

    async def test_stranger_cannot_delete_comment(
        self,
        blog_service: BlogService,
        session: AsyncSession,
        author: UserDB,
        other_user: UserDB,
    ) -> None:
        stranger = UserDB(
            name="Eve",
            username="eve",
            email="eve@example.com",
            password_hash="x",
        )
        session.add(stranger)
        await session.flush()
        blog = await make_blog(blog_service, author)
        comment = await blog_service.add_comment(other_user.id, blog.id, "Hi")

        with pytest.raises(ForbiddenError) as exc_info:
            await blog_service.delete_comment(stranger.id, stranger.role, blog.id, comment.id)

        assert exc_info.value.detail == "Not authorized to delete this comment"

    async def test_missing_comment(self, blog_service: BlogService, author: UserDB) -> None:
        blog = await make_blog(blog_service, author)

        with pytest.raises(CommentNotFoundError):
            await blog_service.delete_comment(author.id, author.role, blog.id, uuid4())
