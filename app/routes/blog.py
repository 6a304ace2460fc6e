# app/routes/blog.py

"""
Blog Routes.

Listing, search and CRUD for blogs, plus likes and comments.

Summary
-------
Endpoints include:
  - List blogs (filters, search, sort, pagination)
  - List own blogs
  - Blog statistics
  - Create blog
  - Get blog by id (counts a view)
  - Update blog
  - Delete blog
  - Toggle like
  - Add comment
  - Delete comment

Routing
-------
`/my` and `/stats` are declared before `/{blog_id}` so they are never parsed
as blog ids.

Authorization
-------------
Unauthenticated callers of protected endpoints get 401; authenticated callers
that are neither the owner nor an admin get 403.
"""

from uuid import UUID

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.dependencies import BlogQueryListDep, BlogServiceDep, PageQueryDep, UserDBDep
from app.models import BlogDB, CommentDB
from app.schemas.blog import (
    BlogAuthor,
    BlogCreate,
    BlogFilters,
    BlogListResponse,
    BlogMutationResponse,
    BlogOut,
    BlogPagination,
    BlogStats,
    BlogStatus,
    BlogUpdate,
    CommentAuthor,
    CommentCreate,
    CommentOut,
    CommentResponse,
    LikeResponse,
    MessageResponse,
    MyBlogsResponse,
)
from app.services import BlogPage

router = APIRouter(prefix="/api/blogs", tags=["📝 Blogs"])

UNAUTHENTICATED = {
    "description": "Unauthorized",
    "content": {"application/json": {"example": {"detail": "Access token required"}}},
}
BLOG_NOT_FOUND = {
    "description": "Not Found",
    "content": {"application/json": {"example": {"detail": "Blog not found"}}},
}


def db_comment_to_response(comment: CommentDB) -> CommentOut:
    """
    Convert a `CommentDB` instance to `CommentOut`.

    Parameters
    ----------
    comment : CommentDB
        Database comment entity with its author loaded.

    Returns
    -------
    CommentOut
        Response model.
    """
    return CommentOut(
        id=comment.id,
        content=comment.content,
        created_at=comment.created_at,
        user=CommentAuthor.model_validate(comment.user) if comment.user else None,
    )


def db_blog_to_response(db_blog: BlogDB) -> BlogOut:
    """
    Convert a `BlogDB` instance to `BlogOut`, deriving like and comment counts.

    Parameters
    ----------
    db_blog : BlogDB
        Database blog entity with relations loaded.

    Returns
    -------
    BlogOut
        Response model.
    """
    return BlogOut(
        id=db_blog.id,
        title=db_blog.title,
        summary=db_blog.summary,
        content=db_blog.content,
        image=db_blog.image,
        tags=db_blog.tags,
        status=db_blog.status,
        views=db_blog.views,
        likes=[like.user_id for like in db_blog.likes],
        likes_count=db_blog.likes_count,
        comments=[db_comment_to_response(c) for c in db_blog.comments],
        comments_count=db_blog.comments_count,
        user=BlogAuthor.model_validate(db_blog.author) if db_blog.author else None,
        created_at=db_blog.created_at,
        updated_at=db_blog.updated_at,
    )


def page_to_pagination(page: BlogPage) -> BlogPagination:
    return BlogPagination(
        current_page=page.page,
        total_pages=page.total_pages,
        total_blogs=page.total,
        has_more=page.has_more,
    )


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=BlogListResponse,
    summary="List blogs",
    description=(
        "Filter by status (default `published`) and tag, search title, summary and content, "
        "sort by `sortBy`/`order` and paginate."
    ),
    operation_id="blogs_list",
)
async def list_blogs(query: BlogQueryListDep, blog_service: BlogServiceDep) -> BlogListResponse:
    """
    List blogs with filters.

    Parameters
    ----------
    query : BlogListQuery
        Parsed listing parameters.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogListResponse
        Page of blogs, pagination info and filter options.
    """
    page = await blog_service.list_blogs(query)
    return BlogListResponse(
        blogs=[db_blog_to_response(b) for b in page.blogs],
        pagination=page_to_pagination(page),
        filters=BlogFilters(
            available_tags=page.available_tags,
            current_tag=page.current_tag,
            current_search=page.current_search,
        ),
    )


@router.get(
    "/my",
    response_class=ORJSONResponse,
    response_model=MyBlogsResponse,
    summary="List own blogs",
    description="The caller's blogs of any status (or the given one), newest first.",
    responses={401: UNAUTHENTICATED},
    operation_id="blogs_list_mine",
)
async def list_my_blogs(
    user: UserDBDep,
    pagination: PageQueryDep,
    blog_service: BlogServiceDep,
    status: BlogStatus | None = None,
) -> MyBlogsResponse:
    """
    List the caller's blogs.

    Parameters
    ----------
    user : UserDB
        Current authenticated user.
    pagination : PageQuery
        Page number and size.
    blog_service : BlogService
        Blog service dependency.
    status : BlogStatus | None
        Optional status filter.

    Returns
    -------
    MyBlogsResponse
        Page of blogs and pagination info.
    """
    page = await blog_service.get_my_blogs(user.id, pagination.page, pagination.limit, status)
    return MyBlogsResponse(
        blogs=[db_blog_to_response(b) for b in page.blogs],
        pagination=page_to_pagination(page),
    )


@router.get(
    "/stats",
    response_class=ORJSONResponse,
    response_model=BlogStats,
    summary="Blog statistics",
    description="Counters over all blogs for admins, over the caller's own blogs otherwise.",
    responses={401: UNAUTHENTICATED},
    operation_id="blogs_stats",
)
async def get_blog_stats(user: UserDBDep, blog_service: BlogServiceDep) -> BlogStats:
    """
    Aggregate blog counters.

    Parameters
    ----------
    user : UserDB
        Current authenticated user.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogStats
        Blog, view, like and comment totals.
    """
    return await blog_service.get_blog_stats(user.id, user.role)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogMutationResponse,
    status_code=HTTP_201_CREATED,
    summary="Create blog",
    responses={
        400: {
            "description": "Bad Request",
            "content": {
                "application/json": {
                    "example": {"detail": "Title, summary, and content are required"},
                },
            },
        },
        401: UNAUTHENTICATED,
    },
    operation_id="blogs_create",
)
async def create_blog(
    payload: BlogCreate,
    user: UserDBDep,
    blog_service: BlogServiceDep,
) -> BlogMutationResponse:
    """
    Create a blog owned by the caller.

    Parameters
    ----------
    payload : BlogCreate
        Blog fields.
    user : UserDB
        Current authenticated user.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogMutationResponse
        Confirmation and the created blog.
    """
    blog = await blog_service.create_blog(user.id, payload)
    return BlogMutationResponse(message="Blog created successfully", blog=db_blog_to_response(blog))


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogOut,
    summary="Get blog by id",
    description="Every successful fetch increments the view counter by one.",
    responses={404: BLOG_NOT_FOUND},
    operation_id="blogs_get",
)
async def get_blog(blog_id: UUID, blog_service: BlogServiceDep) -> BlogOut:
    """
    Get a blog and count the view.

    Parameters
    ----------
    blog_id : UUID
        Blog id.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogOut
        The blog.
    """
    return db_blog_to_response(await blog_service.get_blog(blog_id))


@router.put(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogMutationResponse,
    summary="Update blog",
    description="Partial update. Owner or admin only.",
    responses={
        401: UNAUTHENTICATED,
        403: {
            "description": "Forbidden",
            "content": {
                "application/json": {"example": {"detail": "Not authorized to edit this blog"}},
            },
        },
        404: BLOG_NOT_FOUND,
    },
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: UUID,
    payload: BlogUpdate,
    user: UserDBDep,
    blog_service: BlogServiceDep,
) -> BlogMutationResponse:
    """
    Update a blog.

    Parameters
    ----------
    blog_id : UUID
        Blog id.
    payload : BlogUpdate
        Fields to change.
    user : UserDB
        Current authenticated user.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogMutationResponse
        Confirmation and the updated blog.
    """
    blog = await blog_service.update_blog(user.id, user.role, blog_id, payload)
    return BlogMutationResponse(message="Blog updated successfully", blog=db_blog_to_response(blog))


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete blog",
    description="Deletes the blog with its likes and comments. Owner or admin only.",
    responses={
        401: UNAUTHENTICATED,
        403: {
            "description": "Forbidden",
            "content": {
                "application/json": {"example": {"detail": "Not authorized to delete this blog"}},
            },
        },
        404: BLOG_NOT_FOUND,
    },
    operation_id="blogs_delete",
)
async def delete_blog(
    blog_id: UUID,
    user: UserDBDep,
    blog_service: BlogServiceDep,
) -> MessageResponse:
    """
    Delete a blog.

    Parameters
    ----------
    blog_id : UUID
        Blog id.
    user : UserDB
        Current authenticated user.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    MessageResponse
        Confirmation.
    """
    await blog_service.delete_blog(user.id, user.role, blog_id)
    return MessageResponse(message="Blog deleted successfully")


@router.post(
    "/{blog_id}/like",
    response_class=ORJSONResponse,
    response_model=LikeResponse,
    summary="Toggle like",
    responses={401: UNAUTHENTICATED, 404: BLOG_NOT_FOUND},
    operation_id="blogs_toggle_like",
)
async def toggle_like(blog_id: UUID, user: UserDBDep, blog_service: BlogServiceDep) -> LikeResponse:
    """
    Like a blog, or remove the caller's like.

    Parameters
    ----------
    blog_id : UUID
        Blog id.
    user : UserDB
        Current authenticated user.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    LikeResponse
        New liked state and like count.
    """
    liked, likes_count = await blog_service.toggle_like(user.id, blog_id)
    return LikeResponse(
        message="Blog liked" if liked else "Blog unliked",
        liked=liked,
        likes_count=likes_count,
    )


@router.post(
    "/{blog_id}/comments",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    status_code=HTTP_201_CREATED,
    summary="Add comment",
    responses={
        400: {
            "description": "Bad Request",
            "content": {"application/json": {"example": {"detail": "Comment content is required"}}},
        },
        401: UNAUTHENTICATED,
        404: BLOG_NOT_FOUND,
    },
    operation_id="blogs_add_comment",
)
async def add_comment(
    blog_id: UUID,
    payload: CommentCreate,
    user: UserDBDep,
    blog_service: BlogServiceDep,
) -> CommentResponse:
    """
    Comment on a blog.

    Parameters
    ----------
    blog_id : UUID
        Blog id.
    payload : CommentCreate
        Comment text.
    user : UserDB
        Current authenticated user.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    CommentResponse
        Confirmation and the new comment.
    """
    comment = await blog_service.add_comment(user.id, blog_id, payload.content)
    return CommentResponse(comment=db_comment_to_response(comment))


@router.delete(
    "/{blog_id}/comments/{comment_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete comment",
    description="Allowed for the comment author, the blog owner and admins.",
    responses={
        401: UNAUTHENTICATED,
        403: {
            "description": "Forbidden",
            "content": {
                "application/json": {
                    "example": {"detail": "Not authorized to delete this comment"},
                },
            },
        },
        404: {
            "description": "Not Found",
            "content": {"application/json": {"example": {"detail": "Comment not found"}}},
        },
    },
    operation_id="blogs_delete_comment",
)
async def delete_comment(
    blog_id: UUID,
    comment_id: UUID,
    user: UserDBDep,
    blog_service: BlogServiceDep,
) -> MessageResponse:
    """
    Delete a comment.

    Parameters
    ----------
    blog_id : UUID
        Blog id.
    comment_id : UUID
        Comment id.
    user : UserDB
        Current authenticated user.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    MessageResponse
        Confirmation.
    """
    await blog_service.delete_comment(user.id, user.role, blog_id, comment_id)
    return MessageResponse(message="Comment deleted successfully")
