# app/dependencies/dependencies.py

"""Application dependencies: authentication, repositories, services and query parsing."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.permissions import is_admin
from app.configs.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.db import get_session
from app.errors import (
    AdminRequiredError,
    InvalidTokenError,
    MissingTokenError,
    UserDeactivatedError,
    UserNoLongerExistsError,
)
from app.managers.token_manager import decode_access_token
from app.models import UserDB
from app.repositories import BlogRepository, ContactRepository, UserRepository
from app.schemas.blog import BlogStatus
from app.services import AuthService, BlogListQuery, BlogService, ContactService, UserService

# auto_error is off so a missing header raises our own 401 instead of FastAPI's
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_blog_repository(session: SessionDep) -> BlogRepository:
    """
    Resolve the `BlogRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    BlogRepository
        Repository instance bound to the session.
    """
    return BlogRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]


async def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    user_repo: UserRepoDep,
) -> UserDB:
    """
    Get current authenticated user using user_id from token claims.

    The user row is re-read on every request, so role changes and
    deactivations take effect immediately regardless of the token's claims.

    Parameters
    ----------
    token : str | None
        Bearer token, None when the header is absent.
    user_repo : UserRepository
        User repository.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    MissingTokenError
        If no bearer token was sent.
    InvalidTokenError
        If the token is malformed, forged or expired.
    UserNoLongerExistsError
        If the token's subject was removed.
    UserDeactivatedError
        If the account was deactivated.
    """
    if not token:
        raise MissingTokenError

    token_data = decode_access_token(token)
    if not token_data:
        raise InvalidTokenError

    user = await user_repo.get_by_id(token_data.user_id)
    if not user:
        raise UserNoLongerExistsError
    if not user.is_active:
        raise UserDeactivatedError

    return user


async def get_optional_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    user_repo: UserRepoDep,
) -> UserDB | None:
    """
    Resolve the caller when a valid token is present, otherwise None.

    Parameters
    ----------
    token : str | None
        Bearer token, if any.
    user_repo : UserRepository
        User repository.

    Returns
    -------
    UserDB | None
        Active user named by the token, or None.
    """
    if not token or not (token_data := decode_access_token(token)):
        return None
    return await user_repo.get_active_or_none(token_data.user_id)


async def require_admin(
    user: Annotated[UserDB, Depends(get_current_user)],
) -> UserDB:
    """
    Dependency that requires admin role.

    Parameters
    ----------
    user : UserDB
        Current authenticated user.

    Returns
    -------
    UserDB
        The user if they have admin role.

    Raises
    ------
    AdminRequiredError
        If user is not an admin.
    """
    if not is_admin(user.role):
        raise AdminRequiredError
    return user


UserDBDep = Annotated[UserDB, Depends(get_current_user)]
OptionalUserDep = Annotated[UserDB | None, Depends(get_optional_user)]
AdminUserDep = Annotated[UserDB, Depends(require_admin)]


def get_auth_service(user_repo: UserRepoDep) -> AuthService:
    return AuthService(user_repo)


def get_user_service(user_repo: UserRepoDep) -> UserService:
    return UserService(user_repo)


def get_blog_service(blog_repo: BlogRepoDep) -> BlogService:
    return BlogService(blog_repo)


def get_contact_service(session: SessionDep) -> ContactService:
    return ContactService(ContactRepository(session))


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]
ContactServiceDep = Annotated[ContactService, Depends(get_contact_service)]


@dataclass(frozen=True)
class PageQuery:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


def get_page_query(
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Maximum number of records to return"),
    ] = DEFAULT_PAGE_SIZE,
) -> PageQuery:
    return PageQuery(page=page, limit=limit)


PageQueryDep = Annotated[PageQuery, Depends(get_page_query)]


def get_blog_list_query(
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=MAX_PAGE_SIZE, description="Maximum number of records to return"),
    ] = DEFAULT_PAGE_SIZE,
    tag: Annotated[str | None, Query(description="Only blogs carrying this tag")] = None,
    search: Annotated[
        str | None,
        Query(description="Case-insensitive text in title, summary or content"),
    ] = None,
    status: Annotated[BlogStatus, Query(description="Status filter")] = "published",
    sort_by: Annotated[
        str | None,
        Query(alias="sortBy", description="createdAt, updatedAt, title, views or status"),
    ] = None,
    order: Annotated[str | None, Query(description="asc or desc")] = "desc",
) -> BlogListQuery:
    """
    Dependency to construct `BlogListQuery` from query parameters.

    Returns
    -------
    BlogListQuery
        Aggregated query parameters object.
    """
    return BlogListQuery(
        page=page,
        limit=limit,
        tag=tag or None,
        search=search or None,
        status=status,
        sort_by=sort_by,
        order=order,
    )


BlogQueryListDep = Annotated[BlogListQuery, Depends(get_blog_list_query)]
