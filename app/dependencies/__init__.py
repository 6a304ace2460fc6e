# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AdminUserDep,
    AuthServiceDep,
    BlogQueryListDep,
    BlogRepoDep,
    BlogServiceDep,
    ContactServiceDep,
    OptionalUserDep,
    PageQuery,
    PageQueryDep,
    UserDBDep,
    UserRepoDep,
    UserServiceDep,
    get_current_user,
    get_optional_user,
    oauth2_scheme,
    require_admin,
)

__all__ = [
    "AdminUserDep",
    "AuthServiceDep",
    "BlogQueryListDep",
    "BlogRepoDep",
    "BlogServiceDep",
    "ContactServiceDep",
    "OptionalUserDep",
    "PageQuery",
    "PageQueryDep",
    "UserDBDep",
    "UserRepoDep",
    "UserServiceDep",
    "get_current_user",
    "get_optional_user",
    "oauth2_scheme",
    "require_admin",
]
