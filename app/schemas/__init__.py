from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    TokenData,
)
from app.schemas.blog import (
    BlogCreate,
    BlogFilters,
    BlogListResponse,
    BlogMutationResponse,
    BlogOut,
    BlogPagination,
    BlogStats,
    BlogUpdate,
    CommentCreate,
    CommentOut,
    CommentResponse,
    LikeResponse,
    MessageResponse,
    MyBlogsResponse,
)
from app.schemas.common import HealthCheckResponse
from app.schemas.contact import ContactCreate, ContactResponse
from app.schemas.user import (
    ProfileResponse,
    ProfileUpdate,
    RoleChangeResponse,
    RoleUpdate,
    UserListResponse,
    UserPagination,
    UserPublic,
    UserStatusResponse,
    UserSummary,
)

__all__ = [
    "BlogCreate",
    "BlogFilters",
    "BlogListResponse",
    "BlogMutationResponse",
    "BlogOut",
    "BlogPagination",
    "BlogStats",
    "BlogUpdate",
    "CommentCreate",
    "CommentOut",
    "CommentResponse",
    "ContactCreate",
    "ContactResponse",
    "HealthCheckResponse",
    "LikeResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "MyBlogsResponse",
    "ProfileResponse",
    "ProfileUpdate",
    "RoleChangeResponse",
    "RoleUpdate",
    "SignupRequest",
    "SignupResponse",
    "TokenData",
    "UserListResponse",
    "UserPagination",
    "UserPublic",
    "UserStatusResponse",
    "UserSummary",
]
