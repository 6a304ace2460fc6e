# app/routes/user.py

"""
User Routes.

Profile self-service for the authenticated caller and account administration
for admins.

Summary
-------
Endpoints include:
  - Get own profile
  - Update own profile
  - List users (admin)
  - Toggle user active status (admin)
  - Change user role (admin)

Dependencies
------------
  - `UserDBDep`: the authenticated caller, re-read from the database.
  - `AdminUserDep`: the caller, additionally required to hold the admin role.
"""

from uuid import UUID

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from app.dependencies import AdminUserDep, PageQueryDep, UserDBDep, UserServiceDep
from app.schemas.user import (
    ProfileResponse,
    ProfileUpdate,
    RoleChangeResponse,
    RoleUpdate,
    UserListResponse,
    UserPagination,
    UserPublic,
    UserStatus,
    UserStatusResponse,
)

router = APIRouter(prefix="/api/auth", tags=["👤 Users"])

UNAUTHENTICATED = {
    "description": "Unauthorized",
    "content": {"application/json": {"example": {"detail": "Access token required"}}},
}
ADMIN_ONLY = {
    "description": "Forbidden",
    "content": {"application/json": {"example": {"detail": "Admin access required"}}},
}
USER_NOT_FOUND = {
    "description": "Not Found",
    "content": {"application/json": {"example": {"detail": "User not found"}}},
}


@router.get(
    "/profile",
    response_class=ORJSONResponse,
    response_model=UserPublic,
    summary="Get own profile",
    responses={401: UNAUTHENTICATED},
    operation_id="users_get_profile",
)
async def get_profile(user: UserDBDep) -> UserPublic:
    """
    Return the caller's profile without credential data.

    Parameters
    ----------
    user : UserDB
        Current authenticated user.

    Returns
    -------
    UserPublic
        Caller profile.
    """
    return UserPublic.model_validate(user)


@router.put(
    "/profile",
    response_class=ORJSONResponse,
    response_model=ProfileResponse,
    summary="Update own profile",
    description="Partial update of name, bio and profilePicture.",
    responses={401: UNAUTHENTICATED},
    operation_id="users_update_profile",
)
async def update_profile(
    payload: ProfileUpdate,
    user: UserDBDep,
    user_service: UserServiceDep,
) -> ProfileResponse:
    """
    Update the caller's profile.

    Parameters
    ----------
    payload : ProfileUpdate
        Fields to change.
    user : UserDB
        Current authenticated user.
    user_service : UserService
        User service dependency.

    Returns
    -------
    ProfileResponse
        Confirmation and the updated profile.
    """
    updated = await user_service.update_profile(user, payload)
    return ProfileResponse(user=UserPublic.model_validate(updated))


@router.get(
    "/users",
    response_class=ORJSONResponse,
    response_model=UserListResponse,
    summary="List users",
    description="Paginated list of all accounts, newest first. Admin only.",
    responses={401: UNAUTHENTICATED, 403: ADMIN_ONLY},
    operation_id="users_list",
)
async def list_users(
    admin: AdminUserDep,
    pagination: PageQueryDep,
    user_service: UserServiceDep,
) -> UserListResponse:
    """
    List users.

    Parameters
    ----------
    admin : UserDB
        Current admin user.
    pagination : PageQuery
        Page number and size.
    user_service : UserService
        User service dependency.

    Returns
    -------
    UserListResponse
        Users and pagination info.
    """
    result = await user_service.list_users(pagination.page, pagination.limit)
    return UserListResponse(
        users=[UserPublic.model_validate(u) for u in result.users],
        pagination=UserPagination(
            current_page=result.page,
            total_pages=result.total_pages,
            total_users=result.total,
            has_more=result.has_more,
        ),
    )


@router.patch(
    "/users/{user_id}/status",
    response_class=ORJSONResponse,
    response_model=UserStatusResponse,
    summary="Toggle user status",
    description="Activate a deactivated account or deactivate an active one. Admin only.",
    responses={401: UNAUTHENTICATED, 403: ADMIN_ONLY, 404: USER_NOT_FOUND},
    operation_id="users_toggle_status",
)
async def toggle_user_status(
    user_id: UUID,
    admin: AdminUserDep,
    user_service: UserServiceDep,
) -> UserStatusResponse:
    """
    Flip the active flag of an account.

    Parameters
    ----------
    user_id : UUID
        Target user id.
    admin : UserDB
        Current admin user.
    user_service : UserService
        User service dependency.

    Returns
    -------
    UserStatusResponse
        Confirmation and the new status.
    """
    user = await user_service.toggle_status(admin, user_id)
    state = "activated" if user.is_active else "deactivated"
    return UserStatusResponse(
        message=f"User {state} successfully",
        user=UserStatus.model_validate(user),
    )


@router.patch(
    "/users/{user_id}/role",
    response_class=ORJSONResponse,
    response_model=RoleChangeResponse,
    summary="Change user role",
    responses={
        400: {
            "description": "Bad Request",
            "content": {"application/json": {"example": {"detail": "Invalid role"}}},
        },
        401: UNAUTHENTICATED,
        403: ADMIN_ONLY,
        404: USER_NOT_FOUND,
    },
    operation_id="users_change_role",
)
async def change_user_role(
    user_id: UUID,
    payload: RoleUpdate,
    admin: AdminUserDep,
    user_service: UserServiceDep,
) -> RoleChangeResponse:
    """
    Set the role of an account.

    Parameters
    ----------
    user_id : UUID
        Target user id.
    payload : RoleUpdate
        New role, `user` or `admin`.
    admin : UserDB
        Current admin user.
    user_service : UserService
        User service dependency.

    Returns
    -------
    RoleChangeResponse
        Confirmation and the updated user.
    """
    user = await user_service.change_role(admin, user_id, payload.role)
    return RoleChangeResponse(
        message=f"User role changed to {user.role} successfully",
        user=UserPublic.model_validate(user),
    )
