"""Authentication routes for handling user signup and login."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.configs import settings
from app.dependencies import AuthServiceDep
from app.managers import limiter
from app.schemas.auth import LoginRequest, LoginResponse, SignupRequest, SignupResponse
from app.schemas.user import UserSummary

router = APIRouter(prefix="/api/auth", tags=["🔐 Auth"])

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded: 5 per 1 hour"}}},
}


@router.post(
    "/signup",
    response_class=ORJSONResponse,
    response_model=SignupResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create a new account. New accounts always get the `user` role.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "User created successfully",
                        "user": {
                            "id": "123e4567-e89b-12d3-a456-426614174000",
                            "name": "Jane Doe",
                            "email": "jane@example.com",
                            "username": "janedoe",
                            "role": "user",
                        },
                    },
                },
            },
        },
        400: {
            "description": "Bad Request",
            "content": {
                "application/json": {
                    "example": {"detail": "Password must be at least 6 characters"},
                },
            },
        },
        409: {
            "description": "Conflict",
            "content": {"application/json": {"example": {"detail": "Username already exists"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="auth_signup",
)
@limiter.limit(settings.SIGNUP_RATE_LIMIT)
async def signup(
    request: Request,
    payload: SignupRequest,
    auth_service: AuthServiceDep,
) -> SignupResponse:
    """
    Register a new user.

    Parameters
    ----------
    request : Request
        Current request context (used by the rate limiter).
    payload : SignupRequest
        Signup data.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    SignupResponse
        Created account without credential data.

    Raises
    ------
    DuplicateEntryError
        If the username or email is already taken.
    """
    user = await auth_service.signup(payload)
    return SignupResponse(user=UserSummary.model_validate(user))


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=LoginResponse,
    response_model_by_alias=True,
    summary="Login for access token",
    description="Authenticate with username (or email) and password to obtain a bearer token.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "Login successful",
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "tokenType": "bearer",
                        "user": {"id": "123e4567-e89b-12d3-a456-426614174000", "role": "user"},
                    },
                },
            },
        },
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"detail": "Invalid credentials"}}},
        },
        429: RATE_LIMITED,
    },
    operation_id="auth_login",
)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    auth_service: AuthServiceDep,
) -> LoginResponse:
    """
    Login with username (or email) and password.

    Parameters
    ----------
    request : Request
        Current request context (used by the rate limiter).
    credentials : LoginRequest
        Username or email, and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    LoginResponse
        Bearer token and public profile.

    Raises
    ------
    InvalidCredentialsError
        If authentication fails.
    UserDeactivatedError
        If the account is deactivated.
    """
    user = await auth_service.authenticate_user(
        credentials.username,
        credentials.password.get_secret_value(),
    )
    return auth_service.create_token_for_user(user)
