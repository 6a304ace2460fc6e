"""Authentication and authorization errors."""

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors (caller identity unknown)."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)
        self.headers = BEARER_CHALLENGE


class MissingTokenError(UserAuthenticationError):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self) -> None:
        super().__init__("Access token required")


class InvalidTokenError(UserAuthenticationError):
    """Raised when the bearer token is malformed, forged or expired."""

    def __init__(self) -> None:
        super().__init__("Invalid or expired token")


class UserNoLongerExistsError(UserAuthenticationError):
    """Raised when a valid token names a user that was removed."""

    def __init__(self) -> None:
        super().__init__("User no longer exists")


class UserDeactivatedError(UserAuthenticationError):
    """Raised when the account has been deactivated by an admin."""

    def __init__(self) -> None:
        super().__init__("Account is deactivated")


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when credentials are invalid."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class ForbiddenError(BaseAppError):
    """Raised when an authenticated caller is not allowed to perform an action."""

    def __init__(self, detail: str = "Not authorized") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class AdminRequiredError(ForbiddenError):
    def __init__(self) -> None:
        super().__init__("Admin access required")


auth_exception_handler = create_exception_handler(logger)
