from app.errors.auth import (
    AdminRequiredError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UserAuthenticationError,
    UserDeactivatedError,
    UserNoLongerExistsError,
    auth_exception_handler,
)
from app.errors.base import (
    BaseAppError,
    app_exception_handler,
    create_exception_handler,
    unhandled_exception_handler,
)
from app.errors.database import (
    BlogNotFoundError,
    CommentNotFoundError,
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    UserNotFoundError,
    database_exception_handler,
)
from app.errors.password_hasher import PasswordHashingError, password_hashing_exception_handler
from app.errors.validation import (
    ValidationError,
    validation_error_handler,
    validation_exception_handler,
)

__all__ = [
    "AdminRequiredError",
    "BaseAppError",
    "BlogNotFoundError",
    "CommentNotFoundError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "PasswordHashingError",
    "RecordNotFoundError",
    "UserAuthenticationError",
    "UserDeactivatedError",
    "UserNoLongerExistsError",
    "UserNotFoundError",
    "ValidationError",
    "app_exception_handler",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "password_hashing_exception_handler",
    "unhandled_exception_handler",
    "validation_error_handler",
    "validation_exception_handler",
]
