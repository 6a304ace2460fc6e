"""Custom validation error handling for FastAPI."""

from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


class ValidationError(BaseAppError):
    """Missing or malformed input detected by the application itself."""

    def __init__(
        self,
        detail: str = "Validation Error",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)
        self.errors = errors or []


validation_error_handler = create_exception_handler(logger)


def _format_error(error: dict[str, Any]) -> dict[str, Any]:
    loc = error.get("loc", ())
    # Drop the leading location kind ("body", "query", "path")
    field = ".".join(str(part) for part in loc[1:]) if len(loc) > 1 else ".".join(map(str, loc))
    formatted: dict[str, Any] = {
        "field": field,
        "message": error.get("msg", "Invalid value"),
        "type": error.get("type", "validation_error"),
    }
    if "ctx" in error:
        formatted["context"] = {
            key: str(value) if isinstance(value, Exception) else value
            for key, value in error["ctx"].items()
        }
    return formatted


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request validation errors with a 400 response.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)
    formatted_errors = [_format_error(error) for error in exec_error.errors()]

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}",
        errors=formatted_errors,
    )

    # The first message doubles as the human-readable detail
    detail = formatted_errors[0]["message"] if formatted_errors else "Validation failed"
    if detail.startswith("Value error, "):
        detail = detail.removeprefix("Value error, ")

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={"detail": detail, "errors": formatted_errors},
    )
