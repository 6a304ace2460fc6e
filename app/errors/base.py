from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from app.configs import settings
from app.configs.settings import DEFAULT_ERROR_MESSAGE
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", DEFAULT_ERROR_MESSAGE)

        logger.warning(
            f"{detail} for ip: {host(request)} for endpoint {request.url.path}",
            status_code=status_code,
        )

        # Extra public attributes of the exception travel with the detail
        content = {"detail": detail}
        content.update(
            {
                k: v
                for k, v in vars(exc).items()
                if k not in ("status_code", "detail", "headers") and not k.startswith("_")
            },
        )

        return ORJSONResponse(
            content=content,
            status_code=status_code,
            headers=getattr(exc, "headers", None),
        )

    return handler


app_exception_handler = create_exception_handler(logger)


async def unhandled_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Convert any unexpected exception into a generic 500 response.

    The exception text is only exposed when ``DEBUG`` is enabled.
    """
    logger.exception(
        f"Unhandled error for ip: {host(request)} at endpoint {request.url.path}",
        exc_info=exc,
    )
    content: dict[str, str] = {"detail": DEFAULT_ERROR_MESSAGE}
    if settings.DEBUG:
        content["error"] = f"{type(exc).__name__}: {exc}"
    return ORJSONResponse(content=content, status_code=HTTP_500_INTERNAL_SERVER_ERROR)
