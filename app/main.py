# app/main.py

"""LifeBlog Backend - blogging platform API with users, roles, blogs, likes and comments."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded

from app.configs import settings
from app.db import check_db
from app.errors import (
    BaseAppError,
    DatabaseError,
    ForbiddenError,
    PasswordHashingError,
    UserAuthenticationError,
    ValidationError,
    app_exception_handler,
    auth_exception_handler,
    database_exception_handler,
    password_hashing_exception_handler,
    unhandled_exception_handler,
    validation_error_handler,
    validation_exception_handler,
)
from app.managers import limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import auth_router, blog_router, contact_router, user_router
from app.schemas import HealthCheckResponse
from app.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="LifeBlog Backend API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)


routes = [
    auth_router,
    user_router,
    blog_router,
    contact_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (DatabaseError, database_exception_handler),
    (UserAuthenticationError, auth_exception_handler),
    (ForbiddenError, auth_exception_handler),
    (ValidationError, validation_error_handler),
    (BaseAppError, app_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, unhandled_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter


@app.get(
    "/api/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "OK",
                        "version": "1.0.0",
                        "timestamp": "2025-01-01 12:00:00",
                        "database": "connected",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check(request: Request) -> HealthCheckResponse:
    """
    Report service liveness and database reachability.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    HealthCheckResponse
        Status, version, timestamp and database state.

    Examples
    --------
    Request
        GET /api/health
    Response
        200 OK
        {"status": "OK", "version": "1.0.0", "timestamp": "...", "database": "connected"}
    """
    database = "connected" if await check_db() else "unavailable"
    return HealthCheckResponse(
        status="OK" if database == "connected" else "DEGRADED",
        version=request.app.version,
        timestamp=today_str(),
        database=database,
    )


@app.get("/", tags=["🏠 Root"], summary="Root access", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": f"Welcome to {settings.APP_NAME}"}
