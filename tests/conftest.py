# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Required settings must exist before app modules are imported anywhere
os.environ["SECRET_KEY"] = "test-secret-key-for-jwt-signing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from app import models  # noqa: E402, F401
from app.db import create_engine, create_session_maker, get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.managers.password_manager import hash_password  # noqa: E402
from app.managers.rate_limiter import limiter  # noqa: E402
from app.managers.token_manager import create_access_token  # noqa: E402
from app.models import UserDB  # noqa: E402
from app.repositories import BlogRepository, UserRepository  # noqa: E402
from app.services import BlogService  # noqa: E402

TEST_PASSWORD = "secret1"


@pytest.fixture
def password() -> str:
    """Plain-text password shared by every fixture user."""
    return TEST_PASSWORD


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory SQLite database per test."""
    test_engine = create_engine("sqlite+aiosqlite:///:memory:")
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return create_session_maker(engine)


@pytest.fixture
async def session(session_maker: async_sessionmaker) -> AsyncGenerator[AsyncSession]:
    async with session_maker() as db_session:
        yield db_session


@pytest.fixture
def user_repo(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
def blog_repo(session: AsyncSession) -> BlogRepository:
    return BlogRepository(session)


@pytest.fixture
def blog_service(blog_repo: BlogRepository) -> BlogService:
    return BlogService(blog_repo)


async def _make_user(
    session: AsyncSession,
    username: str,
    *,
    role: str = "user",
    is_active: bool = True,
) -> UserDB:
    user = UserDB(
        name=username.title(),
        username=username,
        email=f"{username}@example.com",
        password_hash=await hash_password(TEST_PASSWORD),
        role=role,
        is_active=is_active,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def author(session: AsyncSession) -> UserDB:
    """A regular user who owns blogs in most tests."""
    return await _make_user(session, "alice")


@pytest.fixture
async def other_user(session: AsyncSession) -> UserDB:
    """A regular user who owns nothing."""
    return await _make_user(session, "bob")


@pytest.fixture
async def admin_user(session: AsyncSession) -> UserDB:
    return await _make_user(session, "root", role="admin")


@pytest.fixture
async def inactive_user(session: AsyncSession) -> UserDB:
    return await _make_user(session, "ghost", is_active=False)


def bearer(user: UserDB) -> dict[str, str]:
    """Authorization header carrying a fresh access token for ``user``."""
    token = create_access_token(user_id=user.id, role=user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(author: UserDB) -> dict[str, str]:
    return bearer(author)


@pytest.fixture
def other_auth_headers(other_user: UserDB) -> dict[str, str]:
    return bearer(other_user)


@pytest.fixture
def admin_auth_headers(admin_user: UserDB) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture
def inactive_auth_headers(inactive_user: UserDB) -> dict[str, str]:
    return bearer(inactive_user)


@pytest.fixture
async def client(session_maker: async_sessionmaker) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client bound to the per-test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with session_maker() as db_session:
            try:
                yield db_session
                await db_session.commit()
            except Exception:
                await db_session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    limiter.enabled = True
    app.dependency_overrides.clear()
