"""Database engine, sessions and transaction helpers."""

from app.db.database import (
    async_session_maker,
    check_db,
    close_db,
    create_engine,
    create_session_maker,
    engine,
    get_session,
    init_db,
    transaction,
)

__all__ = [
    "async_session_maker",
    "check_db",
    "close_db",
    "create_engine",
    "create_session_maker",
    "engine",
    "get_session",
    "init_db",
    "transaction",
]
