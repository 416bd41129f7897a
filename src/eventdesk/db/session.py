"""
eventdesk.db.session

Engine and session factory for the event desk store.

Responsibilities:
- Build the async engine for `settings.database_url`.
- Enforce foreign keys on SQLite so cascades and delete guards hold.
- Hand out sessions that keep loaded rows usable after commit.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from eventdesk.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    engine = create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _sqlite_enable_foreign_keys)
    return engine


def _sqlite_enable_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    # SQLite ships with FK enforcement off; ON DELETE CASCADE relies on it.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


# --- Module Notes -----------------------------------------------------------
# The API layer scopes sessions per request (`api.deps.db_session`); the gate's
# resolver opens its own short session per lookup.
