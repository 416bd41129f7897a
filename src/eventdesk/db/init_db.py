"""
eventdesk.db.init_db

DB initialization helpers.

Responsibilities:
- Create tables for local development and tests.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from eventdesk.db import models  # noqa: F401  (registers tables on Base.metadata)
from eventdesk.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """Create tables that do not exist yet."""

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# --- Module Notes -----------------------------------------------------------
# Called from the app lifespan in dev/test and from the seed script.
