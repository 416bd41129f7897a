"""
eventdesk.api.routers.health

Liveness and readiness probes for the event desk.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.deps import db_session, settings_dep
from eventdesk.observability.logging import get_logger
from eventdesk.settings import Settings

router = APIRouter(tags=["health"])
log = get_logger(__name__)


@router.get("/healthz")
async def healthz(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    return {"status": "ok", "service": settings.service_name}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)):
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        log.warning("database_unreachable", error=str(exc))
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready", "database": session.bind.dialect.name}
