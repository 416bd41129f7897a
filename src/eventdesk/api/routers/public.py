"""
eventdesk.api.routers.public

Unauthenticated read procedures backing the public registration page.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.deps import db_session
from eventdesk.api.schemas import PublicSessionsQuery
from eventdesk.api.serializers import event_out, product_out, session_load_out
from eventdesk.db.repositories.users import MemberRepo
from eventdesk.services.events import EventService
from eventdesk.services.products import ProductService

router = APIRouter(prefix="/rpc", tags=["public"])


@router.post("/getPublicEvents")
async def get_public_events(session: AsyncSession = Depends(db_session)) -> list[dict[str, Any]]:
    return [event_out(e) for e in await EventService(session=session).list_public_events()]


@router.post("/getPublicMembers")
async def get_public_members(session: AsyncSession = Depends(db_session)) -> list[dict[str, Any]]:
    # Sponsor picker: identity fields only.
    members = await MemberRepo(session).list_by_name()
    return [{"id": m.id, "memberName": m.name, "memberEmail": m.email} for m in members]


@router.post("/getPublicProducts")
async def get_public_products(session: AsyncSession = Depends(db_session)) -> list[dict[str, Any]]:
    return [product_out(p) for p in await ProductService(session=session).list_public_products()]


@router.post("/getPublicSessions")
async def get_public_sessions(
    body: PublicSessionsQuery,
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    loads = await EventService(session=session).list_public_sessions(event_id=body.event_id)
    return [session_load_out(load) for load in loads]
