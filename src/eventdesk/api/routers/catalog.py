"""
eventdesk.api.routers.catalog

Venue, event and session procedures.

Responsibilities:
- Administrator CRUD for venues, events and sessions.
- Authenticated listings, with capacity figures attached to sessions.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.deps import db_session, gate_dep
from eventdesk.api.schemas import (
    AuthedRequest,
    CreateEventRequest,
    CreateSessionRequest,
    CreateVenueRequest,
    EventIdRequest,
    SessionIdRequest,
    SessionsQuery,
    UpdateEventRequest,
    UpdateSessionRequest,
    UpdateVenueRequest,
    VenueIdRequest,
)
from eventdesk.api.serializers import event_out, session_load_out, session_out, venue_out
from eventdesk.auth.gate import AccessGate
from eventdesk.services.events import EventService
from eventdesk.services.venues import VenueService

router = APIRouter(prefix="/rpc", tags=["catalog"])


# Venues


@router.post("/createVenue")
async def create_venue(
    body: CreateVenueRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    venue = await VenueService(session=session).create(
        address=body.venue_address, capacity=body.venue_capacity, details=body.venue_details
    )
    return {"success": True, "venue": venue_out(venue)}


@router.post("/getVenues")
async def get_venues(
    body: AuthedRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    await gate.require_authenticated(body.auth_token)
    return [venue_out(v) for v in await VenueService(session=session).list_with_events()]


@router.post("/updateVenue")
async def update_venue(
    body: UpdateVenueRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    venue = await VenueService(session=session).update(
        venue_id=body.venue_id,
        address=body.venue_address,
        capacity=body.venue_capacity,
        details=body.venue_details,
    )
    return {"success": True, "venue": venue_out(venue)}


@router.post("/deleteVenue")
async def delete_venue(
    body: VenueIdRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, bool]:
    await gate.require_administrator(body.auth_token)
    await VenueService(session=session).delete(venue_id=body.venue_id)
    return {"success": True}


# Events


@router.post("/createEvent")
async def create_event(
    body: CreateEventRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    ev = await EventService(session=session).create_event(
        name=body.event_name,
        start_date=body.start_date,
        end_date=body.end_date,
        details=body.event_details,
        venue_id=body.venue_id,
    )
    return {"success": True, "event": event_out(ev)}


@router.post("/getEvents")
async def get_events(
    body: AuthedRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    await gate.require_authenticated(body.auth_token)
    return [event_out(e) for e in await EventService(session=session).list_events()]


@router.post("/updateEvent")
async def update_event(
    body: UpdateEventRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    ev = await EventService(session=session).update_event(
        event_id=body.event_id,
        name=body.event_name,
        start_date=body.start_date,
        end_date=body.end_date,
        details=body.event_details,
        venue_id=body.venue_id,
    )
    return {"success": True, "event": event_out(ev)}


@router.post("/deleteEvent")
async def delete_event(
    body: EventIdRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, bool]:
    await gate.require_administrator(body.auth_token)
    await EventService(session=session).delete_event(event_id=body.event_id)
    return {"success": True}


# Sessions


@router.post("/createSession")
async def create_session(
    body: CreateSessionRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    sess = await EventService(session=session).create_session(
        event_id=body.event_id,
        name=body.session_name,
        session_date=body.session_date,
        start_time=body.start_time,
        end_time=body.end_time,
        details=body.session_details,
        capacity=body.session_balance_capacity,
    )
    return {"success": True, "session": session_out(sess)}


@router.post("/getSessions")
async def get_sessions(
    body: SessionsQuery,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    await gate.require_authenticated(body.auth_token)
    loads = await EventService(session=session).list_sessions(event_id=body.event_id)
    return [session_load_out(load) for load in loads]


@router.post("/updateSession")
async def update_session(
    body: UpdateSessionRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    sess = await EventService(session=session).update_session(
        session_id=body.session_id,
        name=body.session_name,
        session_date=body.session_date,
        start_time=body.start_time,
        end_time=body.end_time,
        details=body.session_details,
        capacity=body.session_balance_capacity,
    )
    return {"success": True, "session": session_out(sess)}


@router.post("/deleteSession")
async def delete_session(
    body: SessionIdRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, bool]:
    await gate.require_administrator(body.auth_token)
    await EventService(session=session).delete_session(session_id=body.session_id)
    return {"success": True}
