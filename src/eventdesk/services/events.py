"""
eventdesk.services.events

Event and session management service.

Responsibilities:
- Validate event date ranges and venue references.
- Keep session dates inside their event's date range.
- Refuse destructive operations while registrations exist.
- Attach capacity figures (registered / available / full) to session listings.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.db.models import Event, EventSession
from eventdesk.db.repositories.events import EventRepo, SessionRepo
from eventdesk.db.repositories.venues import VenueRepo
from eventdesk.errors import BadRequest, NotFound
from eventdesk.observability.logging import get_logger
from eventdesk.services.clock import naive_utc, today, utcnow

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SessionLoad:
    session: EventSession
    current_registrations: int

    @property
    def available_spots(self) -> int:
        return self.session.capacity - self.current_registrations

    @property
    def is_full(self) -> bool:
        return self.available_spots <= 0


def _check_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise BadRequest("End date must be on or after start date")


def _check_within(ev: Event, session_date: datetime) -> None:
    if not ev.start_date <= session_date.date() <= ev.end_date:
        raise BadRequest("Session date must be within event date range")


class EventService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._events = EventRepo(session)
        self._sessions = SessionRepo(session)
        self._venues = VenueRepo(session)

    # Events

    async def create_event(
        self,
        *,
        name: str,
        start_date: date,
        end_date: date,
        details: str | None,
        venue_id: int,
    ) -> Event:
        if await self._venues.get(venue_id) is None:
            raise NotFound("Venue not found")
        _check_range(start_date, end_date)
        ev = await self._events.create(
            name=name,
            start_date=start_date,
            end_date=end_date,
            details=details,
            venue_id=venue_id,
        )
        await self._session.commit()
        log.info("event_created", event_id=ev.id, venue_id=venue_id)
        return await self._require_detailed(ev.id)

    async def list_events(self) -> list[Event]:
        return await self._events.list_detailed()

    async def list_public_events(self) -> list[Event]:
        return await self._events.list_ending_on_or_after(today())

    async def update_event(
        self,
        *,
        event_id: int,
        name: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        details: str | None = None,
        venue_id: int | None = None,
    ) -> Event:
        ev = await self._events.get(event_id)
        if ev is None:
            raise NotFound("Event not found")
        if venue_id and await self._venues.get(venue_id) is None:
            raise NotFound("Venue not found")
        _check_range(start_date or ev.start_date, end_date or ev.end_date)

        if name:
            ev.name = name
        if start_date:
            ev.start_date = start_date
        if end_date:
            ev.end_date = end_date
        if details is not None:
            ev.details = details
        if venue_id:
            ev.venue_id = venue_id
        await self._session.commit()
        log.info("event_updated", event_id=event_id)
        return await self._require_detailed(event_id)

    async def delete_event(self, *, event_id: int) -> None:
        ev = await self._events.get(event_id)
        if ev is None:
            raise NotFound("Event not found")
        if await self._events.has_registrations(event_id):
            raise BadRequest("Cannot delete event with existing registrations")
        await self._events.delete(ev)
        await self._session.commit()
        log.info("event_deleted", event_id=event_id)

    async def _require_detailed(self, event_id: int) -> Event:
        ev = await self._events.get_detailed(event_id)
        if ev is None:
            raise NotFound("Event not found")
        return ev

    # Sessions

    async def create_session(
        self,
        *,
        event_id: int,
        name: str,
        session_date: datetime,
        start_time: str,
        end_time: str,
        details: str | None,
        capacity: int,
    ) -> EventSession:
        ev = await self._events.get(event_id)
        if ev is None:
            raise NotFound("Event not found")
        session_date = naive_utc(session_date)
        _check_within(ev, session_date)
        sess = await self._sessions.create(
            event_id=event_id,
            name=name,
            session_date=session_date,
            start_time=start_time,
            end_time=end_time,
            details=details,
            capacity=capacity,
        )
        await self._session.commit()
        log.info("session_created", session_id=sess.id, event_id=event_id)
        return await self._require_session_detailed(sess.id)

    async def update_session(
        self,
        *,
        session_id: int,
        name: str | None = None,
        session_date: datetime | None = None,
        start_time: str | None = None,
        end_time: str | None = None,
        details: str | None = None,
        capacity: int | None = None,
    ) -> EventSession:
        sess = await self._sessions.get(session_id)
        if sess is None:
            raise NotFound("Session not found")
        if session_date is not None:
            session_date = naive_utc(session_date)
            _check_within(sess.event, session_date)
            sess.session_date = session_date
        if name:
            sess.name = name
        if start_time:
            sess.start_time = start_time
        if end_time:
            sess.end_time = end_time
        if details is not None:
            sess.details = details
        if capacity:
            sess.capacity = capacity
        await self._session.commit()
        log.info("session_updated", session_id=session_id)
        return await self._require_session_detailed(session_id)

    async def delete_session(self, *, session_id: int) -> None:
        sess = await self._sessions.get(session_id)
        if sess is None:
            raise NotFound("Session not found")
        if await self._sessions.has_order_lines(session_id):
            raise BadRequest("Cannot delete session with existing registrations")
        await self._sessions.delete(sess)
        await self._session.commit()
        log.info("session_deleted", session_id=session_id)

    async def list_sessions(self, *, event_id: int | None = None) -> list[SessionLoad]:
        sessions = await self._sessions.list_filtered(event_id=event_id)
        return await self._with_load(sessions)

    async def list_public_sessions(self, *, event_id: int | None) -> list[SessionLoad]:
        if not event_id:
            return []
        sessions = await self._sessions.list_filtered(
            event_id=event_id, since=utcnow(), with_variants=True
        )
        return await self._with_load(sessions)

    async def _with_load(self, sessions: list[EventSession]) -> list[SessionLoad]:
        counts = await self._sessions.entry_registrations(s.id for s in sessions)
        return [SessionLoad(session=s, current_registrations=counts.get(s.id, 0)) for s in sessions]

    async def _require_session_detailed(self, session_id: int) -> EventSession:
        sess = await self._sessions.get_detailed(session_id)
        if sess is None:
            raise NotFound("Session not found")
        return sess


# --- Module Notes -----------------------------------------------------------
# Session dates are compared by calendar day against the inclusive event range,
# so an evening session on the last day is accepted.
