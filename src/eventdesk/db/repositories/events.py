"""
eventdesk.db.repositories.events

Repositories for `Event` and `EventSession` entities.

Responsibilities:
- Create/fetch events with the relations each read needs (venue, sessions, expenses).
- Create/list sessions and compute their registration load.
- Answer "is anything registered against this?" before destructive operations.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from sqlalchemy import desc, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventdesk.db.models import (
    Event,
    EventSession,
    OrderLine,
    Product,
    ProductKind,
    ProductSessionMap,
)


def _event_detail_options() -> list[Any]:
    return [
        selectinload(Event.venue),
        selectinload(Event.sessions),
        selectinload(Event.expenses),
    ]


class EventRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        name: str,
        start_date: date,
        end_date: date,
        details: str | None,
        venue_id: int,
    ) -> Event:
        ev = Event(
            name=name,
            start_date=start_date,
            end_date=end_date,
            details=details,
            venue_id=venue_id,
        )
        self._session.add(ev)
        await self._session.flush()
        return ev

    async def get(self, event_id: int) -> Event | None:
        return await self._session.get(Event, event_id)

    async def get_detailed(self, event_id: int) -> Event | None:
        stmt = (
            select(Event)
            .options(*_event_detail_options())
            .where(Event.id == event_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_with_sessions(self, event_id: int) -> Event | None:
        stmt = (
            select(Event)
            .options(selectinload(Event.sessions))
            .where(Event.id == event_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_detailed(self) -> list[Event]:
        stmt = (
            select(Event)
            .options(*_event_detail_options())
            .order_by(desc(Event.start_date), desc(Event.id))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_ending_on_or_after(self, day: date) -> list[Event]:
        stmt = (
            select(Event)
            .options(selectinload(Event.venue), selectinload(Event.sessions))
            .where(Event.end_date >= day)
            .order_by(Event.start_date, Event.id)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def has_registrations(self, event_id: int) -> bool:
        stmt = select(
            exists()
            .where(OrderLine.session_id == EventSession.id)
            .where(EventSession.event_id == event_id)
        )
        return bool((await self._session.execute(stmt)).scalar())

    async def delete(self, ev: Event) -> None:
        await self._session.delete(ev)
        await self._session.flush()


class SessionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
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
        sess = EventSession(
            event_id=event_id,
            name=name,
            session_date=session_date,
            start_time=start_time,
            end_time=end_time,
            details=details,
            capacity=capacity,
        )
        self._session.add(sess)
        await self._session.flush()
        return sess

    async def get(self, session_id: int) -> EventSession | None:
        stmt = (
            select(EventSession)
            .options(selectinload(EventSession.event))
            .where(EventSession.id == session_id)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_detailed(self, session_id: int) -> EventSession | None:
        stmt = (
            select(EventSession)
            .options(
                selectinload(EventSession.event),
                selectinload(EventSession.product_maps).selectinload(ProductSessionMap.product),
            )
            .where(EventSession.id == session_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_filtered(
        self,
        *,
        event_id: int | None = None,
        since: datetime | None = None,
        with_variants: bool = False,
        newest_first: bool = False,
    ) -> list[EventSession]:
        product_load = selectinload(EventSession.product_maps).selectinload(
            ProductSessionMap.product
        )
        if with_variants:
            product_load = product_load.selectinload(Product.variants)
        stmt = select(EventSession).options(selectinload(EventSession.event), product_load)
        if event_id is not None:
            stmt = stmt.where(EventSession.event_id == event_id)
        if since is not None:
            stmt = stmt.where(EventSession.session_date >= since)
        if newest_first:
            stmt = stmt.order_by(desc(EventSession.session_date), desc(EventSession.id))
        else:
            stmt = stmt.order_by(
                EventSession.session_date, EventSession.start_time, EventSession.id
            )
        return list((await self._session.execute(stmt)).scalars().all())

    async def entry_registrations(self, session_ids: Iterable[int]) -> dict[int, int]:
        """Entry headcount already sold per session (sum of Entry line quantities)."""
        ids = list(session_ids)
        if not ids:
            return {}
        stmt = (
            select(OrderLine.session_id, func.coalesce(func.sum(OrderLine.quantity), 0))
            .join(Product, Product.id == OrderLine.product_id)
            .where(OrderLine.session_id.in_(ids))
            .where(Product.kind == ProductKind.entry)
            .group_by(OrderLine.session_id)
        )
        counts = {sid: 0 for sid in ids}
        for sid, total in (await self._session.execute(stmt)).all():
            counts[sid] = int(total)
        return counts

    async def has_order_lines(self, session_id: int) -> bool:
        stmt = select(exists().where(OrderLine.session_id == session_id))
        return bool((await self._session.execute(stmt)).scalar())

    async def delete(self, sess: EventSession) -> None:
        await self._session.delete(sess)
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# Capacity counts quantities, not rows: one line for three adults fills three spots.
