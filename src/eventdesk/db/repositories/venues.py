from __future__ import annotations

from sqlalchemy import desc, exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventdesk.db.models import Event, Venue


class VenueRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, address: str, capacity: int, details: str | None) -> Venue:
        venue = Venue(address=address, capacity=capacity, details=details)
        self._session.add(venue)
        await self._session.flush()
        return venue

    async def get(self, venue_id: int) -> Venue | None:
        return await self._session.get(Venue, venue_id)

    async def list_with_events(self) -> list[Venue]:
        stmt = (
            select(Venue)
            .options(selectinload(Venue.events))
            .order_by(desc(Venue.created_at), desc(Venue.id))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def has_events(self, venue_id: int) -> bool:
        stmt = select(exists().where(Event.venue_id == venue_id))
        return bool((await self._session.execute(stmt)).scalar())

    async def delete(self, venue: Venue) -> None:
        await self._session.delete(venue)
        await self._session.flush()
