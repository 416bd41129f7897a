from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.db.models import Venue
from eventdesk.db.repositories.venues import VenueRepo
from eventdesk.errors import BadRequest, NotFound
from eventdesk.observability.logging import get_logger

log = get_logger(__name__)


class VenueService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._venues = VenueRepo(session)

    async def create(self, *, address: str, capacity: int, details: str | None) -> Venue:
        venue = await self._venues.create(address=address, capacity=capacity, details=details)
        await self._session.commit()
        log.info("venue_created", venue_id=venue.id)
        return venue

    async def list_with_events(self) -> list[Venue]:
        return await self._venues.list_with_events()

    async def update(
        self,
        *,
        venue_id: int,
        address: str | None = None,
        capacity: int | None = None,
        details: str | None = None,
    ) -> Venue:
        venue = await self._require(venue_id)
        if address:
            venue.address = address
        if capacity:
            venue.capacity = capacity
        if details is not None:
            venue.details = details
        await self._session.commit()
        log.info("venue_updated", venue_id=venue_id)
        return venue

    async def delete(self, *, venue_id: int) -> None:
        venue = await self._require(venue_id)
        if await self._venues.has_events(venue_id):
            raise BadRequest("Cannot delete venue with existing events")
        await self._venues.delete(venue)
        await self._session.commit()
        log.info("venue_deleted", venue_id=venue_id)

    async def _require(self, venue_id: int) -> Venue:
        venue = await self._venues.get(venue_id)
        if venue is None:
            raise NotFound("Venue not found")
        return venue
