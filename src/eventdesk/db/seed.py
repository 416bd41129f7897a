"""
eventdesk.db.seed

Bootstrap data for a fresh database (`python -m eventdesk.db.seed`).

Responsibilities:
- Create tables and the bootstrap administrator.
- Create sample venues, Entry/Food products, and one upcoming event with
  sessions tagged to both products, each only when none exist yet.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, time, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from eventdesk.db.init_db import init_db
from eventdesk.db.models import (
    Event,
    MealChoice,
    MealPreference,
    PersonSize,
    Product,
    ProductKind,
    ProductSubtype,
    Venue,
)
from eventdesk.db.session import create_engine, create_sessionmaker
from eventdesk.observability.logging import configure_logging, get_logger
from eventdesk.services.accounts import ensure_admin
from eventdesk.services.clock import today
from eventdesk.services.events import EventService
from eventdesk.services.products import ProductService, VariantSpec
from eventdesk.services.venues import VenueService
from eventdesk.settings import Settings, get_settings

log = get_logger(__name__)

DEFAULT_ADMIN_PASSWORD = "admin123"

SAMPLE_VENUES = [
    (
        "123 Main Street, Downtown, City 12345",
        500,
        "Large banquet hall with modern amenities, parking available",
    ),
    ("456 Oak Avenue, Suburb, City 67890", 200, "Intimate venue perfect for smaller gatherings"),
    ("789 Pine Road, Uptown, City 11111", 1000, "Grand ballroom with stage, full catering kitchen"),
]

_NONE = (MealChoice.none, MealPreference.none, ProductSubtype.none)

ENTRY_VARIANTS = [
    VariantSpec(PersonSize.adult, *_NONE[:2], 50.0, _NONE[2]),
    VariantSpec(PersonSize.children, *_NONE[:2], 25.0, _NONE[2]),
    VariantSpec(PersonSize.elder, *_NONE[:2], 40.0, _NONE[2]),
]


def _meal(size: PersonSize, pref: MealPreference, price: float) -> VariantSpec:
    choice = MealChoice.veg if pref == MealPreference.none else MealChoice.non_veg
    return VariantSpec(size, choice, pref, price, ProductSubtype.dine_in)


FOOD_VARIANTS = [
    _meal(PersonSize.adult, MealPreference.none, 30.0),
    _meal(PersonSize.adult, MealPreference.chicken, 35.0),
    _meal(PersonSize.adult, MealPreference.mutton, 40.0),
    _meal(PersonSize.adult, MealPreference.fish, 38.0),
    _meal(PersonSize.children, MealPreference.none, 15.0),
    _meal(PersonSize.children, MealPreference.chicken, 18.0),
    _meal(PersonSize.elder, MealPreference.none, 25.0),
    _meal(PersonSize.elder, MealPreference.fish, 33.0),
]


async def _count(session: AsyncSession, model: type) -> int:
    return int((await session.execute(select(func.count()).select_from(model))).scalar_one())


async def seed(session_factory: async_sessionmaker[AsyncSession], settings: Settings) -> None:
    await ensure_admin(
        session_factory,
        email=settings.admin_email,
        password=settings.admin_password or DEFAULT_ADMIN_PASSWORD,
    )

    async with session_factory() as session:
        if await _count(session, Venue) == 0:
            venues = VenueService(session=session)
            for address, capacity, details in SAMPLE_VENUES:
                await venues.create(address=address, capacity=capacity, details=details)
            log.info("seed_venues_created", count=len(SAMPLE_VENUES))

        if await _count(session, Product) == 0:
            products = ProductService(session=session)
            await products.create_product(
                code="ENTRY-001",
                name="Event Entry",
                description="General admission to the event",
                kind=ProductKind.entry,
                variants=ENTRY_VARIANTS,
            )
            await products.create_product(
                code="FOOD-001",
                name="Event Meal",
                description="Meal options for the event",
                kind=ProductKind.food,
                variants=FOOD_VARIANTS,
            )
            log.info("seed_products_created")

        if await _count(session, Event) == 0:
            await _seed_event(session)


async def _seed_event(session: AsyncSession) -> None:
    venue = (await session.execute(select(Venue).order_by(Venue.id).limit(1))).scalar_one()
    start = today() + timedelta(days=7)
    events = EventService(session=session)
    ev = await events.create_event(
        name=f"Annual Community Gathering {start.year}",
        start_date=start,
        end_date=start + timedelta(days=2),
        details="Annual community gathering with food, entertainment and networking.",
        venue_id=venue.id,
    )
    plan = [
        ("Welcome Breakfast", 0, "08:00", "10:00", 100),
        ("Lunch & Networking", 0, "12:00", "14:00", 150),
        ("Evening Dinner Gala", 1, "18:00", "22:00", 200),
    ]
    products = ProductService(session=session)
    catalog = (await session.execute(select(Product).order_by(Product.id))).scalars().all()
    for name, offset, start_time, end_time, capacity in plan:
        hour, minute = (int(part) for part in start_time.split(":"))
        sess = await events.create_session(
            event_id=ev.id,
            name=name,
            session_date=datetime.combine(start + timedelta(days=offset), time(hour, minute)),
            start_time=start_time,
            end_time=end_time,
            details=None,
            capacity=capacity,
        )
        for product in catalog:
            await products.tag_session(product_id=product.id, session_id=sess.id)
    log.info("seed_event_created", event_id=ev.id, sessions=len(plan))


async def main() -> None:
    settings = get_settings()
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    engine = create_engine(settings)
    try:
        await init_db(engine)
        await seed(create_sessionmaker(engine), settings)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
