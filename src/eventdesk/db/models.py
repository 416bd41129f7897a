"""
eventdesk.db.models

Persistence schema for events, venues and membership.

Responsibilities:
- Define ORM models for the managed entities:
  - Member / User: membership profiles and login accounts
  - Venue / Event / EventSession: what happens where and when
  - Product / ProductVariant / ProductSessionMap: sellable entry and food items
  - Expense: member-incurred costs against an event
  - Guest / Order / OrderLine: registrations and what they bought
- Declare enum value sets shared with the API layer.
"""

from __future__ import annotations

import enum
from datetime import UTC, date, datetime

from sqlalchemy import Enum, Float, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eventdesk.auth.models import Role
from eventdesk.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC timestamps throughout the schema.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class ProductKind(enum.StrEnum):
    food = "Food"
    entry = "Entry"


class RecordStatus(enum.StrEnum):
    active = "ACTIVE"
    inactive = "INACTIVE"


class PersonSize(enum.StrEnum):
    adult = "Adult"
    children = "Children"
    elder = "Elder"


class MealChoice(enum.StrEnum):
    veg = "VEG"
    non_veg = "NON-VEG"
    none = "NONE"


class MealPreference(enum.StrEnum):
    chicken = "CHICKEN"
    mutton = "MUTTON"
    fish = "FISH"
    none = "NONE"


class ProductSubtype(enum.StrEnum):
    packet = "PACKET"
    dine_in = "DINE-IN"
    none = "NONE"


class ExpenseStatus(enum.StrEnum):
    pending = "PENDING"
    approved = "APPROVED"
    rejected = "REJECTED"


class OrderStatus(enum.StrEnum):
    pending = "PENDING"
    confirmed = "CONFIRMED"
    cancelled = "CANCELLED"
    completed = "COMPLETED"
    refunded = "REFUNDED"


class Member(Base):
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)

    adults: Mapped[int] = mapped_column(nullable=False, default=1)
    children: Mapped[int] = mapped_column(nullable=False, default=0)
    infants: Mapped[int] = mapped_column(nullable=False, default=0)
    elder: Mapped[int] = mapped_column(nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role), nullable=False, default=Role.member)
    member_id: Mapped[int | None] = mapped_column(
        ForeignKey("members.id", ondelete="SET NULL"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    member: Mapped[Member | None] = relationship()


class Venue(Base):
    __tablename__ = "venues"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    address: Mapped[str] = mapped_column(String(512), nullable=False)
    capacity: Mapped[int] = mapped_column(nullable=False)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    events: Mapped[list[Event]] = relationship(back_populates="venue")


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    start_date: Mapped[date] = mapped_column(nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(nullable=False, index=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    venue_id: Mapped[int] = mapped_column(ForeignKey("venues.id"), nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    venue: Mapped[Venue] = relationship(back_populates="events")
    sessions: Mapped[list[EventSession]] = relationship(
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="EventSession.session_date",
    )
    expenses: Mapped[list[Expense]] = relationship(
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class EventSession(Base):
    __tablename__ = "event_sessions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    session_date: Mapped[datetime] = mapped_column(nullable=False, index=True)
    # Free-form display times ("18:00", "6 PM"); ordering uses session_date first.
    start_time: Mapped[str] = mapped_column(String(32), nullable=False)
    end_time: Mapped[str] = mapped_column(String(32), nullable=False)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    capacity: Mapped[int] = mapped_column("session_balance_capacity", nullable=False)
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    event: Mapped[Event] = relationship(back_populates="sessions")
    product_maps: Mapped[list[ProductSessionMap]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    kind: Mapped[ProductKind] = mapped_column("product_type", Enum(ProductKind), nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus), nullable=False, default=RecordStatus.active
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    variants: Mapped[list[ProductVariant]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductVariant.price",
    )
    session_maps: Mapped[list[ProductSessionMap]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ProductVariant(Base):
    # Wire name: "product type" (size/choice/preference/subtype priced line).
    __tablename__ = "product_types"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    size: Mapped[PersonSize] = mapped_column(Enum(PersonSize), nullable=False)
    choice: Mapped[MealChoice] = mapped_column(Enum(MealChoice), nullable=False)
    preference: Mapped[MealPreference] = mapped_column(Enum(MealPreference), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    subtype: Mapped[ProductSubtype] = mapped_column(Enum(ProductSubtype), nullable=False)
    status: Mapped[RecordStatus] = mapped_column(
        Enum(RecordStatus), nullable=False, default=RecordStatus.active
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    product: Mapped[Product] = relationship(back_populates="variants")


class ProductSessionMap(Base):
    __tablename__ = "product_session_maps"
    __table_args__ = (UniqueConstraint("session_id", "product_id", name="uq_session_product"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("event_sessions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    session: Mapped[EventSession] = relationship(back_populates="product_maps")
    product: Mapped[Product] = relationship(back_populates="session_maps")


class Expense(Base):
    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    expense_type: Mapped[str] = mapped_column(String(128), nullable=False)
    vendor: Mapped[str] = mapped_column(String(256), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    receipt_file: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    status: Mapped[ExpenseStatus] = mapped_column(
        Enum(ExpenseStatus), nullable=False, default=ExpenseStatus.pending, index=True
    )
    incurred_by: Mapped[int] = mapped_column(ForeignKey("members.id"), nullable=False, index=True)
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    member: Mapped[Member] = relationship()
    event: Mapped[Event] = relationship(back_populates="expenses")


class Guest(Base):
    __tablename__ = "guests"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(ForeignKey("members.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    location: Mapped[str | None] = mapped_column(String(256), nullable=True)

    adults: Mapped[int] = mapped_column(nullable=False, default=0)
    children: Mapped[int] = mapped_column(nullable=False, default=0)
    infants: Mapped[int] = mapped_column(nullable=False, default=0)
    elder: Mapped[int] = mapped_column(nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    guest_id: Mapped[int | None] = mapped_column(
        ForeignKey("guests.id", ondelete="SET NULL"), nullable=True, index=True
    )
    member_id: Mapped[int | None] = mapped_column(
        ForeignKey("members.id"), nullable=True, index=True
    )
    total_cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    transaction_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus), nullable=False, default=OrderStatus.pending
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    guest: Mapped[Guest | None] = relationship()
    member: Mapped[Member | None] = relationship()
    lines: Mapped[list[OrderLine]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderLine.id",
    )


class OrderLine(Base):
    __tablename__ = "order_lines"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), nullable=False, index=True)
    product_variant_id: Mapped[int | None] = mapped_column(
        "product_type_id", ForeignKey("product_types.id"), nullable=True, index=True
    )
    session_id: Mapped[int | None] = mapped_column(
        ForeignKey("event_sessions.id"), nullable=True, index=True
    )
    quantity: Mapped[int] = mapped_column(nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    order: Mapped[Order] = relationship(back_populates="lines")
    product: Mapped[Product] = relationship()
    variant: Mapped[ProductVariant | None] = relationship()
    session: Mapped[EventSession | None] = relationship()


# --- Module Notes -----------------------------------------------------------
# Relationships are never lazy-loaded under AsyncSession; repositories request
# what each read needs via selectinload.
