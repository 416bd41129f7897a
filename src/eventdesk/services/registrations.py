"""
eventdesk.services.registrations

Guest and member registration service.

Responsibilities:
- Validate session selections against the event, the food opt-out and the
  dine-in headcount rules.
- Enforce session capacity (Entry headcount).
- Price the registration and persist guest/order/lines in one transaction.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.auth.models import Principal
from eventdesk.db.models import (
    Event,
    Guest,
    Member,
    Order,
    PersonSize,
    ProductKind,
    ProductSubtype,
    ProductVariant,
)
from eventdesk.db.repositories.events import EventRepo, SessionRepo
from eventdesk.db.repositories.orders import GuestRepo, OrderRepo
from eventdesk.db.repositories.products import VariantRepo
from eventdesk.db.repositories.users import MemberRepo
from eventdesk.errors import BadRequest, NotFound
from eventdesk.observability.logging import get_logger
from eventdesk.services.pricing import Quote, new_transaction_id, quote_guest, quote_member

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Party:
    adults: int
    children: int
    infants: int
    elder: int

    def headcount(self, size: PersonSize) -> int:
        return {
            PersonSize.adult: self.adults,
            PersonSize.children: self.children,
            PersonSize.elder: self.elder,
        }[size]


@dataclass(frozen=True, slots=True)
class ProductPick:
    product_id: int
    variant_id: int
    quantity: int


@dataclass(frozen=True, slots=True)
class SessionPick:
    session_id: int
    picks: Sequence[ProductPick]
    opt_out_of_food: bool = False


@dataclass(frozen=True, slots=True)
class GuestDetails:
    name: str
    email: str | None = None
    phone: str | None = None
    location: str | None = None


@dataclass(frozen=True, slots=True)
class RegistrationResult:
    transaction_id: str
    quote: Quote
    order: Order
    party: Party
    guest: Guest | None = None
    member: Member | None = None


class RegistrationService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._events = EventRepo(session)
        self._sessions = SessionRepo(session)
        self._variants = VariantRepo(session)
        self._members = MemberRepo(session)
        self._guests = GuestRepo(session)
        self._orders = OrderRepo(session)

    async def register_guest(
        self,
        *,
        sponsor_member_id: int,
        event_id: int,
        guest: GuestDetails,
        party: Party,
        selections: Sequence[SessionPick],
    ) -> RegistrationResult:
        if await self._members.get(sponsor_member_id) is None:
            raise NotFound("Member not found")
        ev = await self._require_event(event_id)
        variants = await self._validate(ev, party, selections)

        entry, food = _subtotals(selections, variants)
        quote = quote_guest(
            entry_subtotal=entry,
            food_subtotal=food,
            selected_sessions=len({s.session_id for s in selections}),
            event_sessions=len(ev.sessions),
        )
        transaction_id = new_transaction_id("TXN")

        guest_row = await self._guests.create(
            member_id=sponsor_member_id,
            name=guest.name,
            email=guest.email,
            phone=guest.phone,
            location=guest.location,
            adults=party.adults,
            children=party.children,
            infants=party.infants,
            elder=party.elder,
        )
        order = await self._orders.create(
            guest_id=guest_row.id,
            total_cost=quote.total_cost,
            transaction_id=transaction_id,
            lines=_order_lines(selections),
        )
        await self._session.commit()
        log.info(
            "guest_registered",
            order_id=order.id,
            event_id=event_id,
            sessions=len(selections),
            total_cost=quote.total_cost,
        )
        return RegistrationResult(
            transaction_id=transaction_id,
            quote=quote,
            order=await self._require_order(order.id),
            party=party,
            guest=guest_row,
        )

    async def register_member(
        self,
        *,
        principal: Principal,
        event_id: int,
        party: Party,
        selections: Sequence[SessionPick],
    ) -> RegistrationResult:
        if principal.member_id is None:
            raise BadRequest("User is not associated with a member account")
        member = await self._members.get(principal.member_id)
        if member is None:
            raise BadRequest("User is not associated with a member account")
        ev = await self._require_event(event_id)
        variants = await self._validate(ev, party, selections)

        _, food = _subtotals(selections, variants)
        quote = quote_member(food_subtotal=food)
        transaction_id = new_transaction_id("MBR")

        order = await self._orders.create(
            member_id=member.id,
            total_cost=quote.total_cost,
            transaction_id=transaction_id,
            lines=_order_lines(selections),
        )
        await self._session.commit()
        log.info(
            "member_registered_for_event",
            order_id=order.id,
            event_id=event_id,
            member_id=member.id,
            total_cost=quote.total_cost,
        )
        return RegistrationResult(
            transaction_id=transaction_id,
            quote=quote,
            order=await self._require_order(order.id),
            party=party,
            member=member,
        )

    async def _require_event(self, event_id: int) -> Event:
        ev = await self._events.get_with_sessions(event_id)
        if ev is None:
            raise NotFound("Event not found")
        return ev

    async def _require_order(self, order_id: int) -> Order:
        order = await self._orders.get_detailed(order_id)
        if order is None:
            raise NotFound("Order not found")
        return order

    async def _validate(
        self,
        ev: Event,
        party: Party,
        selections: Sequence[SessionPick],
    ) -> dict[int, ProductVariant]:
        sessions = {s.id: s for s in ev.sessions}
        if any(sel.session_id not in sessions for sel in selections):
            raise BadRequest("Invalid session selection")

        variants = await self._variants.get_many(
            p.variant_id for sel in selections for p in sel.picks
        )
        for sel in selections:
            for pick in sel.picks:
                variant = variants.get(pick.variant_id)
                if variant is None:
                    raise NotFound("Product type not found")
                if variant.product_id != pick.product_id:
                    raise BadRequest("Product type does not belong to the selected product")

        for sel in selections:
            _check_food_rules(sel, party, variants)

        requested: dict[int, int] = defaultdict(int)
        for sel in selections:
            requested[sel.session_id] += sum(
                p.quantity
                for p in sel.picks
                if variants[p.variant_id].product.kind == ProductKind.entry
            )

        registered = await self._sessions.entry_registrations(sessions)
        for session_id, wanted in requested.items():
            sess = sessions[session_id]
            available = sess.capacity - registered.get(session_id, 0)
            if wanted > available:
                raise BadRequest(
                    f'Session "{sess.name}" is full or would exceed capacity. '
                    f"Available spots: {available}, trying to register: {wanted}"
                )
        return variants


def _check_food_rules(
    sel: SessionPick,
    party: Party,
    variants: dict[int, ProductVariant],
) -> None:
    food = [p for p in sel.picks if variants[p.variant_id].product.kind == ProductKind.food]
    if sel.opt_out_of_food:
        if food:
            raise BadRequest("Cannot select food products when opted out of food for a session")
        return

    dine_in: dict[PersonSize, int] = defaultdict(int)
    for pick in food:
        variant = variants[pick.variant_id]
        if variant.subtype == ProductSubtype.dine_in:
            dine_in[variant.size] += pick.quantity

    for size, selected in dine_in.items():
        required = party.headcount(size)
        if required > 0 and selected != required:
            raise BadRequest(
                f"For dine-in meals, you must select exactly {required} "
                f"{size.value.lower()} meal(s) total per session. "
                f"Currently selected: {selected} for {size.value} in session."
            )


def _subtotals(
    selections: Sequence[SessionPick],
    variants: dict[int, ProductVariant],
) -> tuple[float, float]:
    entry = food = 0.0
    for sel in selections:
        for pick in sel.picks:
            variant = variants[pick.variant_id]
            line_total = variant.price * pick.quantity
            if variant.product.kind == ProductKind.entry:
                entry += line_total
            else:
                food += line_total
    return entry, food


def _order_lines(selections: Sequence[SessionPick]) -> list[dict[str, int]]:
    return [
        {
            "product_id": pick.product_id,
            "product_variant_id": pick.variant_id,
            "session_id": sel.session_id,
            "quantity": pick.quantity,
        }
        for sel in selections
        for pick in sel.picks
    ]


# --- Module Notes -----------------------------------------------------------
# Capacity is checked against committed registrations only; two concurrent
# registrations for the last spots can both pass.
