"""
eventdesk.services.reports

Tabular exports for the reporting screen.

Responsibilities:
- Build header + row tables for expenses, events, sessions, products,
  registrations and the two food summaries.
- Apply the same visibility rules as the interactive procedures
  (non-admins: own expenses only; event export is admin only).
"""

from __future__ import annotations

import enum
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.auth.models import Principal
from eventdesk.db.models import (
    ExpenseStatus,
    MealChoice,
    MealPreference,
    OrderLine,
    PersonSize,
    ProductKind,
    ProductSubtype,
)
from eventdesk.db.repositories.events import EventRepo, SessionRepo
from eventdesk.db.repositories.expenses import ExpenseRepo
from eventdesk.db.repositories.orders import OrderRepo
from eventdesk.db.repositories.products import ProductRepo
from eventdesk.errors import Forbidden
from eventdesk.services.clock import naive_utc

Cell = str | int | float
Row = list[Cell]


class ExportType(enum.StrEnum):
    expenses = "expenses"
    events = "events"
    sessions = "sessions"
    products = "products"
    registrations = "registrations"
    food_session_wise = "foodSessionWise"
    food_family_wise = "foodFamilyWise"


@dataclass(frozen=True, slots=True)
class Table:
    headers: list[str]
    rows: list[Row]


@dataclass(slots=True)
class _MealTally:
    veg: int = 0
    non_veg: int = 0
    chicken: int = 0
    mutton: int = 0
    fish: int = 0
    total: int = 0
    by_size: dict[PersonSize, int] = field(default_factory=lambda: defaultdict(int))

    def add(self, line: OrderLine) -> None:
        variant = line.variant
        qty = line.quantity or 0
        if variant is not None and variant.subtype == ProductSubtype.dine_in:
            self.by_size[variant.size] += qty
        choice = variant.choice if variant is not None else None
        if choice == MealChoice.veg:
            self.veg += qty
        elif choice == MealChoice.non_veg:
            self.non_veg += qty
            pref = variant.preference if variant is not None else None
            if pref == MealPreference.chicken:
                self.chicken += qty
            elif pref == MealPreference.mutton:
                self.mutton += qty
            elif pref == MealPreference.fish:
                self.fish += qty
        self.total += qty

    def meals(self) -> Row:
        return [self.veg, self.non_veg, self.chicken, self.mutton, self.fish]


def _day(value: Any) -> str:
    return value.isoformat()[:10]


def _food_lines(lines: Iterable[OrderLine]) -> Iterable[OrderLine]:
    return (ln for ln in lines if ln.product is not None and ln.product.kind == ProductKind.food)


class ReportService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._events = EventRepo(session)
        self._sessions = SessionRepo(session)
        self._expenses = ExpenseRepo(session)
        self._products = ProductRepo(session)
        self._orders = OrderRepo(session)

    async def export(
        self,
        *,
        principal: Principal,
        export_type: ExportType,
        event_id: int | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> Table:
        if export_type == ExportType.expenses:
            return await self._expenses_table(principal, event_id, start, end)
        if export_type == ExportType.events:
            if not principal.is_admin:
                raise Forbidden("Admin access required")
            return await self._events_table()
        if export_type == ExportType.sessions:
            return await self._sessions_table(event_id)
        if export_type == ExportType.products:
            return await self._products_table()
        if export_type == ExportType.registrations:
            return await self._registrations_table(event_id)
        if export_type == ExportType.food_session_wise:
            return await self._food_session_table(event_id)
        return await self._food_family_table(event_id)

    async def _expenses_table(
        self,
        principal: Principal,
        event_id: int | None,
        start: datetime | None,
        end: datetime | None,
    ) -> Table:
        headers = ["Date", "Event", "Type", "Vendor", "Amount", "Status", "Incurred By"]
        if not principal.is_admin and principal.member_id is None:
            return Table(headers=headers, rows=[])
        # The created-at window only applies when both ends are given.
        expenses = await self._expenses.list_filtered(
            incurred_by=None if principal.is_admin else principal.member_id,
            event_id=event_id,
            created_from=naive_utc(start) if start and end else None,
            created_to=naive_utc(end) if start and end else None,
        )
        rows: list[Row] = [
            [
                _day(e.created_at),
                e.event.name,
                e.expense_type,
                e.vendor,
                e.amount,
                e.status.value,
                e.member.name,
            ]
            for e in expenses
        ]
        return Table(headers=headers, rows=rows)

    async def _events_table(self) -> Table:
        events = await self._events.list_detailed()
        rows: list[Row] = [
            [
                ev.name,
                _day(ev.start_date),
                _day(ev.end_date),
                ev.venue.address,
                len(ev.sessions),
                round(
                    sum(x.amount for x in ev.expenses if x.status == ExpenseStatus.approved), 2
                ),
            ]
            for ev in events
        ]
        return Table(
            headers=[
                "Event Name",
                "Start Date",
                "End Date",
                "Venue",
                "Sessions Count",
                "Total Expenses",
            ],
            rows=rows,
        )

    async def _sessions_table(self, event_id: int | None) -> Table:
        sessions = await self._sessions.list_filtered(event_id=event_id, newest_first=True)
        rows: list[Row] = [
            [s.name, s.event.name, _day(s.session_date), s.start_time, s.end_time, s.capacity]
            for s in sessions
        ]
        return Table(
            headers=["Session Name", "Event", "Date", "Start Time", "End Time", "Capacity"],
            rows=rows,
        )

    async def _products_table(self) -> Table:
        products = await self._products.list_detailed()
        rows: list[Row] = [
            [p.code, p.name, p.kind.value, p.status.value, len(p.variants)] for p in products
        ]
        return Table(
            headers=["Product Code", "Product Name", "Type", "Status", "Variations Count"],
            rows=rows,
        )

    async def _session_ids(self, event_id: int | None) -> list[int] | None:
        if event_id is None:
            return None
        return [s.id for s in await self._sessions.list_filtered(event_id=event_id)]

    async def _registrations_table(self, event_id: int | None) -> Table:
        orders = await self._orders.list_detailed(session_ids=await self._session_ids(event_id))
        headers = [
            "Order Date", "Transaction ID", "Guest Name", "Guest Email", "Guest Phone",
            "Guest Location", "Adults", "Children", "Infants", "Elders", "Total Family Size",
            "Member Name", "Member Email", "Member Phone",
            "Session Name", "Session Date", "Session Time",
            "Product Name", "Product Type", "Product Size", "Product Choice", "Food Preference",
            "Product Subtype", "Quantity", "Unit Price", "Line Total", "Order Total Cost",
        ]
        rows: list[Row] = []
        for order in orders:
            party = order.guest or order.member
            family = [
                party.adults if party else 0,
                party.children if party else 0,
                party.infants if party else 0,
                party.elder if party else 0,
            ]
            base: Row = [
                _day(order.created_at),
                order.transaction_id,
                (order.guest.name if order.guest else None)
                or (order.member.name if order.member else None)
                or "N/A",
                (order.guest.email if order.guest else None)
                or (order.member.email if order.member else None)
                or "N/A",
                (order.guest.phone if order.guest else None)
                or (order.member.phone if order.member else None)
                or "N/A",
                (order.guest.location if order.guest else None) or "N/A",
                *family,
                sum(family),
                order.member.name if order.member else "N/A",
                order.member.email if order.member else "N/A",
                (order.member.phone if order.member else None) or "N/A",
            ]
            for line in order.lines:
                sess = line.session
                variant = line.variant
                price = variant.price if variant is not None else 0
                rows.append(
                    [
                        *base,
                        sess.name if sess else "No Session",
                        _day(sess.session_date) if sess else "N/A",
                        f"{sess.start_time} - {sess.end_time}" if sess else "N/A",
                        line.product.name,
                        line.product.kind.value,
                        variant.size.value if variant else "N/A",
                        variant.choice.value if variant else "NONE",
                        variant.preference.value if variant else "NONE",
                        variant.subtype.value if variant else "NONE",
                        line.quantity,
                        price,
                        round(price * line.quantity, 2),
                        order.total_cost,
                    ]
                )
        return Table(headers=headers, rows=rows)

    async def _food_session_table(self, event_id: int | None) -> Table:
        sessions = await self._sessions.list_filtered(event_id=event_id)
        ids = [s.id for s in sessions]
        tallies: dict[int, _MealTally] = defaultdict(_MealTally)
        for line in _food_lines(await self._orders.lines_for_sessions(ids)):
            if line.session_id is not None:
                tallies[line.session_id].add(line)

        rows: list[Row] = []
        for s in sessions:
            tally = tallies.get(s.id) or _MealTally()
            rows.append(
                [
                    s.event.name,
                    s.name,
                    _day(s.session_date),
                    f"{s.start_time} - {s.end_time}",
                    *tally.meals(),
                    tally.total,
                ]
            )
        return Table(
            headers=[
                "Event", "Session", "Date", "Time", "No. of Veg", "No. of Non-Veg",
                "No. of Chicken", "Mutton", "Fish", "Total",
            ],
            rows=rows,
        )

    async def _food_family_table(self, event_id: int | None) -> Table:
        sessions = {s.id: s for s in await self._sessions.list_filtered(event_id=event_id)}
        orders = await self._orders.list_detailed(session_ids=sessions, oldest_first=True)

        rows: list[Row] = []
        for order in orders:
            by_session: dict[int, _MealTally] = {}
            for line in order.lines:
                if line.session_id not in sessions:
                    continue
                tally = by_session.setdefault(line.session_id, _MealTally())
                if line.product.kind == ProductKind.food:
                    tally.add(line)

            name = (order.guest.name if order.guest else None) or (
                order.member.name if order.member else ""
            )
            email = (order.guest.email if order.guest else None) or (
                order.member.email if order.member else ""
            )
            for session_id, tally in by_session.items():
                sess = sessions[session_id]
                rows.append(
                    [
                        sess.event.name,
                        sess.name,
                        name,
                        email or "",
                        tally.by_size[PersonSize.adult],
                        tally.by_size[PersonSize.children],
                        tally.by_size[PersonSize.elder],
                        *tally.meals(),
                    ]
                )
        return Table(
            headers=[
                "Event", "Session", "Guest Name", "Guest Email", "Adults", "Children",
                "Elders", "No. of Veg", "No. of Non-Veg", "No. of Chicken", "Mutton", "Fish",
            ],
            rows=rows,
        )


# --- Module Notes -----------------------------------------------------------
# Rendering to a spreadsheet happens client-side; these tables are its input.
